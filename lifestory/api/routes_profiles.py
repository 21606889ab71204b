"""Profile CRUD routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from lifestory.core.database import get_session
from lifestory.core.errors import NotFoundError
from lifestory.models.records import (
    Profile,
    ProfileCreate,
    ProfileRead,
    ProfileUpdate,
    utcnow,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _dump(profile: Profile) -> dict:
    return ProfileRead.model_validate(profile.model_dump()).to_json()


def _get_or_404(session: Session, profile_id: str) -> Profile:
    profile = session.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


@router.get("")
async def list_profiles(session: Session = Depends(get_session)) -> List[dict]:
    """List all profiles, oldest first."""
    profiles = session.exec(select(Profile).order_by(Profile.created_at)).all()
    return [_dump(p) for p in profiles]


@router.post("")
async def create_profile(
    payload: Optional[ProfileCreate] = None,
    session: Session = Depends(get_session),
):
    """Create a profile, filling unset fields with defaults."""
    payload = payload or ProfileCreate()
    profile = Profile(**payload.model_dump(exclude_none=True))
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return {"success": True, "profile": _dump(profile)}


@router.get("/{profile_id}")
async def get_profile(profile_id: str, session: Session = Depends(get_session)):
    return _dump(_get_or_404(session, profile_id))


@router.put("/{profile_id}")
async def update_profile(
    profile_id: str,
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
):
    """Update the fields present in the request body."""
    profile = _get_or_404(session, profile_id)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(profile, field, value)
    profile.updated_at = utcnow()
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return {"success": True, "profile": _dump(profile)}


@router.delete("/{profile_id}")
async def delete_profile(profile_id: str, session: Session = Depends(get_session)):
    profile = _get_or_404(session, profile_id)
    session.delete(profile)
    session.commit()
    return {"success": True}
