"""Database tables for profiles and series documents."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from lifestory.models.library import LibraryModel, new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(SQLModel, table=True):
    """A viewer profile."""

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = "New Profile"
    avatar: str = "😊"
    color: str = "#e50914"
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class SeriesRecord(SQLModel, table=True):
    """A series row; the season/episode/media tree lives in one JSON column."""

    __tablename__ = "series"

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str = "My Story"
    description: str = ""
    thumbnail: Optional[str] = None
    seasons: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


# --- Profile payloads ---


class ProfileRead(LibraryModel):
    id: str
    name: str
    avatar: str
    color: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileCreate(LibraryModel):
    name: Optional[str] = None
    avatar: Optional[str] = None
    color: Optional[str] = None


class ProfileUpdate(LibraryModel):
    name: Optional[str] = None
    avatar: Optional[str] = None
    color: Optional[str] = None
