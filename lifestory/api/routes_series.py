"""Series routes: documents, seasons, episodes and media edits."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from lifestory.api.deps import get_assets, get_collection
from lifestory.models.library import (
    EpisodeCreate,
    ReorderRequest,
    SeasonCreate,
    SeriesCreate,
    SeriesUpdate,
)
from lifestory.services.assets import AssetLifecycle
from lifestory.services.collection import CollectionManager, build_series
from lifestory.services.repository import SeriesRepository, get_series_repository

router = APIRouter(prefix="/series", tags=["series"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_series(
    repo: SeriesRepository = Depends(get_series_repository),
) -> List[dict]:
    """List all series, newest first."""
    return [s.to_json() for s in repo.list()]


@router.get("/{series_id}")
async def get_series(
    series_id: str, repo: SeriesRepository = Depends(get_series_repository)
):
    return repo.load(series_id).to_json()


@router.post("")
async def create_series(
    payload: Optional[SeriesCreate] = None,
    repo: SeriesRepository = Depends(get_series_repository),
):
    """Create a series pre-filled with placeholder seasons and episodes."""
    payload = payload or SeriesCreate()
    series = build_series(
        title=payload.title,
        description=payload.description,
        season_count=payload.season_count,
        episodes_per_season=payload.episodes_per_season,
    )
    series = repo.create(series)
    logger.info(
        "Created series %s with %d season(s)", series.id, len(series.seasons)
    )
    return {"success": True, "series": series.to_json()}


@router.put("/{series_id}")
async def update_series(
    series_id: str,
    payload: SeriesUpdate,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    """Update titles and descriptions; seasons/episodes match by position."""
    series = repo.load(series_id)
    collection.apply_update(series, payload)
    series = repo.save(series)
    return {"success": True, "series": series.to_json()}


@router.delete("/{series_id}")
async def delete_series(
    series_id: str,
    repo: SeriesRepository = Depends(get_series_repository),
    assets: AssetLifecycle = Depends(get_assets),
):
    """Delete a series along with every stored asset it references."""
    series = repo.load(series_id)
    await assets.cascade_delete_series(series)
    repo.delete(series_id)
    return {"success": True}


# --- Seasons ---


@router.post("/{series_id}/seasons")
async def add_season(
    series_id: str,
    payload: Optional[SeasonCreate] = None,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    series = repo.load(series_id)
    collection.add_season(series, payload.episode_count if payload else None)
    series = repo.save(series)
    return {"success": True, "series": series.to_json()}


@router.delete("/{series_id}/seasons/{season_index}")
async def remove_season(
    series_id: str,
    season_index: int,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    series = repo.load(series_id)
    await collection.remove_season(series, season_index)
    series = repo.save(series)
    return {"success": True, "series": series.to_json()}


# --- Episodes ---


@router.post("/{series_id}/seasons/{season_index}/episodes")
async def add_episode(
    series_id: str,
    season_index: int,
    payload: Optional[EpisodeCreate] = None,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    series = repo.load(series_id)
    collection.add_episode(
        series, season_index, payload.episode_count if payload else 1
    )
    series = repo.save(series)
    return {"success": True, "series": series.to_json()}


@router.delete("/{series_id}/seasons/{season_index}/episodes/{episode_index}")
async def remove_episode(
    series_id: str,
    season_index: int,
    episode_index: int,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    series = repo.load(series_id)
    await collection.remove_episode(series, season_index, episode_index)
    series = repo.save(series)
    return {"success": True, "series": series.to_json()}


# --- Music & media ---


@router.delete("/{series_id}/music/{season_index}/{episode_index}")
async def delete_music(
    series_id: str,
    season_index: int,
    episode_index: int,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    series = repo.load(series_id)
    await collection.clear_music(series, season_index, episode_index)
    repo.save(series)
    return {"success": True}


@router.delete("/{series_id}/media/{season_index}/{episode_index}/{media_id}")
async def delete_media(
    series_id: str,
    season_index: int,
    episode_index: int,
    media_id: str,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    series = repo.load(series_id)
    episode = collection.resolve_episode(series, season_index, episode_index)
    await collection.remove_media(episode, media_id)
    repo.save(series)
    return {"success": True}


@router.put("/{series_id}/reorder/{season_index}/{episode_index}")
async def reorder_media(
    series_id: str,
    season_index: int,
    episode_index: int,
    payload: ReorderRequest,
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
):
    """Reorder an episode's media; ids left out of the list are dropped."""
    series = repo.load(series_id)
    episode = collection.resolve_episode(series, season_index, episode_index)
    media = collection.reorder_media(episode, payload.media_ids)
    repo.save(series)
    return {"success": True, "media": [m.to_json() for m in media]}
