"""Upload routes for series and episode assets.

Files are validated before the series is loaded and only put into the blob
store once the target episode has resolved.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from lifestory.api.deps import get_assets, get_collection, get_uploads
from lifestory.services.assets import AssetLifecycle
from lifestory.services.collection import CollectionManager
from lifestory.services.repository import SeriesRepository, get_series_repository
from lifestory.services.uploads import (
    EPISODE_MEDIA,
    EPISODE_MUSIC,
    EPISODE_THUMBNAIL,
    SERIES_THUMBNAIL,
    UploadService,
    validate_uploads,
)

router = APIRouter(prefix="/series/{series_id}/upload", tags=["uploads"])
logger = logging.getLogger(__name__)


@router.post("/thumbnail")
async def upload_series_thumbnail(
    series_id: str,
    thumbnail: Optional[UploadFile] = File(None),
    repo: SeriesRepository = Depends(get_series_repository),
    assets: AssetLifecycle = Depends(get_assets),
    uploads: UploadService = Depends(get_uploads),
):
    """Upload a series thumbnail, replacing any existing one."""
    (upload,) = validate_uploads(SERIES_THUMBNAIL, [thumbnail])
    series = repo.load(series_id)

    stored = await uploads.store_file(SERIES_THUMBNAIL, upload)
    series.thumbnail = await assets.replace_asset(series.thumbnail, stored.url)
    repo.save(series)

    logger.info("Series %s thumbnail uploaded: %s", series_id, stored.url)
    return {"success": True, "filename": stored.key, "url": stored.url}


@router.post("/thumbnail/{season_index}/{episode_index}")
async def upload_episode_thumbnail(
    series_id: str,
    season_index: int,
    episode_index: int,
    thumbnail: Optional[UploadFile] = File(None),
    repo: SeriesRepository = Depends(get_series_repository),
    assets: AssetLifecycle = Depends(get_assets),
    collection: CollectionManager = Depends(get_collection),
    uploads: UploadService = Depends(get_uploads),
):
    """Upload an episode thumbnail, replacing any existing one."""
    (upload,) = validate_uploads(EPISODE_THUMBNAIL, [thumbnail])
    series = repo.load(series_id)
    episode = collection.resolve_episode(series, season_index, episode_index)

    stored = await uploads.store_file(EPISODE_THUMBNAIL, upload)
    episode.thumbnail = await assets.replace_asset(episode.thumbnail, stored.url)
    repo.save(series)

    logger.info(
        "S%dE%d thumbnail uploaded to series %s: %s",
        season_index,
        episode_index,
        series_id,
        stored.url,
    )
    return {"success": True, "filename": stored.key, "url": stored.url}


@router.post("/media/{season_index}/{episode_index}")
async def upload_episode_media(
    series_id: str,
    season_index: int,
    episode_index: int,
    media: Optional[List[UploadFile]] = File(None),
    repo: SeriesRepository = Depends(get_series_repository),
    collection: CollectionManager = Depends(get_collection),
    uploads: UploadService = Depends(get_uploads),
):
    """Append uploaded images and videos to an episode, in upload order."""
    files = validate_uploads(EPISODE_MEDIA, media)
    series = repo.load(series_id)
    episode = collection.resolve_episode(series, season_index, episode_index)

    new_media = collection.attach_media(episode, await uploads.store_media(files))
    repo.save(series)

    logger.info(
        "%d media file(s) uploaded to S%dE%d of series %s",
        len(new_media),
        season_index,
        episode_index,
        series_id,
    )
    return {"success": True, "files": [m.to_json() for m in new_media]}


@router.post("/music/{season_index}/{episode_index}")
async def upload_episode_music(
    series_id: str,
    season_index: int,
    episode_index: int,
    music: Optional[UploadFile] = File(None),
    repo: SeriesRepository = Depends(get_series_repository),
    assets: AssetLifecycle = Depends(get_assets),
    collection: CollectionManager = Depends(get_collection),
    uploads: UploadService = Depends(get_uploads),
):
    """Upload episode music, replacing any existing track."""
    (upload,) = validate_uploads(EPISODE_MUSIC, [music])
    series = repo.load(series_id)
    episode = collection.resolve_episode(series, season_index, episode_index)

    stored = await uploads.store_file(EPISODE_MUSIC, upload)
    episode.music = await assets.replace_asset(episode.music, stored.url)
    episode.music_original_name = stored.original_name
    repo.save(series)

    logger.info(
        "Music '%s' uploaded to S%dE%d of series %s",
        stored.original_name,
        season_index,
        episode_index,
        series_id,
    )
    return {
        "success": True,
        "filename": stored.key,
        "originalName": stored.original_name,
        "url": stored.url,
    }
