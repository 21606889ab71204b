"""Asset lifecycle: blob cleanup for removed or replaced references."""

import asyncio
import logging
from typing import List, Optional

from lifestory.core.errors import BlobStoreError
from lifestory.core.storage import BlobStore
from lifestory.models.library import Episode, Season, Series

logger = logging.getLogger(__name__)


def collect_episode_assets(episode: Episode) -> List[str]:
    """Return every asset reference held by an episode.

    Order is thumbnail, music, then each media url; unset references are
    skipped.
    """
    refs = []
    if episode.thumbnail:
        refs.append(episode.thumbnail)
    if episode.music:
        refs.append(episode.music)
    refs.extend(m.url for m in episode.media if m.url)
    return refs


def collect_season_assets(season: Season) -> List[str]:
    refs = []
    for episode in season.episodes:
        refs.extend(collect_episode_assets(episode))
    return refs


def collect_series_assets(series: Series) -> List[str]:
    refs = [series.thumbnail] if series.thumbnail else []
    for season in series.seasons:
        refs.extend(collect_season_assets(season))
    return refs


class AssetLifecycle:
    """Issues best-effort blob deletions for orphaned asset references.

    Failures are logged and never raised: the document mutation that
    orphaned the asset is authoritative and proceeds regardless.
    """

    def __init__(self, store: BlobStore):
        self.store = store

    async def delete_asset(self, ref: Optional[str]) -> bool:
        """Delete the blob behind ``ref``. Returns True if a delete was issued."""
        if not ref:
            return False

        key = self.store.key_from_url(ref)
        if key is None:
            logger.debug("Skipping asset outside the blob store: %s", ref)
            return False

        try:
            await asyncio.to_thread(self.store.delete, key)
        except BlobStoreError as exc:
            logger.error("Error deleting asset '%s': %s", key, exc)
        except Exception as exc:
            logger.exception("Unexpected error deleting asset '%s': %s", key, exc)
        return True

    async def replace_asset(
        self, old_ref: Optional[str], new_ref: Optional[str]
    ) -> Optional[str]:
        """Delete ``old_ref`` ahead of the caller assigning ``new_ref``."""
        if old_ref and old_ref != new_ref:
            await self.delete_asset(old_ref)
        return new_ref

    async def _delete_all(self, refs: List[str]) -> int:
        issued = 0
        for ref in refs:
            if await self.delete_asset(ref):
                issued += 1
        return issued

    async def cascade_delete_episode(self, episode: Episode) -> int:
        return await self._delete_all(collect_episode_assets(episode))

    async def cascade_delete_season(self, season: Season) -> int:
        return await self._delete_all(collect_season_assets(season))

    async def cascade_delete_series(self, series: Series) -> int:
        """Delete the series thumbnail and every descendant's assets."""
        issued = await self._delete_all(collect_series_assets(series))
        logger.info("Removed %d asset(s) for series %s", issued, series.id)
        return issued
