"""Mutations on the series → season → episode → media tree.

Seasons and episodes are addressed by 0-based position in the live sequence;
every lookup goes through :meth:`CollectionManager.resolve_season` or
:meth:`CollectionManager.resolve_episode`. Operations mutate the loaded
document in place and leave persistence to the caller.
"""

import logging
from typing import List, Optional

from lifestory.core.errors import (
    CapacityExceededError,
    MinimumCardinalityError,
    NotFoundError,
    OutOfRangeError,
)
from lifestory.models.library import (
    Episode,
    Media,
    Season,
    Series,
    SeriesUpdate,
)
from lifestory.services.assets import AssetLifecycle

logger = logging.getLogger(__name__)

MAX_SEASONS = 10
MAX_EPISODES = 10


def clamp_count(value: Optional[int], low: int = 1, high: int = 10) -> int:
    """Clamp a requested count, treating missing or zero as ``low``."""
    return min(max(value or low, low), high)


def new_episode(number: int) -> Episode:
    return Episode(title=f"Episode {number}")


def new_season(number: int, episode_count: int) -> Season:
    return Season(
        title=f"Season {number}",
        episodes=[new_episode(i + 1) for i in range(episode_count)],
    )


def build_series(
    title: Optional[str] = None,
    description: Optional[str] = None,
    season_count: Optional[int] = None,
    episodes_per_season: Optional[int] = None,
) -> Series:
    """Build a new series filled with placeholder seasons and episodes."""
    num_seasons = clamp_count(season_count, 1, MAX_SEASONS)
    num_episodes = clamp_count(episodes_per_season, 1, MAX_EPISODES)
    return Series(
        title=title or "My Story",
        description=description or "",
        seasons=[new_season(si + 1, num_episodes) for si in range(num_seasons)],
    )


class CollectionManager:
    """Applies add/remove/reorder operations to a loaded series."""

    def __init__(self, assets: AssetLifecycle):
        self.assets = assets

    # --- Addressing ---

    @staticmethod
    def locate_episode(
        series: Series, season_index: int, episode_index: int
    ) -> Episode | None:
        """Return the episode at the given position, or None if out of range."""
        if not 0 <= season_index < len(series.seasons):
            return None
        season = series.seasons[season_index]
        if not 0 <= episode_index < len(season.episodes):
            return None
        return season.episodes[episode_index]

    @staticmethod
    def resolve_season(series: Series, season_index: int) -> Season:
        if not 0 <= season_index < len(series.seasons):
            raise OutOfRangeError("Invalid season index")
        return series.seasons[season_index]

    def resolve_episode(
        self, series: Series, season_index: int, episode_index: int
    ) -> Episode:
        episode = self.locate_episode(series, season_index, episode_index)
        if episode is None:
            raise OutOfRangeError("Invalid season or episode index")
        return episode

    # --- Seasons ---

    def add_season(self, series: Series, episode_count: Optional[int] = None) -> Season:
        if len(series.seasons) >= MAX_SEASONS:
            raise CapacityExceededError(f"Maximum {MAX_SEASONS} seasons allowed")

        season = new_season(
            len(series.seasons) + 1, clamp_count(episode_count, 1, MAX_EPISODES)
        )
        series.seasons.append(season)
        return season

    async def remove_season(self, series: Series, season_index: int) -> Season:
        season = self.resolve_season(series, season_index)
        if len(series.seasons) <= 1:
            raise MinimumCardinalityError("Cannot delete the last season")

        await self.assets.cascade_delete_season(season)
        return series.seasons.pop(season_index)

    # --- Episodes ---

    def add_episode(
        self, series: Series, season_index: int, episode_count: Optional[int] = 1
    ) -> List[Episode]:
        """Append episodes to a season, up to its remaining capacity."""
        season = self.resolve_season(series, season_index)
        remaining = MAX_EPISODES - len(season.episodes)
        if remaining <= 0:
            raise CapacityExceededError(
                f"Maximum {MAX_EPISODES} episodes per season"
            )

        added = []
        for _ in range(clamp_count(episode_count, 1, remaining)):
            episode = new_episode(len(season.episodes) + 1)
            season.episodes.append(episode)
            added.append(episode)
        return added

    async def remove_episode(
        self, series: Series, season_index: int, episode_index: int
    ) -> Episode:
        season = self.resolve_season(series, season_index)
        if not 0 <= episode_index < len(season.episodes):
            raise OutOfRangeError("Invalid episode index")
        if len(season.episodes) <= 1:
            raise MinimumCardinalityError(
                "Cannot delete the last episode in a season"
            )

        await self.assets.cascade_delete_episode(season.episodes[episode_index])
        return season.episodes.pop(episode_index)

    # --- Media ---

    @staticmethod
    def attach_media(episode: Episode, items: List[Media]) -> List[Media]:
        episode.media.extend(items)
        return items

    @staticmethod
    def reorder_media(episode: Episode, ordered_ids: List[str]) -> List[Media]:
        """Rebuild the media sequence in the order of ``ordered_ids``.

        Items whose id is not listed are dropped from the sequence; their
        blobs are left in storage. Unknown ids are ignored and a repeated id
        keeps only its first position.
        """
        by_id = {m.id: m for m in episode.media}
        reordered = []
        for media_id in ordered_ids:
            media = by_id.pop(media_id, None)
            if media is not None:
                reordered.append(media)

        if by_id:
            logger.info(
                "Reorder dropped %d media item(s) not named in the request",
                len(by_id),
            )
        episode.media = reordered
        return reordered

    async def remove_media(self, episode: Episode, media_id: str) -> Media:
        for index, media in enumerate(episode.media):
            if media.id == media_id:
                break
        else:
            raise NotFoundError("Media not found")

        await self.assets.delete_asset(media.url)
        return episode.media.pop(index)

    async def clear_music(
        self, series: Series, season_index: int, episode_index: int
    ) -> Episode:
        episode = self.resolve_episode(series, season_index, episode_index)
        await self.assets.delete_asset(episode.music)
        episode.music = None
        episode.music_original_name = None
        return episode

    # --- Field updates ---

    @staticmethod
    def apply_update(series: Series, update: SeriesUpdate) -> Series:
        """Apply titles and descriptions positionally; never changes counts."""
        if update.title:
            series.title = update.title
        if update.description is not None:
            series.description = update.description

        for si, season_data in enumerate(update.seasons or []):
            if si >= len(series.seasons):
                break
            season = series.seasons[si]
            if season_data.title is not None:
                season.title = season_data.title
            for ei, episode_data in enumerate(season_data.episodes or []):
                if ei >= len(season.episodes):
                    break
                episode = season.episodes[ei]
                if episode_data.title is not None:
                    episode.title = episode_data.title
                if episode_data.description is not None:
                    episode.description = episode_data.description
        return series
