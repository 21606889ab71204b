"""Series documents: seasons, episodes and their media."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid4().hex


class LibraryModel(BaseModel):
    """Base model serialised with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class MediaType(str, Enum):
    """Kind of an uploaded media item."""

    IMAGE = "image"
    VIDEO = "video"


class Media(LibraryModel):
    """An image or video attached to an episode."""

    id: str = Field(default_factory=new_id)
    filename: str  # storage key
    original_name: str = ""
    type: MediaType
    url: str


class Episode(LibraryModel):
    """An episode within a season."""

    title: str = "Episode"
    thumbnail: Optional[str] = None
    description: str = ""
    music: Optional[str] = None
    music_original_name: Optional[str] = None
    media: List[Media] = []


class Season(LibraryModel):
    """A season of a series."""

    title: str = "Season 1"
    episodes: List[Episode] = []


class Series(LibraryModel):
    """A series document, loaded and saved as one unit."""

    id: str = Field(default_factory=new_id)
    title: str = "My Story"
    description: str = ""
    thumbnail: Optional[str] = None
    seasons: List[Season] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Request bodies ---


class SeriesCreate(LibraryModel):
    title: Optional[str] = None
    description: Optional[str] = None
    season_count: Optional[int] = None
    episodes_per_season: Optional[int] = None


class EpisodeUpdate(LibraryModel):
    title: Optional[str] = None
    description: Optional[str] = None


class SeasonUpdate(LibraryModel):
    title: Optional[str] = None
    episodes: Optional[List[EpisodeUpdate]] = None


class SeriesUpdate(LibraryModel):
    """Partial update addressed positionally onto the existing tree."""

    title: Optional[str] = None
    description: Optional[str] = None
    seasons: Optional[List[SeasonUpdate]] = None


class SeasonCreate(LibraryModel):
    episode_count: Optional[int] = None


class EpisodeCreate(LibraryModel):
    episode_count: Optional[int] = None


class ReorderRequest(LibraryModel):
    media_ids: List[str]
