"""Domain models for the video library filesystem."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ResourceKind(str, Enum):
    """Concrete asset within a video that a resolved path denotes."""
    ADAPTIVE_PLAYLIST = "ADAPTIVE_PLAYLIST"
    SEGMENT_FILE = "SEGMENT_FILE"
    THUMBNAIL = "THUMBNAIL"
    ORIGINAL = "ORIGINAL"
    RENDITION = "RENDITION"


@dataclass(frozen=True)
class AdaptivePlaylist:
    """Playback intent: serve the adaptive-streaming manifest."""


@dataclass(frozen=True)
class PreferredRendition:
    """Playback intent: serve a single MP4 rendition, lowest or highest available."""
    lowest_first: bool = False


ADAPTIVE_PLAYLIST = AdaptivePlaylist()


@dataclass(frozen=True)
class CdnAsset:
    """
    Concrete CDN asset a logical path resolved to.

    ``path`` is relative to the pull zone root, e.g. ``{video_id}/playlist.m3u8``.
    """
    video_id: str
    path: str
    kind: ResourceKind
    quality: Optional[str] = None  # Set for RENDITION assets


@dataclass
class VideoEntity:
    """
    Remote video record.

    Owned by the platform: the filesystem reads, creates and deletes videos
    but never updates their fields.
    """
    guid: str
    title: str = ""
    storage_size: int = 0
    date_uploaded: Optional[str] = None  # ISO-8601, as sent by the platform
    available_resolutions: str = ""  # Comma-delimited, e.g. "240p,360p,720p"
    collection_id: Optional[str] = None
    length: Optional[int] = None  # Seconds

    @classmethod
    def from_api(cls, data: dict) -> "VideoEntity":
        """Build from the platform's JSON representation."""
        return cls(
            guid=data["guid"],
            title=data.get("title") or "",
            storage_size=int(data.get("storageSize") or 0),
            date_uploaded=data.get("dateUploaded"),
            available_resolutions=data.get("availableResolutions") or "",
            collection_id=data.get("collectionId") or None,
            length=data.get("length"),
        )

    @property
    def resolutions(self) -> list[str]:
        """Available resolutions in the order the platform lists them."""
        return [r.strip() for r in self.available_resolutions.split(",") if r.strip()]

    @property
    def uploaded_at(self) -> Optional[datetime]:
        """Upload time as an aware datetime (naive platform timestamps are UTC)."""
        if not self.date_uploaded:
            return None
        value = self.date_uploaded
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


@dataclass
class CollectionEntity:
    """Remote collection record. The name doubles as the directory path."""
    guid: str
    name: str
    video_count: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "CollectionEntity":
        """Build from the platform's JSON representation."""
        return cls(
            guid=data["guid"],
            name=data.get("name") or "",
            video_count=int(data.get("videoCount") or 0),
        )
