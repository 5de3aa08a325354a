"""
Logical path resolution.

Turns user-facing slash-delimited paths into video identifiers and
concrete CDN asset paths. Everything here is pure except the
``fetch_video`` callable handed to :func:`resolve_cdn_asset`.

Path shapes understood by :func:`resolve_video_id`::

    {video_id}
    {collection}/{video_id}
    {collection}/{video_id}/playlist.m3u8
    {collection}/{video_id}/360p/video.m3u8
    {video_id}/360p/video0.ts
    {collection}/{video_id}/seek/_0.jpg

where ``{collection}`` may itself contain slashes.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

from domain.models import (
    AdaptivePlaylist,
    CdnAsset,
    PreferredRendition,
    ResourceKind,
    VideoEntity,
)
from ports.adapter_error import RemoteNotFoundError

logger = logging.getLogger(__name__)

PLAYLIST_FILENAME = "playlist.m3u8"
ORIGINAL_SENTINEL = "original"
STREAM_SUFFIXES = ("video.m3u8", ".ts")
SEEK_SEGMENT = "/seek/"
THUMBNAIL_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")

LOW_TIERS = ("low", "lowest")
MEDIUM_TIERS = ("mid", "medium")
HIGH_TIERS = ("high", "highest")

_EXPLICIT_QUALITY = re.compile(r"[0-9]+p")
_LEADING_DIGITS = re.compile(r"^\s*(\d+)")
_RENDITION_FILE = re.compile(r"^play_(?P<quality>.+)\.mp4$")

PlaybackMode = Union[AdaptivePlaylist, PreferredRendition]


def normalize_path(path: Optional[str]) -> Optional[str]:
    """
    Trim one leading and one trailing slash.

    Returns None for None input and for a path that collapses to a lone
    slash. Repeated edge slashes are trimmed by re-applying the pass, so
    the result never starts or ends with a slash.
    """
    if path is None:
        return None
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]
    if path == "/":
        return None
    if path.startswith("/") or path.endswith("/"):
        return normalize_path(path)
    return path


def _before_last(path: str, separator: str = "/") -> str:
    # Whole string when the separator is absent.
    return path.rsplit(separator, 1)[0]


def _after_last(path: str, separator: str = "/") -> str:
    # Whole string when the separator is absent.
    return path.rsplit(separator, 1)[-1]


def basename(path: str) -> str:
    """Final slash-delimited segment."""
    return _after_last(path)


def looks_like_file(path: Optional[str]) -> bool:
    """True when the final segment carries a dot (``name.ext``)."""
    return bool(path) and "." in basename(path)


def strip_filename(path: Optional[str]) -> Optional[str]:
    """Drop the final segment when it looks like a filename."""
    if path is None:
        return None
    if looks_like_file(path):
        return _before_last(path) if "/" in path else ""
    return path


@dataclass(frozen=True)
class PathRule:
    """One step of video id extraction: a predicate and the rewrite it triggers."""
    name: str
    matches: Callable[[str], bool]
    apply: Callable[[str], str]

    def __call__(self, path: str) -> str:
        if self.matches(path):
            return self.apply(path)
        return path


# Order matters: each rule sees the output of the previous one.
VIDEO_ID_RULES = (
    PathRule(
        name="stream_segment",
        matches=lambda p: p.endswith(STREAM_SUFFIXES),
        apply=lambda p: _before_last(_before_last(p)),
    ),
    PathRule(
        name="seek_frame",
        matches=lambda p: SEEK_SEGMENT in p and "." in basename(p),
        apply=lambda p: _before_last(_before_last(p)),
    ),
    PathRule(
        name="direct_file",
        matches=lambda p: "." in basename(p) or ("/" in p and basename(p) == ORIGINAL_SENTINEL),
        apply=_before_last,
    ),
    PathRule(
        name="collection_prefix",
        matches=lambda p: "/" in p,
        apply=_after_last,
    ),
)


def resolve_video_id(path: Optional[str]) -> str:
    """
    Deduce the video identifier a logical path refers to.

    Never talks to the platform: a path naming a video that does not
    exist still yields an id, and the remote call made with it fails.
    """
    resolved = normalize_path(path) or ""
    for rule in VIDEO_ID_RULES:
        resolved = rule(resolved)
    return resolved


def classify_resource(path: str) -> ResourceKind:
    """Tag a path that pins a concrete asset."""
    name = basename(path)
    if name == ORIGINAL_SENTINEL:
        return ResourceKind.ORIGINAL
    if name.endswith(".ts"):
        return ResourceKind.SEGMENT_FILE
    if name.endswith(".m3u8"):
        return ResourceKind.ADAPTIVE_PLAYLIST
    if _RENDITION_FILE.match(name):
        return ResourceKind.RENDITION
    if SEEK_SEGMENT in f"/{path}" or name.startswith("thumbnail") or name.lower().endswith(THUMBNAIL_EXTENSIONS):
        return ResourceKind.THUMBNAIL
    return ResourceKind.ORIGINAL


def resolution_height(resolution: str) -> int:
    """Numeric value of a resolution token ("720p" -> 720, junk -> 0)."""
    match = _LEADING_DIGITS.match(resolution)
    return int(match.group(1)) if match else 0


def _medium_index(count: int) -> int:
    # round(n/2 - 1), ties rounded up, never below the first entry.
    return max(0, math.floor(count / 2 - 1 + 0.5))


def is_explicit_quality(quality: str) -> bool:
    """True for "720p"-style tokens that name a rendition directly."""
    return bool(_EXPLICIT_QUALITY.search(quality))


def select_rendition(quality: str, resolutions: list[str]) -> str:
    """
    Pick the rendition token for a quality tier.

    ``"720p"``-style tokens are returned verbatim without looking at the
    available list. Named tiers (low/lowest, mid/medium, high/highest)
    index into the numerically sorted list. Anything else, including a
    named tier when nothing is available, is returned unchanged and left
    for the CDN to reject.
    """
    if is_explicit_quality(quality):
        return quality

    ordered = sorted(resolutions, key=resolution_height)
    if not ordered:
        return quality

    if quality in LOW_TIERS:
        return ordered[0]
    if quality in MEDIUM_TIERS:
        return ordered[_medium_index(len(ordered))]
    if quality in HIGH_TIERS:
        return ordered[-1]
    return quality


def rendition_path(video_id: str, quality: str) -> str:
    """CDN path of an MP4 rendition."""
    return f"{video_id}/play_{quality}.mp4"


def resolve_cdn_asset(
    path: str,
    mode: PlaybackMode,
    fetch_video: Optional[Callable[[str], VideoEntity]] = None,
) -> CdnAsset:
    """
    Resolve a logical path to the CDN asset it should be served from.

    Args:
        path: Logical path in any shape accepted by resolve_video_id.
        mode: AdaptivePlaylist, or PreferredRendition(lowest_first).
        fetch_video: Looks up a video by id. Called only for
            PreferredRendition when the path does not pin an asset.

    Returns:
        CdnAsset with a pull-zone relative path.

    Raises:
        RemoteNotFoundError: If the video lists no renditions.
    """
    normalized = normalize_path(path) or ""
    video_id = resolve_video_id(normalized)
    name = basename(normalized)

    if "." in name or name == ORIGINAL_SENTINEL:
        asset_path = f"{video_id}/" + _after_last(normalized, f"{video_id}/")
        kind = classify_resource(asset_path)
        quality = None
        if kind == ResourceKind.RENDITION:
            quality = _RENDITION_FILE.match(basename(asset_path)).group("quality")
        logger.debug(f"Direct asset path: {path} -> {asset_path} ({kind.value})")
        return CdnAsset(video_id=video_id, path=asset_path, kind=kind, quality=quality)

    if isinstance(mode, AdaptivePlaylist):
        return CdnAsset(
            video_id=video_id,
            path=f"{video_id}/{PLAYLIST_FILENAME}",
            kind=ResourceKind.ADAPTIVE_PLAYLIST,
        )

    if fetch_video is None:
        raise ValueError("fetch_video is required to resolve a preferred rendition")

    resolutions = fetch_video(video_id).resolutions
    if not resolutions:
        raise RemoteNotFoundError(
            f"Video has no renditions available: {video_id}",
            details={"video_id": video_id},
        )

    decided = resolutions[0] if mode.lowest_first else resolutions[-1]
    logger.debug(f"Picked rendition {decided} for {video_id} from {resolutions}")
    return CdnAsset(
        video_id=video_id,
        path=rendition_path(video_id, decided),
        kind=ResourceKind.RENDITION,
        quality=decided,
    )


def resolve_cdn_asset_path(
    path: str,
    mode: PlaybackMode,
    fetch_video: Optional[Callable[[str], VideoEntity]] = None,
) -> str:
    """Pull-zone relative path of the asset a logical path resolves to."""
    return resolve_cdn_asset(path, mode, fetch_video).path
