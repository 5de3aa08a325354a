"""Bunny Stream filesystem adapter."""
from __future__ import annotations

import logging
from typing import Any, BinaryIO, Callable, Iterable, Optional

from domain.directories import CollectionResolver, is_success_status
from domain.models import ADAPTIVE_PLAYLIST, PreferredRendition, VideoEntity
from domain.paths import (
    ORIGINAL_SENTINEL,
    PLAYLIST_FILENAME,
    basename,
    is_explicit_quality,
    looks_like_file,
    normalize_path,
    rendition_path,
    resolve_cdn_asset_path,
    resolve_video_id,
    select_rendition,
)
from domain.upload_service import UploadService
from ports.adapter_error import UnsupportedOperationError
from ports.cdn_client import CdnClient
from ports.filesystem import CloudFilesystem
from ports.stream_api import StreamApi

logger = logging.getLogger(__name__)


class BunnyStreamFilesystem(CloudFilesystem):
    """
    Filesystem view of a Bunny Stream video library.

    Directories are collections (named by their full path), files are
    videos. A file path may point at the video itself or at any asset
    under it (playlist, segment, thumbnail, rendition, original); reads
    resolve it to the matching CDN asset.
    """

    def __init__(
        self,
        api: StreamApi,
        cdn: CdnClient,
        items_per_page: int = 1000,
    ):
        """
        Initialize filesystem adapter.

        Args:
            api: Management API of the library.
            cdn: Reader for the library's pull zone.
            items_per_page: Page size for listings and directory searches.
        """
        self.api = api
        self.cdn = cdn
        self.collections = CollectionResolver(api, items_per_page=items_per_page)
        self.uploads = UploadService(api, self.collections)
        # Named extension operations registered on this filesystem only.
        self._operations: dict[str, Callable[..., Any]] = {}

    @property
    def cdn_base_url(self) -> str:
        return self.cdn.base_url

    def get_video(self, path: str) -> VideoEntity:
        """Fetch the video record a path refers to."""
        return self.api.get_video(resolve_video_id(path))

    # Path translation

    def url(self, path: str) -> str:
        """Playback URL: the adaptive playlist, or the pinned asset."""
        return f"{self.cdn_base_url}/{resolve_cdn_asset_path(path, ADAPTIVE_PLAYLIST)}"

    def path(self, path: str) -> str:
        return resolve_video_id(path)

    # Metadata

    def exists(self, path: str) -> bool:
        """Check if the video behind a path exists."""
        try:
            return bool(self.get_video(path).guid)
        except Exception as e:
            logger.debug(f"File exists check: {path} -> False ({e})")
            return False

    def size(self, path: str) -> int:
        return self.get_video(path).storage_size

    def last_modified(self, path: str) -> int:
        uploaded_at = self.get_video(path).uploaded_at
        return int(uploaded_at.timestamp()) if uploaded_at else 0

    # Reads

    def get(self, path: str) -> bytes | None:
        """Read the pinned asset, or the highest MP4 rendition of the video."""
        asset_path = resolve_cdn_asset_path(
            path, PreferredRendition(lowest_first=False), self.api.get_video
        )
        return self.cdn.get_contents(asset_path)

    def read_stream(self, path: str) -> BinaryIO:
        asset_path = resolve_cdn_asset_path(
            path, PreferredRendition(lowest_first=False), self.api.get_video
        )
        return self.cdn.open_stream(asset_path)

    def get_hls(self, path: str) -> bytes | None:
        """Adaptive playlist of the video behind a path."""
        return self.cdn.get_contents(f"{resolve_video_id(path)}/{PLAYLIST_FILENAME}")

    def get_original(self, path: str) -> bytes | None:
        """Originally uploaded file of the video behind a path."""
        return self.cdn.get_contents(f"{resolve_video_id(path)}/{ORIGINAL_SENTINEL}")

    def get_mp4(self, path: str, quality: str) -> bytes | None:
        """
        MP4 rendition of the video behind a path.

        Args:
            quality: "720p"-style token (used as is, no lookup), or one of
                     low/lowest, mid/medium, high/highest.
        """
        video_id = resolve_video_id(path)
        if is_explicit_quality(quality):
            decided = quality
        else:
            decided = select_rendition(quality, self.api.get_video(video_id).resolutions)
        logger.debug(f"MP4 quality {quality} for {video_id} -> {decided}")
        return self.cdn.get_contents(rendition_path(video_id, decided))

    def get_mp4_low(self, path: str) -> bytes | None:
        return self.get_mp4(path, "low")

    def get_mp4_medium(self, path: str) -> bytes | None:
        return self.get_mp4(path, "medium")

    def get_mp4_high(self, path: str) -> bytes | None:
        return self.get_mp4(path, "high")

    # Writes

    def put(self, path: str, contents: Any) -> str | None:
        """Upload contents; a filename at the end of path becomes the title."""
        return self.put_file_as(path, contents, _title_from_path(path))

    def put_file(self, path: Any, file: Any = None) -> str | None:
        """Upload a file into a directory, or to the root when called with one argument."""
        if file is None:
            path, file = "", path
        return self.put_file_as(path, file, _title_from_path(path))

    def put_file_as(self, path: str, file: Any, name: str | None = None) -> str | None:
        return self.uploads.upload(path, file, name)

    def delete(self, paths: str | Iterable[str]) -> bool:
        """Delete one video or several. True if every delete returned 2xx."""
        if isinstance(paths, str):
            paths = [paths]

        deleted = True
        for path in paths:
            video_id = resolve_video_id(path)
            status = self.api.delete_video(video_id)
            if not is_success_status(status):
                logger.warning(f"Deleting video {video_id} returned status {status}")
                deleted = False
        return deleted

    # Directories

    def files(self, directory: str | None = None, recursive: bool = False) -> list[str]:
        return self.all_files(directory)

    def all_files(self, directory: str | None = None) -> list[str]:
        """
        Logical paths of the videos in a directory (the whole library at the root).

        A directory without a collection holds no files.
        """
        directory = normalize_path(directory)
        if not directory:
            return [video.guid for video in self.collections.all_videos()]

        collection_id = self.collections.find_collection_id(directory)
        if not collection_id:
            logger.debug(f"Directory {directory} has no collection, no files")
            return []

        return [f"{directory}/{video.guid}" for video in self.collections.all_videos(collection_id)]

    def directories(self, directory: str | None = None, recursive: bool = False) -> list[str]:
        return self.all_directories(directory)

    def all_directories(self, directory: str | None = None) -> list[str]:
        return self.collections.list_directories(directory)

    def make_directory(self, path: str) -> bool:
        return self.collections.make_directory(path)

    def delete_directory(self, directory: str) -> bool:
        return self.collections.delete_directory(directory)

    # Unsupported

    def write_stream(self, path: str, resource: BinaryIO) -> Any:
        raise UnsupportedOperationError(details={"operation": "write_stream"})

    def get_visibility(self, path: str) -> str:
        raise UnsupportedOperationError(details={"operation": "get_visibility"})

    def set_visibility(self, path: str, visibility: str) -> bool:
        raise UnsupportedOperationError(details={"operation": "set_visibility"})

    def prepend(self, path: str, data: Any) -> bool:
        raise UnsupportedOperationError(details={"operation": "prepend"})

    def append(self, path: str, data: Any) -> bool:
        raise UnsupportedOperationError(details={"operation": "append"})

    def copy(self, source: str, destination: str) -> bool:
        raise UnsupportedOperationError(details={"operation": "copy"})

    def move(self, source: str, destination: str) -> bool:
        raise UnsupportedOperationError(details={"operation": "move"})

    # Extension point

    def register_operation(self, name: str, func: Callable[..., Any]) -> None:
        """
        Register a named operation callable as func(filesystem, *args, **kwargs).

        Raises:
            ValueError: If the name clashes with a built-in method.
        """
        if hasattr(self, name):
            raise ValueError(f"Operation name clashes with a built-in method: {name}")
        self._operations[name] = func

    def has_operation(self, name: str) -> bool:
        return name in self._operations

    def unregister_operation(self, name: str) -> None:
        self._operations.pop(name, None)

    def call_operation(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke a registered operation.

        Raises:
            UnsupportedOperationError: If no operation is registered under name.
        """
        func = self._operations.get(name)
        if func is None:
            raise UnsupportedOperationError(
                f"No operation registered as {name!r}",
                details={"operation": name},
            )
        return func(self, *args, **kwargs)


def _title_from_path(path: Any) -> Optional[str]:
    # Only string paths ending in "name.ext" carry a title.
    if isinstance(path, str) and looks_like_file(normalize_path(path)):
        return basename(normalize_path(path))
    return None
