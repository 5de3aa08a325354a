"""Interface for reading assets from the video CDN."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class CdnClient(ABC):
    """
    Read access to the pull zone serving a video library.

    Paths are relative to the pull zone root, e.g. ``{video_id}/playlist.m3u8``.
    """

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Absolute pull zone URL, without a trailing slash."""
        pass

    @abstractmethod
    def get_contents(self, path: str) -> bytes | None:
        """
        Download an asset.

        Returns:
            Asset bytes, or None if the CDN refused or failed the request.
        """
        pass

    @abstractmethod
    def open_stream(self, path: str) -> BinaryIO:
        """
        Open an asset as a readable binary stream. Caller closes it.

        Raises:
            RemoteNotFoundError: If the asset does not exist.
            RemoteFailureError: On any other non-2xx answer.
            TransportFailureError: On network errors.
        """
        pass
