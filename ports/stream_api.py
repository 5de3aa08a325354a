"""Interface for the video platform's management API."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from domain.models import CollectionEntity, VideoEntity


class StreamApi(ABC):
    """
    Management API of a single video library.

    The library identifier and access credential are bound at construction;
    every method targets that library.

    Implementation examples: Bunny Stream REST API, in-memory fake.
    """

    @abstractmethod
    def get_video(self, video_id: str) -> VideoEntity:
        """
        Fetch a video record.

        Raises:
            RemoteNotFoundError: If the video does not exist.
            RemoteFailureError: On any other non-2xx answer.
            TransportFailureError: On network errors.
        """
        pass

    @abstractmethod
    def create_video(self, title: str, collection_id: str | None = None) -> VideoEntity:
        """
        Create an empty video record, optionally inside a collection.

        Raises:
            RemoteFailureError: On a non-2xx answer.
            TransportFailureError: On network errors.
        """
        pass

    @abstractmethod
    def delete_video(self, video_id: str) -> int:
        """
        Delete a video.

        Returns:
            HTTP status code of the delete call.

        Raises:
            TransportFailureError: On network errors.
        """
        pass

    @abstractmethod
    def upload_video(self, video_id: str, content: BinaryIO) -> int:
        """
        Stream video bytes into an existing record.

        Returns:
            HTTP status code of the upload call.

        Raises:
            TransportFailureError: On network errors.
        """
        pass

    @abstractmethod
    def list_videos(
        self,
        page: int = 1,
        items_per_page: int = 100,
        collection_id: str | None = None,
    ) -> list[VideoEntity]:
        """
        Fetch one page of videos, optionally restricted to a collection.

        Raises:
            RemoteFailureError: On a non-2xx answer.
            TransportFailureError: On network errors.
        """
        pass

    @abstractmethod
    def create_collection(self, name: str) -> CollectionEntity:
        """
        Create a collection.

        Raises:
            RemoteFailureError: On a non-2xx answer.
            TransportFailureError: On network errors.
        """
        pass

    @abstractmethod
    def delete_collection(self, collection_id: str) -> int:
        """
        Delete a collection.

        Returns:
            HTTP status code of the delete call.
        """
        pass

    @abstractmethod
    def list_collections(
        self,
        page: int = 1,
        items_per_page: int = 100,
        search: str | None = None,
    ) -> list[CollectionEntity]:
        """
        Fetch one page of collections.

        Args:
            search: Platform-side name filter. It is a ranking/substring
                    match, so callers must compare names exactly themselves.

        Raises:
            RemoteFailureError: On a non-2xx answer.
            TransportFailureError: On network errors.
        """
        pass
