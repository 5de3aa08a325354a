"""Bunny Stream management API adapter."""
from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional

import requests

from domain.models import CollectionEntity, VideoEntity
from ports.adapter_error import RemoteFailureError, RemoteNotFoundError, TransportFailureError
from ports.stream_api import StreamApi
from src.core.config import StreamConfig

logger = logging.getLogger(__name__)


def raise_for_response(response: requests.Response, what: str) -> None:
    """
    Map a non-2xx response to the adapter error taxonomy.

    Raises:
        RemoteNotFoundError: On 404.
        RemoteFailureError: On any other non-2xx status.
    """
    if 200 <= response.status_code < 300:
        return

    details = {"status_code": response.status_code, "url": response.url, "body": response.text[:500]}
    if response.status_code == 404:
        raise RemoteNotFoundError(f"{what} not found", details=details)
    raise RemoteFailureError(f"{what} failed with HTTP {response.status_code}", details=details)


class BunnyStreamApi(StreamApi):
    """
    Bunny Stream REST API implementation.

    All calls target ``{api_base_url}/library/{library_id}`` and carry the
    library API key in the AccessKey header.
    """

    def __init__(self, config: StreamConfig, session: Optional[requests.Session] = None):
        """
        Initialize API client.

        Args:
            config: Library connection settings.
            session: HTTP session to use. A new one is created if None.
        """
        self.config = config
        self.library_url = f"{config.api_base_url}/library/{config.library_id}"
        self.session = session or requests.Session()
        self.session.headers.update({
            "AccessKey": config.api_key,
            "Accept": "application/json",
        })
        logger.debug(f"BunnyStreamApi initialized for {self.library_url}")

    def _request(self, method: str, path: str, what: str, **kwargs: Any) -> requests.Response:
        url = f"{self.library_url}/{path}"
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportFailureError(
                f"{what} request failed: {e}",
                details={"method": method, "url": url},
            ) from e

    def _json(self, method: str, path: str, what: str, **kwargs: Any) -> Any:
        response = self._request(method, path, what, **kwargs)
        raise_for_response(response, what)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteFailureError(
                f"{what} returned invalid JSON",
                details={"status_code": response.status_code, "body": response.text[:500]},
            ) from e

    def get_video(self, video_id: str) -> VideoEntity:
        data = self._json("GET", f"videos/{video_id}", f"Video {video_id}")
        return VideoEntity.from_api(data)

    def create_video(self, title: str, collection_id: str | None = None) -> VideoEntity:
        body = {"title": title}
        if collection_id:
            body["collectionId"] = collection_id
        data = self._json("POST", "videos", "Create video", json=body)
        return VideoEntity.from_api(data)

    def delete_video(self, video_id: str) -> int:
        response = self._request("DELETE", f"videos/{video_id}", f"Delete video {video_id}")
        logger.info(f"Delete video {video_id}: HTTP {response.status_code}")
        return response.status_code

    def upload_video(self, video_id: str, content: BinaryIO) -> int:
        response = self._request(
            "PUT",
            f"videos/{video_id}",
            f"Upload video {video_id}",
            data=content,
            headers={"Content-Type": "application/octet-stream"},
        )
        logger.debug(f"Upload video {video_id}: HTTP {response.status_code}")
        return response.status_code

    def list_videos(
        self,
        page: int = 1,
        items_per_page: int = 100,
        collection_id: str | None = None,
    ) -> list[VideoEntity]:
        params: dict[str, Any] = {"page": page, "itemsPerPage": items_per_page}
        if collection_id:
            params["collection"] = collection_id
        data = self._json("GET", "videos", "List videos", params=params)
        return [VideoEntity.from_api(item) for item in data.get("items") or []]

    def create_collection(self, name: str) -> CollectionEntity:
        data = self._json("POST", "collections", "Create collection", json={"name": name})
        return CollectionEntity.from_api(data)

    def delete_collection(self, collection_id: str) -> int:
        response = self._request(
            "DELETE", f"collections/{collection_id}", f"Delete collection {collection_id}"
        )
        return response.status_code

    def list_collections(
        self,
        page: int = 1,
        items_per_page: int = 100,
        search: str | None = None,
    ) -> list[CollectionEntity]:
        params: dict[str, Any] = {"page": page, "itemsPerPage": items_per_page}
        if search:
            params["search"] = search
        data = self._json("GET", "collections", "List collections", params=params)
        return [CollectionEntity.from_api(item) for item in data.get("items") or []]
