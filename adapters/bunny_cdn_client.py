"""Bunny CDN pull zone reader."""
from __future__ import annotations

import logging
from typing import BinaryIO, Optional

import requests

from adapters.bunny_stream_api import raise_for_response
from ports.adapter_error import AdapterError, TransportFailureError
from ports.cdn_client import CdnClient
from src.core.config import StreamConfig

logger = logging.getLogger(__name__)

# Referer accepted by pull zones locked to the embedded player.
PLAYER_REFERER = "https://iframe.mediadelivery.net"


class BunnyCdnClient(CdnClient):
    """
    Reads video assets from the library's pull zone.

    Requests carry the pull zone itself as Referer; pull zones restricted
    to the embedded player are retried with the player's referer.
    """

    def __init__(self, config: StreamConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.cdn_base_url

    def _headers(self, referer: str) -> dict:
        return {
            "Referer": referer,
            "Accept": "*/*",
            "AccessKey": self.config.api_key,
        }

    def _get(self, path: str, referer: str, stream: bool = False) -> requests.Response:
        response = self.session.get(
            f"{self.base_url}/{path}",
            headers=self._headers(referer),
            timeout=self.config.timeout,
            stream=stream,
        )
        response.raise_for_status()
        return response

    def get_contents(self, path: str) -> bytes | None:
        """Download an asset, or None if both referers were refused."""
        for referer in (self.base_url, PLAYER_REFERER):
            try:
                return self._get(path, referer).content
            except requests.RequestException as e:
                logger.warning(f"CDN fetch of {path} with referer {referer} failed: {e}")
        return None

    def open_stream(self, path: str) -> BinaryIO:
        """Open an asset for streaming reads. Caller closes the returned stream."""
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.get(
                url,
                headers=self._headers(self.base_url),
                timeout=self.config.timeout,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportFailureError(f"CDN request failed: {e}", details={"url": url}) from e

        try:
            raise_for_response(response, f"CDN asset {path}")
        except AdapterError:
            response.close()
            raise

        response.raw.decode_content = True
        return response.raw
