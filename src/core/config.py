"""
Configuration module for the application.

Handles reading environment variables for the video library connection.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://video.bunnycdn.com"
DEFAULT_TIMEOUT = 60.0
DEFAULT_ITEMS_PER_PAGE = 1000


@dataclass(frozen=True)
class StreamConfig:
    """
    Connection settings for one video library.

    Attributes:
        hostname: CDN pull zone hostname (e.g. vz-abc123.b-cdn.net)
        library_id: Numeric video library identifier
        api_key: Library API key, sent as the AccessKey header
        api_base_url: Management API root
        timeout: HTTP timeout in seconds
        items_per_page: Page size used for listings and searches
    """
    hostname: str
    library_id: int
    api_key: str
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE

    @property
    def cdn_base_url(self) -> str:
        return f"https://{self.hostname}"

    @classmethod
    def from_mapping(cls, values: Mapping) -> "StreamConfig":
        """
        Build from a driver-style mapping with hostname, library_id and api_key keys.

        Raises:
            ValueError: If a required key is missing or library_id is not numeric.
        """
        missing = [key for key in ("hostname", "library_id", "api_key") if not values.get(key)]
        if missing:
            raise ValueError(f"Missing stream configuration keys: {', '.join(missing)}")

        return cls(
            hostname=str(values["hostname"]),
            library_id=int(values["library_id"]),
            api_key=str(values["api_key"]),
            api_base_url=str(values.get("api_base_url") or DEFAULT_API_BASE_URL).rstrip("/"),
            timeout=float(values.get("timeout") or DEFAULT_TIMEOUT),
            items_per_page=int(values.get("items_per_page") or DEFAULT_ITEMS_PER_PAGE),
        )


def load_config(env_file: Optional[str] = None) -> StreamConfig:
    """
    Load configuration from environment variables.

    Loads the .env file (or ``env_file``) first if present. Every call
    returns a fresh value; callers pass it to the components they build.

    Environment variables:
        BUNNY_STREAM_HOSTNAME: CDN pull zone hostname (required)
        BUNNY_STREAM_LIBRARY_ID: Video library id (required)
        BUNNY_STREAM_API_KEY: Library API key (required)
        BUNNY_STREAM_API_BASE_URL: Default "https://video.bunnycdn.com"
        BUNNY_STREAM_TIMEOUT: Default 60 seconds
        BUNNY_STREAM_ITEMS_PER_PAGE: Default 1000

    Returns:
        StreamConfig instance with loaded configuration

    Raises:
        ValueError: If required variables are missing or malformed.
    """
    load_dotenv(env_file)

    return StreamConfig.from_mapping({
        "hostname": os.getenv("BUNNY_STREAM_HOSTNAME"),
        "library_id": os.getenv("BUNNY_STREAM_LIBRARY_ID"),
        "api_key": os.getenv("BUNNY_STREAM_API_KEY"),
        "api_base_url": os.getenv("BUNNY_STREAM_API_BASE_URL"),
        "timeout": os.getenv("BUNNY_STREAM_TIMEOUT"),
        "items_per_page": os.getenv("BUNNY_STREAM_ITEMS_PER_PAGE"),
    })
