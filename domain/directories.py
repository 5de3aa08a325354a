"""Directory to collection mapping."""
from __future__ import annotations

import logging
from typing import Optional

from domain.listing import DEFAULT_ITEMS_PER_PAGE, iter_pages, list_all
from domain.models import CollectionEntity, VideoEntity
from domain.paths import normalize_path
from ports.adapter_error import InvalidArgumentError
from ports.stream_api import StreamApi

logger = logging.getLogger(__name__)


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


class CollectionResolver:
    """
    Maps directory paths onto platform collections.

    A collection's name is its full directory path ("user1/personal").
    Names are treated as unique: lookups take the first exact match. Two
    concurrent ensure_collection() calls for a new name can both create a
    collection; later lookups then resolve to whichever the search returns
    first.
    """

    def __init__(self, api: StreamApi, items_per_page: int = DEFAULT_ITEMS_PER_PAGE):
        """
        Initialize collection resolver.

        Args:
            api: Management API of the library.
            items_per_page: Page size for searches and full listings.
        """
        self.api = api
        self.items_per_page = items_per_page

    def find_collection(self, path: Optional[str]) -> Optional[CollectionEntity]:
        """
        Look up the collection named exactly like a directory path.

        The platform search matches substrings, so results are paged through
        until a page holds the exact name.

        Returns:
            The first exact match, or None for an empty path or no match.

        Raises:
            RemoteFailureError, TransportFailureError: If a search page fails.
        """
        name = normalize_path(path)
        if not name:
            return None

        scanned = 0
        pages = iter_pages(
            lambda page, per_page: self.api.list_collections(
                page=page,
                items_per_page=per_page,
                search=name,
            ),
            self.items_per_page,
        )
        for candidates in pages:
            for candidate in candidates:
                if candidate.name == name:
                    logger.debug(f"Directory {name} -> collection {candidate.guid}")
                    return candidate
            scanned += len(candidates)

        logger.debug(f"No collection named {name} among {scanned} search results")
        return None

    def find_collection_id(self, path: Optional[str]) -> Optional[str]:
        collection = self.find_collection(path)
        return collection.guid if collection else None

    def ensure_collection(self, path: str) -> CollectionEntity:
        """
        Find the collection for a directory, creating it when absent.

        Raises:
            InvalidArgumentError: If the path is empty.
        """
        name = normalize_path(path)
        if not name:
            raise InvalidArgumentError("Directory path cannot be empty.")

        existing = self.find_collection(name)
        if existing:
            return existing

        collection = self.api.create_collection(name)
        logger.info(f"Created collection {collection.guid} for directory {name}")
        return collection

    def make_directory(self, path: Optional[str]) -> bool:
        """
        Create the collection for a directory if it does not exist yet.

        Raises:
            InvalidArgumentError: If the path is empty.
        """
        name = normalize_path(path)
        if not name:
            raise InvalidArgumentError("Directory path cannot be empty.")

        if self.find_collection_id(name):
            logger.debug(f"Directory already exists: {name}")
            return True

        collection = self.api.create_collection(name)
        logger.info(f"Created collection {collection.guid} for directory {name}")
        return True

    def delete_directory(self, path: Optional[str]) -> bool:
        """
        Delete the collection for a directory.

        A directory without a collection is already deleted: returns True
        without a remote delete.
        """
        name = normalize_path(path)
        collection_id = self.find_collection_id(name)
        if not collection_id:
            logger.debug(f"Directory {name} has no collection, nothing to delete")
            return True

        status = self.api.delete_collection(collection_id)
        if is_success_status(status):
            logger.info(f"Deleted collection {collection_id} for directory {name}")
            return True

        logger.warning(f"Deleting collection {collection_id} returned status {status}")
        return False

    def all_collections(self) -> list[CollectionEntity]:
        """Every collection in the library (partial on listing errors)."""
        return list_all(
            lambda page, per_page: self.api.list_collections(page=page, items_per_page=per_page),
            self.items_per_page,
        )

    def all_videos(self, collection_id: Optional[str] = None) -> list[VideoEntity]:
        """Every video in the library or in one collection (partial on listing errors)."""
        return list_all(
            lambda page, per_page: self.api.list_videos(
                page=page,
                items_per_page=per_page,
                collection_id=collection_id,
            ),
            self.items_per_page,
        )

    def list_directories(self, prefix: Optional[str] = None) -> list[str]:
        """
        Directory names, optionally limited to a prefix and everything below it.

        Order follows the platform listing; duplicate names appear once.
        """
        prefix = normalize_path(prefix)
        names = list(dict.fromkeys(c.name for c in self.all_collections()))
        if prefix:
            names = [n for n in names if n == prefix or n.startswith(f"{prefix}/")]
        return names
