"""Interface for cloud filesystem operations."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Iterable


class CloudFilesystem(ABC):
    """
    Hierarchical filesystem view over a remote store.

    Paths are slash-delimited logical paths; the empty string is the root.
    Operations that the remote store cannot express raise
    UnsupportedOperationError instead of being emulated.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file exists. Never raises."""
        pass

    @abstractmethod
    def get(self, path: str) -> bytes | None:
        """Read file contents, or None if they could not be fetched."""
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Open file contents as a readable stream."""
        pass

    @abstractmethod
    def put(self, path: str, contents: Any) -> str | None:
        """
        Write contents to a path.

        Returns:
            Logical path of the stored file, or None if the write failed.

        Raises:
            InvalidContentError: If contents are of an unsupported type.
        """
        pass

    @abstractmethod
    def put_file(self, path: Any, file: Any = None) -> str | None:
        """Store a file under a directory. ``put_file(file)`` stores at the root."""
        pass

    @abstractmethod
    def put_file_as(self, path: str, file: Any, name: str | None = None) -> str | None:
        """Store a file under a directory with an explicit name."""
        pass

    @abstractmethod
    def delete(self, paths: str | Iterable[str]) -> bool:
        """Delete one file or several. True if every delete succeeded."""
        pass

    @abstractmethod
    def size(self, path: str) -> int:
        """File size in bytes."""
        pass

    @abstractmethod
    def last_modified(self, path: str) -> int:
        """Last modification time as a unix timestamp."""
        pass

    @abstractmethod
    def files(self, directory: str | None = None, recursive: bool = False) -> list[str]:
        """List files in a directory."""
        pass

    @abstractmethod
    def all_files(self, directory: str | None = None) -> list[str]:
        """List files in a directory and below."""
        pass

    @abstractmethod
    def directories(self, directory: str | None = None, recursive: bool = False) -> list[str]:
        """List directories under a directory."""
        pass

    @abstractmethod
    def all_directories(self, directory: str | None = None) -> list[str]:
        """List directories under a directory, recursively."""
        pass

    @abstractmethod
    def make_directory(self, path: str) -> bool:
        """
        Create a directory. True if it exists afterwards.

        Raises:
            InvalidArgumentError: If the path is empty.
        """
        pass

    @abstractmethod
    def delete_directory(self, directory: str) -> bool:
        """Delete a directory. A missing directory counts as deleted."""
        pass

    @abstractmethod
    def url(self, path: str) -> str:
        """Public URL of a file."""
        pass

    @abstractmethod
    def path(self, path: str) -> str:
        """Storage-side identifier of a file."""
        pass

    # Operations without a remote equivalent.

    @abstractmethod
    def write_stream(self, path: str, resource: BinaryIO) -> Any:
        pass

    @abstractmethod
    def get_visibility(self, path: str) -> str:
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> bool:
        pass

    @abstractmethod
    def prepend(self, path: str, data: Any) -> bool:
        pass

    @abstractmethod
    def append(self, path: str, data: Any) -> bool:
        pass

    @abstractmethod
    def copy(self, source: str, destination: str) -> bool:
        pass

    @abstractmethod
    def move(self, source: str, destination: str) -> bool:
        pass
