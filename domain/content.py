"""Upload payloads accepted by the filesystem."""
from __future__ import annotations

import io
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Union

from ports.adapter_error import InvalidContentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ByteStream:
    """Already-open readable binary stream."""
    stream: BinaryIO


@dataclass(frozen=True)
class ByteBuffer:
    """Raw bytes held in memory."""
    data: bytes


@dataclass(frozen=True)
class FilePathReference:
    """Path to an existing local file."""
    path: Path


UploadContent = Union[ByteStream, ByteBuffer, FilePathReference]


def to_upload_content(value: Any) -> UploadContent:
    """
    Classify an upload payload.

    Accepts an UploadContent variant, bytes-like objects, a path (str or
    os.PathLike) to an existing file, or any object with a ``read`` method.

    Raises:
        InvalidContentError: For anything else, including paths that do not
            name an existing file.
    """
    if isinstance(value, (ByteStream, ByteBuffer, FilePathReference)):
        return value

    if isinstance(value, (bytes, bytearray, memoryview)):
        return ByteBuffer(bytes(value))

    if isinstance(value, (str, os.PathLike)):
        path = Path(value)
        if not path.is_file():
            raise InvalidContentError(
                f"Upload source is not an existing file: {value}",
                details={"path": str(path)},
            )
        return FilePathReference(path.resolve())

    if callable(getattr(value, "read", None)):
        return ByteStream(value)

    raise InvalidContentError(
        f"Unsupported upload content type: {type(value).__name__}",
        details={"type": type(value).__name__},
    )


@contextmanager
def open_content(content: UploadContent) -> Iterator[BinaryIO]:
    """
    Yield a readable binary handle for an upload payload.

    The handle is closed when the block exits, whether it returns or
    raises. This includes streams passed in by the caller.
    """
    if isinstance(content, ByteBuffer):
        # Stays in memory: no fileno(), so sizing the body never spills it to disk.
        with io.BytesIO(content.data) as buffer:
            yield buffer
        return

    if isinstance(content, FilePathReference):
        with open(content.path, "rb") as f:
            logger.debug(f"Opened upload source {content.path}")
            yield f
        return

    if isinstance(content, ByteStream):
        try:
            yield content.stream
        finally:
            try:
                content.stream.close()
            except Exception as e:
                logger.warning(f"Failed to close upload stream: {e}")
        return

    raise InvalidContentError(
        f"Unsupported upload content type: {type(content).__name__}",
        details={"type": type(content).__name__},
    )
