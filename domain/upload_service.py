"""Domain service for uploading videos into directories."""
import logging
from typing import Any, Optional

from domain.content import open_content, to_upload_content
from domain.directories import CollectionResolver, is_success_status
from domain.paths import normalize_path, strip_filename
from ports.stream_api import StreamApi

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "default"


class UploadService:
    """
    Orchestrates a video upload.

    Workflow:
    1. Validate the payload (no remote calls for invalid content)
    2. Resolve or create the target directory's collection
    3. Create the video record
    4. Stream the payload into it
    """

    def __init__(self, api: StreamApi, collections: CollectionResolver):
        """
        Initialize upload service.

        Args:
            api: Management API of the library.
            collections: Resolver used to find or create the target collection.
        """
        self.api = api
        self.collections = collections

    def upload(self, path: Optional[str], content: Any, name: Optional[str] = None) -> Optional[str]:
        """
        Upload content as a new video under a directory.

        Video ids are generated by the platform, so a filename at the end of
        ``path`` is dropped; only its directory part is used.

        Args:
            path: Target directory, or a file path inside it.
            content: Stream, bytes, or path to a local file.
            name: Video title (default: "default").

        Returns:
            Logical path of the new video ("{directory}/{video_id}", or
            "{video_id}" at the root), or None if the platform rejected the
            upload.

        Raises:
            InvalidContentError: If content is of an unsupported type.
        """
        source = to_upload_content(content)
        directory = normalize_path(strip_filename(path))

        # The handle is released even if collection or video creation fails.
        with open_content(source) as stream:
            collection = None
            if directory:
                collection = self.collections.ensure_collection(directory)

            video = self.api.create_video(
                title=name or DEFAULT_TITLE,
                collection_id=collection.guid if collection else None,
            )
            logger.info(
                f"Created video {video.guid} (title={name or DEFAULT_TITLE!r}, "
                f"directory={directory or '/'})"
            )

            status = self.api.upload_video(video.guid, stream)

        if not is_success_status(status):
            logger.warning(f"Upload of video {video.guid} failed with status {status}")
            return None

        logical_path = f"{collection.name}/{video.guid}" if collection else video.guid
        logger.info(f"Uploaded video {video.guid} -> {logical_path}")
        return logical_path
