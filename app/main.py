"""Command line access to a Bunny Stream video library as a filesystem."""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from adapters.bunny_cdn_client import BunnyCdnClient
from adapters.bunny_stream_api import BunnyStreamApi
from adapters.bunny_stream_filesystem import BunnyStreamFilesystem
from ports.adapter_error import AdapterError
from src.core.config import StreamConfig, load_config


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging.

    Args:
        verbose: Enable debug logging if True.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from the HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_filesystem(config: StreamConfig) -> BunnyStreamFilesystem:
    """Wire the filesystem adapter with HTTP-backed API and CDN clients."""
    api = BunnyStreamApi(config)
    cdn = BunnyCdnClient(config)
    return BunnyStreamFilesystem(api, cdn, items_per_page=config.items_per_page)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bunny Stream FS - browse a video library as directories and files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  BUNNY_STREAM_HOSTNAME        CDN pull zone hostname (required)
  BUNNY_STREAM_LIBRARY_ID      Video library id (required)
  BUNNY_STREAM_API_KEY         Library API key (required)
  BUNNY_STREAM_API_BASE_URL    API root (default: https://video.bunnycdn.com)
  BUNNY_STREAM_TIMEOUT         HTTP timeout in seconds (default: 60)
  BUNNY_STREAM_ITEMS_PER_PAGE  Listing page size (default: 1000)

Examples:
  python -m app.main dirs
  python -m app.main ls courses/intro
  python -m app.main upload lesson1.mp4 --to courses/intro
  python -m app.main get courses/intro/<video-id> --quality 720p --output lesson1.mp4
  python -m app.main url courses/intro/<video-id>
        """,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("url", "Print the playback URL of a file"),
        ("path", "Print the video id a path refers to"),
        ("exists", "Exit 0 if the file exists, 1 otherwise"),
        ("size", "Print file size in bytes"),
        ("mkdir", "Create a directory"),
        ("rmdir", "Delete a directory"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("path")

    ls = commands.add_parser("ls", help="List files in a directory")
    ls.add_argument("directory", nargs="?", default=None)

    dirs = commands.add_parser("dirs", help="List directories")
    dirs.add_argument("prefix", nargs="?", default=None)

    rm = commands.add_parser("rm", help="Delete files")
    rm.add_argument("paths", nargs="+")

    upload = commands.add_parser("upload", help="Upload a local file")
    upload.add_argument("file", help="Local file to upload")
    upload.add_argument("--to", default="", help="Target directory (default: root)")
    upload.add_argument("--title", default=None, help="Video title (default: file name)")

    get = commands.add_parser("get", help="Download a file")
    get.add_argument("path")
    get.add_argument("--output", default=None, help="Output file (default: stdout)")
    get.add_argument(
        "--quality",
        default=None,
        help="MP4 quality: 720p-style token, low, medium or high (default: highest)",
    )

    return parser


def run(args: argparse.Namespace, filesystem: BunnyStreamFilesystem) -> int:
    """Execute a parsed command. Returns the process exit code."""
    logger = logging.getLogger(__name__)

    if args.command == "url":
        print(filesystem.url(args.path))
    elif args.command == "path":
        print(filesystem.path(args.path))
    elif args.command == "exists":
        return 0 if filesystem.exists(args.path) else 1
    elif args.command == "size":
        print(filesystem.size(args.path))
    elif args.command == "mkdir":
        return 0 if filesystem.make_directory(args.path) else 1
    elif args.command == "rmdir":
        return 0 if filesystem.delete_directory(args.path) else 1
    elif args.command == "ls":
        for path in filesystem.all_files(args.directory):
            print(path)
    elif args.command == "dirs":
        for directory in filesystem.all_directories(args.prefix):
            print(directory)
    elif args.command == "rm":
        return 0 if filesystem.delete(args.paths) else 1
    elif args.command == "upload":
        title = args.title or Path(args.file).name
        logical_path = filesystem.put_file_as(args.to, Path(args.file), title)
        if logical_path is None:
            logger.error(f"Upload of {args.file} was rejected")
            return 1
        print(logical_path)
    elif args.command == "get":
        if args.quality:
            contents = filesystem.get_mp4(args.path, args.quality)
        else:
            contents = filesystem.get(args.path)
        if contents is None:
            logger.error(f"Could not download {args.path}")
            return 1
        if args.output:
            Path(args.output).write_bytes(contents)
            logger.info(f"Saved {len(contents)} bytes to {args.output}")
        else:
            sys.stdout.buffer.write(contents)
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config()
        filesystem = create_filesystem(config)
        exit_code = run(args, filesystem)
    except (AdapterError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
