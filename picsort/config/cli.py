"""Command-line interface argument parsing."""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from picsort.config.settings import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CACHE_MAX_AGE_DAYS,
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_DIR,
    DEFAULT_THUMBNAIL_SIZE,
    DEBOUNCE_SECONDS,
    DESTINATION_SLOTS,
)


@dataclass
class CLIArgs:
    """
    Global command-line options.

    Attributes:
        command: Selected subcommand.
        debug: If True, enable debug logging on the console.
        cache_dir: Thumbnail cache directory.
        config_path: Settings file.
        log_dir: Directory of the log file.
    """

    command: str = ""
    debug: bool = False
    cache_dir: Path = DEFAULT_CACHE_DIR
    config_path: Path = DEFAULT_CONFIG_PATH
    log_dir: Path = DEFAULT_LOG_DIR


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='picsort',
        description="""
        Sorts image and video files between folders, with undo,
        cached thumbnails and directory watching.
        """
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="enable debug logging"
    )

    parser.add_argument(
        '--cache-dir',
        default=str(DEFAULT_CACHE_DIR),
        help=f"thumbnail cache directory (default: {DEFAULT_CACHE_DIR})"
    )

    parser.add_argument(
        '--config',
        default=str(DEFAULT_CONFIG_PATH),
        help=f"settings file (default: {DEFAULT_CONFIG_PATH})"
    )

    parser.add_argument(
        '--log-dir',
        default=str(DEFAULT_LOG_DIR),
        help=f"log directory (default: {DEFAULT_LOG_DIR})"
    )

    sub = parser.add_subparsers(dest='command', required=True)

    scan = sub.add_parser('scan', help='list media files of a directory')
    scan.add_argument('directory', help='directory to scan')
    scan.add_argument('--json', action='store_true', help='print the listing as JSON')

    move = sub.add_parser('move', help='move files into a directory')
    move.add_argument('sources', nargs='+', help='files to move')
    move.add_argument(
        '-t', '--to',
        required=True,
        help=f'destination directory, or a destination slot (1-{DESTINATION_SLOTS})'
    )

    undo = sub.add_parser('undo', help='move a file back to its original directory')
    undo.add_argument('path', help='current location of the file')
    undo.add_argument('original_dir', help='directory to restore the file into')

    thumb = sub.add_parser('thumb', help='generate thumbnails')
    thumb.add_argument('sources', nargs='+', help='media files')
    thumb.add_argument(
        '-s', '--size',
        type=int,
        default=DEFAULT_THUMBNAIL_SIZE,
        help=f'maximum thumbnail size in pixels (default: {DEFAULT_THUMBNAIL_SIZE})'
    )
    thumb.add_argument(
        '-w', '--workers',
        type=int,
        default=1,
        help='parallel workers (default: 1)'
    )

    cleanup = sub.add_parser('cleanup', help='remove old thumbnails from the cache')
    cleanup.add_argument(
        '--max-age-days',
        type=float,
        default=DEFAULT_CACHE_MAX_AGE_DAYS,
        help=f'remove thumbnails older than this (default: {DEFAULT_CACHE_MAX_AGE_DAYS})'
    )

    watch = sub.add_parser('watch', help='print changes in a directory until interrupted')
    watch.add_argument('directory', help='directory to watch')
    watch.add_argument(
        '--debounce-ms',
        type=int,
        default=int(DEBOUNCE_SECONDS * 1000),
        help=f'quiet period before reporting a change (default: {int(DEBOUNCE_SECONDS * 1000)})'
    )

    dest = sub.add_parser('dest', help='manage destination slots')
    dest_sub = dest.add_subparsers(dest='dest_command', required=True)
    dest_sub.add_parser('list', help='show destination slots')
    dest_set = dest_sub.add_parser('set', help='assign a directory to a slot')
    dest_set.add_argument('slot', help=f'slot number (1-{DESTINATION_SLOTS})')
    dest_set.add_argument('directory', help='destination directory')
    dest_clear = dest_sub.add_parser('clear', help='empty a slot')
    dest_clear.add_argument('slot', help=f'slot number (1-{DESTINATION_SLOTS})')

    sub.add_parser('log-path', help='print the log file location')

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: List of argument strings (None for sys.argv).

    Returns:
        Parsed Namespace object.
    """
    parser = create_parser()
    return parser.parse_args(args)


def args_to_cli_args(namespace: argparse.Namespace) -> CLIArgs:
    """
    Convert argparse Namespace to CLIArgs dataclass.

    Args:
        namespace: Parsed argparse Namespace.

    Returns:
        CLIArgs instance.
    """
    return CLIArgs(
        command=namespace.command,
        debug=namespace.debug,
        cache_dir=Path(namespace.cache_dir).expanduser(),
        config_path=Path(namespace.config).expanduser(),
        log_dir=Path(namespace.log_dir).expanduser(),
    )
