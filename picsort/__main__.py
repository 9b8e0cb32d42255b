"""Entry point for the picsort package.

This module provides the command-line entry point for the media sorting tool.
Run with: python -m picsort
"""

import sys
import time
from argparse import Namespace
from pathlib import Path
from typing import Callable, Dict, List, Optional

from loguru import logger
from rich.markup import escape

from picsort.config import Settings, load_settings, save_settings
from picsort.config.cli import CLIArgs, args_to_cli_args, parse_arguments
from picsort.config.settings import DESTINATION_SLOTS, LOG_FILENAME, LOG_RETENTION, LOG_ROTATION
from picsort.exceptions import (
    BatchMoveError,
    DestinationInvalidError,
    PicsortError,
)
from picsort.filesystem import move_file, move_files_batch, scan_media, undo_move
from picsort.models import ChangeEvent, ChangeKind, MoveRecord
from picsort.thumbnails import ThumbnailCache
from picsort.ui import (
    ConsoleUI,
    display_change,
    display_moves,
    display_scan_results,
    display_thumbnail_batch,
)
from picsort.watcher import ChangeWatcher

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def get_log_path(log_dir: Path) -> Path:
    """Return the location of the log file."""
    return log_dir / LOG_FILENAME


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None) -> None:
    """
    Configure loguru logging.

    Logs go to stderr and, when log_dir is given, to a rotating file kept
    for seven days.

    Args:
        debug: If True, enable debug-level logging on the console.
        log_dir: Directory for the log file.
    """
    logger.remove()
    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    if log_dir is None:
        return
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Cannot create log directory {log_dir}, logging to console only: {e}")
        return
    logger.add(
        get_log_path(log_dir),
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        level="DEBUG",
    )


def resolve_destination(target: str, settings: Settings) -> Path:
    """
    Resolve a --to value: a destination slot number or a directory.

    An existing directory wins over a slot with the same name.

    Raises:
        DestinationInvalidError: If target names an empty slot.
    """
    path = Path(target).expanduser()
    if path.is_dir():
        return path
    if target.isdigit() and 1 <= int(target) <= DESTINATION_SLOTS:
        destination = settings.destination(target)
        if destination is None:
            raise DestinationInvalidError(f"Destination slot {target} is not set")
        return destination
    return path


def cmd_scan(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    entries = scan_media(args.directory)
    if args.json:
        ui.console.print_json(data=[entry.to_dict() for entry in entries])
    else:
        display_scan_results(entries, ui)
    return EXIT_OK


def cmd_move(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    destination = resolve_destination(args.to, load_settings(cli_args.config_path))

    if len(args.sources) == 1:
        display_moves([move_file(args.sources[0], destination)], ui)
        return EXIT_OK

    try:
        new_paths = move_files_batch(args.sources, destination)
    except BatchMoveError as e:
        display_moves(e.completed, ui)
        ui.print_error(str(e))
        ui.print_warning(f"{len(e.completed)} file(s) moved before the failure were left in place")
        return EXIT_ERROR

    records = [
        MoveRecord(previous_path=Path(source), new_path=new_path)
        for source, new_path in zip(args.sources, new_paths)
    ]
    display_moves(records, ui)
    ui.print_success(f"{len(records)} file(s) moved to {destination}")
    return EXIT_OK


def cmd_undo(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    record = undo_move(args.path, args.original_dir)
    display_moves([record], ui)
    return EXIT_OK


def cmd_thumb(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    cache = ThumbnailCache(cli_args.cache_dir)
    batch = cache.generate_batch(
        args.sources, size=args.size, max_workers=max(1, args.workers), show_progress=True
    )
    display_thumbnail_batch(batch, ui)
    return EXIT_ERROR if batch.errors else EXIT_OK


def cmd_cleanup(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    removed = ThumbnailCache(cli_args.cache_dir).cleanup(args.max_age_days)
    ui.print_success(f"{removed} old thumbnail(s) removed")
    return EXIT_OK


def cmd_watch(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    cache = ThumbnailCache(cli_args.cache_dir)

    def on_change(event: ChangeEvent) -> None:
        if event.kind is ChangeKind.REMOVED:
            cache.invalidate(event.path)
        display_change(event, ui)

    watcher = ChangeWatcher(on_change, debounce=args.debounce_ms / 1000)
    session = watcher.start(args.directory)
    ui.print_info(f"Watching {args.directory} (Ctrl+C to stop)")
    try:
        while session.running:
            time.sleep(0.2)
    except KeyboardInterrupt:
        watcher.stop()
        session.join(timeout=2)
        ui.print_info("Watch stopped")
        return EXIT_INTERRUPTED
    ui.print_error("Watcher stopped unexpectedly")
    return EXIT_ERROR


def cmd_dest(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    settings = load_settings(cli_args.config_path)

    if args.dest_command == "set":
        directory = Path(args.directory).expanduser().resolve()
        if not directory.is_dir():
            raise DestinationInvalidError(f"Not a directory: {directory}")
        settings.set_destination(args.slot, directory)
        save_settings(settings, cli_args.config_path)
        ui.print_success(f"Slot {args.slot} → {directory}")
        return EXIT_OK

    if args.dest_command == "clear":
        settings.set_destination(args.slot, None)
        save_settings(settings, cli_args.config_path)
        ui.print_success(f"Slot {args.slot} cleared")
        return EXIT_OK

    table = ui.create_table("Destinations", ["Slot", "Directory"])
    for slot, directory in sorted(settings.destinations.items()):
        table.add_row(slot, escape(directory) if directory else "[dim]-[/dim]")
    ui.print(table)
    return EXIT_OK


def cmd_log_path(args: Namespace, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    ui.print(escape(str(get_log_path(cli_args.log_dir))), soft_wrap=True)
    return EXIT_OK


COMMANDS: Dict[str, Callable[[Namespace, CLIArgs, ConsoleUI], int]] = {
    "scan": cmd_scan,
    "move": cmd_move,
    "undo": cmd_undo,
    "thumb": cmd_thumb,
    "cleanup": cmd_cleanup,
    "watch": cmd_watch,
    "dest": cmd_dest,
    "log-path": cmd_log_path,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the media sorting tool.

    Args:
        argv: Command-line arguments (None for sys.argv).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    namespace = parse_arguments(argv)
    cli_args = args_to_cli_args(namespace)

    setup_logging(cli_args.debug, cli_args.log_dir)
    ui = ConsoleUI()

    handler = COMMANDS[cli_args.command]
    try:
        return handler(namespace, cli_args, ui)
    except PicsortError as e:
        logger.error(f"{cli_args.command} failed: {e}")
        ui.print_error(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
