"""Display functions for scan listings, moves, thumbnails and changes."""

from datetime import datetime
from typing import Iterable, List, Optional

from rich.markup import escape

from picsort.models.events import ChangeEvent, ChangeKind
from picsort.models.media import MediaEntry, MoveRecord, ThumbnailBatchResult
from picsort.ui.console import ConsoleUI, console as default_console

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]

_CHANGE_STYLES = {
    ChangeKind.CREATED: ("green", "+"),
    ChangeKind.MODIFIED: ("yellow", "~"),
    ChangeKind.REMOVED: ("red", "-"),
}


def format_size(size: Optional[int]) -> str:
    """
    Format a byte count for humans.

    Args:
        size: Size in bytes, or None when unknown.

    Returns:
        String like "1.5 MB", or "?" for an unknown size.
    """
    if size is None:
        return "?"
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def format_timestamp(timestamp: Optional[int]) -> str:
    """Format Unix seconds as local date and time, or "?" if unknown."""
    if timestamp is None:
        return "?"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


def display_scan_results(entries: List[MediaEntry], ui: Optional[ConsoleUI] = None) -> None:
    """Print a scan listing as a table."""
    ui = ui or default_console
    table = ui.create_table(f"{len(entries)} media file(s)", ["Name", "Size", "Modified"])
    for entry in entries:
        table.add_row(escape(entry.name), format_size(entry.size), format_timestamp(entry.modified_at))
    ui.print(table)


def display_moves(records: Iterable[MoveRecord], ui: Optional[ConsoleUI] = None) -> None:
    """Print one line per completed move, flagging renamed files."""
    ui = ui or default_console
    for record in records:
        note = " [yellow](renamed)[/yellow]" if record.renamed else ""
        ui.print(f"[cyan]{escape(str(record.previous_path))}[/cyan] → {escape(str(record.new_path))}{note}")


def display_thumbnail_batch(batch: ThumbnailBatchResult, ui: Optional[ConsoleUI] = None) -> None:
    """Print generated thumbnails, then failures."""
    ui = ui or default_console
    for entry in batch.results:
        origin = "cache" if entry.from_cache else "new"
        ui.print(f"{escape(str(entry.source_path))} → {escape(str(entry.cache_path))} [dim]({origin})[/dim]")
    for failure in batch.errors:
        ui.print_error(f"{failure.path}: {failure.error}")
    ui.print_info(f"{len(batch.results)} thumbnail(s), {len(batch.errors)} error(s)")


def display_change(event: ChangeEvent, ui: Optional[ConsoleUI] = None) -> None:
    """Print a single change notification."""
    ui = ui or default_console
    style, marker = _CHANGE_STYLES[event.kind]
    ui.print(f"[{style}]{marker} {event.kind.value:<8}[/{style}] {escape(str(event.path))}")
