"""User interface components."""

from picsort.ui.console import ConsoleUI, console
from picsort.ui.display import (
    format_size,
    format_timestamp,
    display_scan_results,
    display_moves,
    display_thumbnail_batch,
    display_change,
)

__all__ = [
    "ConsoleUI",
    "console",
    "format_size",
    "format_timestamp",
    "display_scan_results",
    "display_moves",
    "display_thumbnail_batch",
    "display_change",
]
