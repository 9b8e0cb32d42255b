"""Tests for display functions."""

import pytest
from io import StringIO
from pathlib import Path

from rich.console import Console

from picsort.models import (
    ChangeEvent,
    ChangeKind,
    MediaEntry,
    MoveRecord,
    ThumbnailBatchResult,
    ThumbnailEntry,
    ThumbnailFailure,
)
from picsort.ui.console import ConsoleUI
from picsort.ui.display import (
    display_change,
    display_moves,
    display_scan_results,
    display_thumbnail_batch,
    format_size,
    format_timestamp,
)


@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def ui(output):
    return ConsoleUI(Console(file=output, width=200, color_system=None))


class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize("size,expected", [
        (None, "?"),
        (0, "0 B"),
        (500, "500 B"),
        (1536, "1.5 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
        (3 * 1024 ** 3, "3.0 GB"),
    ])
    def test_format(self, size, expected):
        assert format_size(size) == expected


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_unknown(self):
        assert format_timestamp(None) == "?"

    def test_format(self):
        """Shows date and minutes."""
        result = format_timestamp(1_700_000_000)
        assert len(result) == len("2023-11-14 22:13")
        assert result.startswith("2023-11-1")


class TestDisplay:
    """Tests for display helpers."""

    def test_scan_results(self, ui, output):
        """Each entry appears with its size."""
        entries = [
            MediaEntry(Path("/p/a.jpg"), "a.jpg", size=2048, modified_at=1_700_000_000),
            MediaEntry(Path("/p/[b].png"), "[b].png"),
        ]
        display_scan_results(entries, ui)
        text = output.getvalue()
        assert "2 media file(s)" in text
        assert "a.jpg" in text
        assert "2.0 KB" in text
        assert "[b].png" in text

    def test_moves(self, ui, output):
        """Renamed moves are flagged."""
        display_moves([
            MoveRecord(Path("/s/a.jpg"), Path("/d/a.jpg")),
            MoveRecord(Path("/s/b.jpg"), Path("/d/b_1.jpg")),
        ], ui)
        lines = output.getvalue().splitlines()
        assert "/d/a.jpg" in lines[0]
        assert "(renamed)" not in lines[0]
        assert "/d/b_1.jpg" in lines[1]
        assert "(renamed)" in lines[1]

    def test_thumbnail_batch(self, ui, output):
        """Successes, failures and a summary are shown."""
        batch = ThumbnailBatchResult(
            results=[ThumbnailEntry(Path("/p/a.jpg"), "k", Path("/c/k.jpg"), 1.0, from_cache=True)],
            errors=[ThumbnailFailure(Path("/p/b.jpg"), "cannot decode")],
        )
        display_thumbnail_batch(batch, ui)
        text = output.getvalue()
        assert "/c/k.jpg" in text
        assert "(cache)" in text
        assert "cannot decode" in text
        assert "1 thumbnail(s), 1 error(s)" in text

    @pytest.mark.parametrize("kind", list(ChangeKind))
    def test_change(self, ui, output, kind):
        """The change kind and path are shown."""
        display_change(ChangeEvent(kind, Path("/w/a.jpg")), ui)
        text = output.getvalue()
        assert kind.value in text
        assert "/w/a.jpg" in text
