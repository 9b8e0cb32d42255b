"""Tests for data models."""

import pytest
from dataclasses import FrozenInstanceError
from pathlib import Path

from picsort.exceptions import BatchMoveError
from picsort.models import (
    ChangeEvent,
    ChangeKind,
    MediaEntry,
    MoveRecord,
    ThumbnailBatchResult,
    ThumbnailEntry,
    ThumbnailFailure,
)


class TestMediaEntry:
    """Tests for MediaEntry."""

    def test_to_dict_full(self):
        """All fields are serialized."""
        entry = MediaEntry(path=Path("/p/a.jpg"), name="a.jpg", size=10, modified_at=1700000000)
        assert entry.to_dict() == {
            "path": "/p/a.jpg",
            "name": "a.jpg",
            "size": 10,
            "modifiedAt": 1700000000,
        }

    def test_to_dict_omits_missing_metadata(self):
        """Absent size and time are left out."""
        entry = MediaEntry(path=Path("/p/a.jpg"), name="a.jpg")
        assert entry.to_dict() == {"path": "/p/a.jpg", "name": "a.jpg"}

    def test_zero_size_kept(self):
        """A zero size is real metadata, not missing."""
        entry = MediaEntry(path=Path("/p/a.jpg"), name="a.jpg", size=0)
        assert entry.to_dict()["size"] == 0

    def test_frozen(self):
        """Entries are immutable snapshots."""
        entry = MediaEntry(path=Path("/p/a.jpg"), name="a.jpg")
        with pytest.raises(FrozenInstanceError):
            entry.name = "b.jpg"


class TestMoveRecord:
    """Tests for MoveRecord."""

    def test_undo_target(self):
        """The undo target is the original parent directory."""
        record = MoveRecord(previous_path=Path("/src/a.jpg"), new_path=Path("/dst/a.jpg"))
        assert record.undo_target == Path("/src")

    def test_renamed(self):
        """renamed reflects a collision suffix."""
        assert MoveRecord(Path("/s/a.jpg"), Path("/d/a_1.jpg")).renamed is True
        assert MoveRecord(Path("/s/a.jpg"), Path("/d/a.jpg")).renamed is False


class TestThumbnailModels:
    """Tests for thumbnail models."""

    def test_entry_to_dict(self):
        """Entry serializes to original and thumbnail paths."""
        entry = ThumbnailEntry(
            source_path=Path("/p/a.jpg"),
            cache_key="abc",
            cache_path=Path("/c/abc.jpg"),
            generated_at=1.0,
        )
        assert entry.to_dict() == {"originalPath": "/p/a.jpg", "thumbnailPath": "/c/abc.jpg"}
        assert entry.from_cache is False

    def test_batch_result(self):
        """Batch keeps results and errors apart."""
        batch = ThumbnailBatchResult()
        batch.results.append(
            ThumbnailEntry(Path("/p/a.jpg"), "abc", Path("/c/abc.jpg"), 1.0)
        )
        batch.errors.append(ThumbnailFailure(Path("/p/b.jpg"), "boom"))

        assert batch.total == 2
        assert batch.to_dict() == {
            "results": [{"originalPath": "/p/a.jpg", "thumbnailPath": "/c/abc.jpg"}],
            "errors": [{"path": "/p/b.jpg", "error": "boom"}],
        }

    def test_batch_results_not_shared(self):
        """Each batch gets its own lists."""
        first = ThumbnailBatchResult()
        first.errors.append(ThumbnailFailure(Path("/x"), "e"))
        assert ThumbnailBatchResult().errors == []


class TestChangeEvent:
    """Tests for ChangeEvent."""

    @pytest.mark.parametrize("kind,tag", [
        (ChangeKind.CREATED, "Created"),
        (ChangeKind.MODIFIED, "Modified"),
        (ChangeKind.REMOVED, "Removed"),
    ])
    def test_to_dict(self, kind, tag):
        """Serialized as a tagged value."""
        event = ChangeEvent(kind=kind, path=Path("/w/a.jpg"))
        assert event.to_dict() == {"type": tag, "path": "/w/a.jpg"}

    def test_str(self):
        """String form shows kind and path."""
        assert str(ChangeEvent(ChangeKind.MODIFIED, Path("/w/a.jpg"))) == "Modified(/w/a.jpg)"

    def test_equality(self):
        """Events compare by value."""
        assert ChangeEvent(ChangeKind.CREATED, Path("/a")) == ChangeEvent(ChangeKind.CREATED, Path("/a"))


class TestBatchMoveError:
    """Tests for BatchMoveError."""

    def test_moved_paths(self):
        """moved_paths lists final paths of completed moves."""
        completed = [MoveRecord(Path("/s/a.jpg"), Path("/d/a.jpg"))]
        error = BatchMoveError("failed", failed_source=Path("/s/b.jpg"), completed=completed)

        assert error.moved_paths == [Path("/d/a.jpg")]
        assert error.failed_source == Path("/s/b.jpg")
        assert str(error) == "failed"
