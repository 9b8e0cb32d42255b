"""Tests for path helpers."""

import pytest
from pathlib import Path

from picsort.exceptions import InvalidNameError, NameSpaceExhaustedError
from picsort.filesystem.paths import (
    ensure_unique_destination,
    is_hidden,
    natural_sort_key,
    split_name,
    validate_file_name,
)


class TestEnsureUniqueDestination:
    """Tests for ensure_unique_destination function."""

    def test_returns_same_path_if_not_exists(self, tmp_path):
        """Returns directory/name when nothing occupies it."""
        result = ensure_unique_destination(tmp_path, "photo.jpg")

        assert result == tmp_path / "photo.jpg"

    def test_adds_counter_if_exists(self, tmp_path):
        """Adds _1 suffix if the name is taken."""
        (tmp_path / "photo.jpg").touch()

        result = ensure_unique_destination(tmp_path, "photo.jpg")

        assert result == tmp_path / "photo_1.jpg"

    def test_increments_counter_for_multiple(self, tmp_path):
        """Probes counters in increasing order."""
        (tmp_path / "photo.jpg").touch()
        (tmp_path / "photo_1.jpg").touch()
        (tmp_path / "photo_2.jpg").touch()

        result = ensure_unique_destination(tmp_path, "photo.jpg")

        assert result == tmp_path / "photo_3.jpg"

    def test_fills_first_gap(self, tmp_path):
        """Returns the first free candidate, not the highest."""
        (tmp_path / "photo.jpg").touch()
        (tmp_path / "photo_2.jpg").touch()

        result = ensure_unique_destination(tmp_path, "photo.jpg")

        assert result.name == "photo_1.jpg"

    def test_name_without_extension(self, tmp_path):
        """Names without extension get a plain suffix."""
        (tmp_path / "README").touch()

        result = ensure_unique_destination(tmp_path, "README")

        assert result.name == "README_1"

    def test_only_last_extension_is_split(self, tmp_path):
        """Counter goes before the last extension only."""
        (tmp_path / "archive.tar.gz").touch()

        result = ensure_unique_destination(tmp_path, "archive.tar.gz")

        assert result.name == "archive.tar_1.gz"

    def test_preserves_emoji(self, tmp_path):
        """Multi-byte names are kept exactly."""
        (tmp_path / "🎀ribbon🎀.jpg").touch()
        (tmp_path / "🎀ribbon🎀_1.jpg").touch()

        result = ensure_unique_destination(tmp_path, "🎀ribbon🎀.jpg")

        assert result.name == "🎀ribbon🎀_2.jpg"

    def test_directory_counts_as_occupied(self, tmp_path):
        """A directory with the wanted name is a collision too."""
        (tmp_path / "photo.jpg").mkdir()

        result = ensure_unique_destination(tmp_path, "photo.jpg")

        assert result.name == "photo_1.jpg"

    def test_dangling_symlink_counts_as_occupied(self, tmp_path):
        """A broken symlink still occupies its name."""
        (tmp_path / "photo.jpg").symlink_to(tmp_path / "missing.jpg")

        result = ensure_unique_destination(tmp_path, "photo.jpg")

        assert result.name == "photo_1.jpg"

    def test_raises_when_exhausted(self, tmp_path):
        """Raises NameSpaceExhaustedError past the attempt limit."""
        (tmp_path / "photo.jpg").touch()
        for i in range(1, 4):
            (tmp_path / f"photo_{i}.jpg").touch()

        with pytest.raises(NameSpaceExhaustedError):
            ensure_unique_destination(tmp_path, "photo.jpg", max_attempts=3)

    def test_does_not_create_anything(self, tmp_path):
        """Allocation is a pure existence check."""
        ensure_unique_destination(tmp_path, "photo.jpg")

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b.jpg", "a\\b.jpg"])
    def test_rejects_invalid_names(self, tmp_path, name):
        """Empty names and names with separators are rejected."""
        with pytest.raises(InvalidNameError):
            ensure_unique_destination(tmp_path, name)


class TestSplitName:
    """Tests for split_name function."""

    def test_simple_name(self):
        assert split_name("photo.jpg") == ("photo", ".jpg")

    def test_hidden_name_has_no_extension(self):
        assert split_name(".hidden") == (".hidden", "")

    def test_no_extension(self):
        assert split_name("README") == ("README", "")


class TestValidateFileName:
    """Tests for validate_file_name function."""

    def test_returns_valid_name(self):
        assert validate_file_name("写真📷.png") == "写真📷.png"


class TestNaturalSortKey:
    """Tests for natural_sort_key function."""

    def test_numbers_compare_by_value(self):
        """img2 sorts before img10."""
        names = ["img2.jpg", "img10.jpg", "img1.jpg"]

        assert sorted(names, key=natural_sort_key) == ["img1.jpg", "img2.jpg", "img10.jpg"]

    def test_mixed_prefixes(self):
        """Text parts still sort alphabetically."""
        names = ["b1.jpg", "a10.jpg", "a9.jpg"]

        assert sorted(names, key=natural_sort_key) == ["a9.jpg", "a10.jpg", "b1.jpg"]

    def test_leading_zeros_are_deterministic(self):
        """Equal numeric values still give a stable order."""
        names = ["img01.jpg", "img1.jpg"]

        assert sorted(names, key=natural_sort_key) == sorted(reversed(names), key=natural_sort_key)

    def test_number_versus_text(self):
        """A digit compares with other characters by code point."""
        names = ["img1.jpg", "img.jpg", "img_1.jpg", "imga.jpg"]

        assert sorted(names, key=natural_sort_key) == ["img.jpg", "img1.jpg", "img_1.jpg", "imga.jpg"]

    def test_case_sensitive(self):
        """Uppercase letters sort before lowercase ones."""
        names = ["a.jpg", "B.jpg", "b.jpg", "A.jpg"]

        assert sorted(names, key=natural_sort_key) == ["A.jpg", "B.jpg", "a.jpg", "b.jpg"]

    def test_prefix_sorts_first(self):
        """A name that is a prefix of another comes first."""
        assert sorted(["img10", "img"], key=natural_sort_key) == ["img", "img10"]

    def test_whitespace_ignored(self):
        """Spaces do not take part in the comparison."""
        assert sorted(["img 2.jpg", "img10.jpg"], key=natural_sort_key) == ["img 2.jpg", "img10.jpg"]


class TestIsHidden:
    """Tests for is_hidden function."""

    def test_dot_file_is_hidden(self):
        assert is_hidden(".hidden.jpg") is True

    def test_regular_file_is_visible(self):
        assert is_hidden("visible.jpg") is False
