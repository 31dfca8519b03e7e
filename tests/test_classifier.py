"""Tests for extension parsing and item classification."""

import pytest

from snap_organizer.core.classifier import Classification, ItemClassifier
from snap_organizer.core.extensions import normalize_extension, parse_extension, sequence_type_name
from snap_organizer.models.item import CategoryType, ItemKind, ItemSnapshot


class TestParseExtension:
    """Test extension parsing from item names."""

    def test_plain_name(self):
        assert parse_extension("plain.MOV") == "mov"

    def test_bracketed_frame_placeholder(self):
        assert parse_extension("shot.[####].exr") == "exr"

    def test_numbered_frame(self):
        assert parse_extension("shot.0001.exr") == "exr"
        assert parse_extension("shot.000123.dpx") == "dpx"

    def test_short_number_is_kept(self):
        """Runs shorter than four digits are not frame numbers."""
        assert parse_extension("take.v01.mov") == "mov"

    def test_no_extension(self):
        assert parse_extension("Main Comp") == ""
        assert parse_extension("") == ""

    def test_last_segment_wins(self):
        assert parse_extension("archive.tar.GZ") == "gz"


class TestNormalizeExtension:
    """Test extension normalization."""

    @pytest.mark.parametrize("value,expected", [
        ("mp4", "mp4"),
        (".mp4", "mp4"),
        (" .MP4 ", "mp4"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, value, expected):
        assert normalize_extension(value) == expected

    def test_sequence_type_name(self):
        assert sequence_type_name("exr") == "EXR Sequence"
        assert sequence_type_name(".dpx") == "DPX Sequence"


class TestItemClassifier:
    """Test category classification by extension."""

    def test_case_insensitive(self):
        assert ItemClassifier.classify("MP4") == ItemClassifier.classify("mp4")

    def test_video_is_footage(self):
        assert ItemClassifier.classify("mov") == Classification(CategoryType.FOOTAGE)

    def test_audio(self):
        assert ItemClassifier.classify("wav").category == CategoryType.AUDIO

    def test_image(self):
        assert ItemClassifier.classify("png").category == CategoryType.IMAGES
        assert ItemClassifier.classify("psd").category == CategoryType.IMAGES

    def test_cg_still_is_image(self):
        """A CG format that is not flagged as a sequence is a still."""
        assert ItemClassifier.classify("exr").category == CategoryType.IMAGES

    def test_targa_is_not_a_cg_still(self):
        assert ItemClassifier.classify("tga").category == CategoryType.FOOTAGE
        assert ItemClassifier.classify("dpx").category == CategoryType.IMAGES

    def test_unknown_and_empty_default_to_footage(self):
        assert ItemClassifier.classify("xyz").category == CategoryType.FOOTAGE
        assert ItemClassifier.classify("").category == CategoryType.FOOTAGE

    def test_sequence_frame(self):
        result = ItemClassifier.classify("exr", is_sequence_frame=True)
        assert result.category == CategoryType.FOOTAGE
        assert result.is_sequence


class TestClassifyItem:
    """Test classification of whole item snapshots."""

    def test_composition(self):
        item = ItemSnapshot(id="1", name="Main.mov", kind=ItemKind.COMPOSITION)
        assert ItemClassifier.classify_item(item).category == CategoryType.COMPS

    def test_container_is_skipped(self):
        item = ItemSnapshot(id="1", name="Folder", kind=ItemKind.CONTAINER)
        assert ItemClassifier.classify_item(item) is None

    def test_solid_checked_before_extension(self):
        item = ItemSnapshot(id="1", name="Black Solid 1", is_solid_or_null=True, extension="png")
        assert ItemClassifier.classify_item(item).category == CategoryType.SOLIDS

    def test_host_extension_preferred_over_name(self):
        item = ItemSnapshot(id="1", name="clip", extension=".WAV")
        assert ItemClassifier.classify_item(item).category == CategoryType.AUDIO

    def test_name_extension_used_when_host_has_none(self):
        item = ItemSnapshot(id="1", name="photo.png")
        assert ItemClassifier.classify_item(item).category == CategoryType.IMAGES

    def test_sequence_needs_detection(self):
        item = ItemSnapshot(id="1", name="render.[####].exr", extension="exr", is_sequence_frame=True)

        assert ItemClassifier.classify_item(item, detect_sequences=True).is_sequence
        undetected = ItemClassifier.classify_item(item, detect_sequences=False)
        assert not undetected.is_sequence
        assert undetected.category == CategoryType.IMAGES
