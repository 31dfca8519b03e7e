"""Tests for numbered folder names and destination paths."""

from snap_organizer.core.paths import PathBuilder, folder_display_names, numbered_name
from snap_organizer.models.config import FolderRule, Subcategory
from snap_organizer.models.item import CategoryType


class TestFolderNumbering:
    """Test display names of top-level folders."""

    def test_numbering_ignores_input_order(self):
        folders = [
            FolderRule(id="b", name="Bravo", order=1),
            FolderRule(id="system", name="System", order=99),
            FolderRule(id="a", name="Alpha", order=0),
        ]
        assert folder_display_names(folders) == {
            "a": "00_Alpha",
            "b": "01_Bravo",
            "system": "99_System",
        }

    def test_system_is_always_99(self):
        folders = [
            FolderRule(id="system", name="System", order=0),
            FolderRule(id="a", name="Alpha", order=5),
        ]
        names = folder_display_names(folders)
        assert names["a"] == "00_Alpha"
        assert names["system"] == "99_System"

    def test_numbered_name(self):
        assert numbered_name(3, "Audio") == "03_Audio"
        assert numbered_name(12, "Extra") == "12_Extra"


class TestPathBuilder:
    """Test destination path assembly."""

    def test_category_and_subcategory(self):
        sub = Subcategory(id="s", name="Drone", order=0)
        path = PathBuilder("01_Source").category(1, CategoryType.FOOTAGE).subcategory(sub).build()
        assert path == ("01_Source", "01_Footage", "00_Drone")

    def test_sequence_leaf(self):
        path = PathBuilder("01_Source").category(1, CategoryType.FOOTAGE).sequence("exr").build()
        assert path == ("01_Source", "01_Footage", "Sequences", "EXR Sequence")

    def test_others_leaf(self):
        path = PathBuilder().category(2, CategoryType.IMAGES).others(2).build()
        assert path == ("02_Images", "03_Others")

    def test_extension_leaf(self):
        assert PathBuilder().extension("mov").build() == ("_MOV",)
        assert PathBuilder().extension("").build() == ()
