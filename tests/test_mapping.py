"""Tests for the category-to-folder mapping builder."""

import pytest

from snap_organizer.core.mapping import CategoryMappings
from snap_organizer.models.config import CategoryRule, FolderRule
from snap_organizer.models.item import CategoryType


@pytest.fixture
def folders():
    """Two folders both collecting Footage, the second keyworded."""
    return [
        FolderRule(
            id="vfx",
            name="VFX",
            order=2,
            categories=[CategoryRule(CategoryType.FOOTAGE, order=0, keywords=["vfx", " plate "])],
        ),
        FolderRule(
            id="source",
            name="Source",
            order=1,
            categories=[
                CategoryRule(CategoryType.COMPS, order=0),
                CategoryRule(CategoryType.AUDIO, order=1, enabled=False),
                CategoryRule(CategoryType.FOOTAGE, order=2),
            ],
        ),
    ]


class TestCategoryMappings:
    """Test mapping construction and selection."""

    def test_entries_follow_folder_display_order(self, folders):
        mappings = CategoryMappings.build(folders)
        entries = mappings.entries_for(CategoryType.FOOTAGE)
        assert [e.folder_id for e in entries] == ["source", "vfx"]

    def test_disabled_category_keeps_rank_slot(self, folders):
        mappings = CategoryMappings.build(folders)
        footage = mappings.entries_for(CategoryType.FOOTAGE)[0]
        assert footage.priority_rank == 3
        assert CategoryType.AUDIO not in mappings

    def test_first_entry_is_default(self, folders):
        mappings = CategoryMappings.build(folders)
        assert mappings.select(CategoryType.FOOTAGE, "city.mov").folder_id == "source"

    def test_keyword_selects_later_entry(self, folders):
        mappings = CategoryMappings.build(folders)
        assert mappings.select(CategoryType.FOOTAGE, "city_PLATE.mov").folder_id == "vfx"

    def test_first_keyword_match_wins(self):
        folders = [
            FolderRule(id="a", name="A", order=0,
                       categories=[CategoryRule(CategoryType.IMAGES, keywords=["bg"])]),
            FolderRule(id="b", name="B", order=1,
                       categories=[CategoryRule(CategoryType.IMAGES, keywords=["bg"])]),
        ]
        mappings = CategoryMappings.build(folders)
        assert mappings.select(CategoryType.IMAGES, "bg_sky.png").folder_id == "a"

    def test_unmapped_category(self, folders):
        mappings = CategoryMappings.build(folders)
        assert mappings.select(CategoryType.SOLIDS, "Black Solid") is None
        assert mappings.entries_for(CategoryType.SOLIDS) == []
