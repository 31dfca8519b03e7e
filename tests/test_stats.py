"""Tests for project statistics."""

from snap_organizer.core.stats import collect_project_stats
from snap_organizer.models.item import ItemKind, ItemSnapshot


def test_collect_project_stats():
    items = [
        ItemSnapshot(id="1", name="Main", kind=ItemKind.COMPOSITION),
        ItemSnapshot(id="2", name="Footage", kind=ItemKind.CONTAINER),
        ItemSnapshot(id="3", name="clip.mov"),
        ItemSnapshot(id="4", name="lost.MP4", is_missing=True),
        ItemSnapshot(id="5", name="logo.png"),
        ItemSnapshot(id="6", name="vo.wav"),
        ItemSnapshot(id="7", name="fx.[####].exr", is_sequence_frame=True),
        ItemSnapshot(id="8", name="Black Solid 1", is_solid_or_null=True),
    ]

    stats = collect_project_stats(items)

    assert stats.total_items == 8
    assert stats.comps == 1
    assert stats.folders == 1
    assert stats.footage == 2
    assert stats.missing == 1
    assert stats.images == 1
    assert stats.audio == 1
    assert stats.sequences == 1
    assert stats.solids == 1
    assert stats.by_extension == {"mov": 1, "mp4": 1, "png": 1, "wav": 1, "exr": 1}


def test_empty_project():
    stats = collect_project_stats([])
    assert stats.to_dict()["totalItems"] == 0
    assert stats.to_dict()["byExtension"] == {}
