"""Tests for the in-memory item repository."""

import json

import pytest

from snap_organizer.exceptions import MoveRejectedError, NoActiveProjectError
from snap_organizer.infrastructure.repositories import InMemoryItemRepository
from snap_organizer.models.item import ItemKind


@pytest.fixture
def repository():
    return InMemoryItemRepository.from_dict({
        "folders": [["Empty"]],
        "items": [
            {"id": "1", "name": "clip.mov", "extension": "mov", "parent": ["Old", "Footage"]},
            {"id": "2", "name": "Main", "kind": "composition"},
        ],
    })


class TestInMemoryItemRepository:
    """Test project tree operations."""

    def test_list_all_items_includes_folders(self, repository):
        items = repository.list_all_items()
        containers = [i for i in items if i.kind == ItemKind.CONTAINER]
        assert sorted(c.name for c in containers) == ["Empty", "Footage", "Old"]
        assert {i.id for i in items if not i.is_container} == {"1", "2"}

    def test_find_or_create_is_idempotent(self, repository):
        first = repository.find_or_create_folder(["Old", "Footage"])
        again = repository.find_or_create_folder(["Old", "Footage"])
        assert first == again
        assert first.path == ("Old", "Footage")
        assert repository.folders_created == 0

    def test_same_name_under_different_parents(self, repository):
        a = repository.find_or_create_folder(["A", "Footage"])
        b = repository.find_or_create_folder(["B", "Footage"])
        assert a.id != b.id

    def test_is_item_in_subtree_named(self, repository):
        assert repository.is_item_in_subtree_named("1", "Old")
        assert repository.is_item_in_subtree_named("1", "Footage")
        assert not repository.is_item_in_subtree_named("2", "Old")
        assert not repository.is_item_in_subtree_named("missing", "Old")

    def test_move_item(self, repository):
        folder = repository.find_or_create_folder(["New"])
        assert repository.move_item("2", folder)
        assert repository.item_path("2") == ("New",)

    def test_move_unknown_item(self, repository):
        folder = repository.find_or_create_folder(["New"])
        assert not repository.move_item("missing", folder)

    def test_name_collision_rejected(self):
        repository = InMemoryItemRepository.from_dict(
            {"items": [
                {"id": "1", "name": "clip.mov", "parent": ["A"]},
                {"id": "2", "name": "clip.mov"},
            ]},
            reject_name_collisions=True,
        )
        folder = repository.find_or_create_folder(["A"])
        with pytest.raises(MoveRejectedError):
            repository.move_item("2", folder)

    def test_delete_folder_if_empty(self, repository):
        assert repository.delete_folder_if_empty(repository.find_or_create_folder(["Empty"]))
        assert not repository.delete_folder_if_empty(repository.find_or_create_folder(["Old"]))

    def test_rename_item(self, repository):
        repository.rename_item("2", "Main v2")
        names = {i.id: i.name for i in repository.list_all_items()}
        assert names["2"] == "Main v2"

    def test_closed_project(self, repository):
        repository.close()
        with pytest.raises(NoActiveProjectError):
            repository.list_all_items()

    def test_save_and_load(self, repository, tmp_path):
        path = tmp_path / "project.json"
        repository.set_label_color("1", 5)
        repository.save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert ["Empty"] in data["folders"]

        loaded = InMemoryItemRepository.load(path)
        assert loaded.item_path("1") == ("Old", "Footage")
        assert loaded.item_label_color("1") == 5
        assert loaded.folder_paths() == repository.folder_paths()
