"""
In-memory Repository Implementation.

A self-contained project tree used for previews, the command line front end
and tests. Projects can be loaded from and written back to JSON.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ...exceptions import MoveRejectedError, NoActiveProjectError
from ...models.item import ItemKind, ItemSnapshot
from .base import FolderHandle, ItemRepository

logger = logging.getLogger(__name__)


@dataclass
class _FolderNode:
    id: str
    name: str
    parent_id: Optional[str]
    label_color: Optional[int] = None


@dataclass
class _ItemEntry:
    snapshot: ItemSnapshot
    parent_id: Optional[str] = None
    label_color: Optional[int] = None


@dataclass
class InMemoryProject:
    """Folders and items of one project, kept in plain dictionaries."""
    folders: Dict[str, _FolderNode] = field(default_factory=dict)
    items: Dict[str, _ItemEntry] = field(default_factory=dict)
    next_folder_number: int = 1


class InMemoryItemRepository(ItemRepository):
    """ItemRepository backed by an in-memory folder tree."""

    def __init__(self, project: Optional[InMemoryProject] = None, reject_name_collisions: bool = False):
        self._project = project
        self.reject_name_collisions = reject_name_collisions
        self.folders_created = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs) -> "InMemoryItemRepository":
        """Build a project from its JSON form.

        Items may carry a ``parent`` list of folder names; folders listed in
        ``folders`` (lists of names) are created even when empty.
        """
        repository = cls(InMemoryProject(), **kwargs)
        for path in data.get("folders", []):
            repository._ensure_folder(path)

        for item_data in data.get("items", []):
            snapshot = ItemSnapshot.from_dict(item_data)
            if snapshot.kind == ItemKind.CONTAINER:
                repository._ensure_folder(list(item_data.get("parent", [])) + [snapshot.name])
                continue
            parent = repository._ensure_folder(item_data.get("parent", []))
            repository._project.items[snapshot.id] = _ItemEntry(
                snapshot=snapshot,
                parent_id=parent,
                label_color=item_data.get("labelColor"),
            )
        repository.folders_created = 0
        return repository

    @classmethod
    def load(cls, project_path: Path, **kwargs) -> "InMemoryItemRepository":
        """Load a project from a JSON file."""
        with open(project_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        repository = cls.from_dict(data, **kwargs)
        logger.info(f"Loaded {len(repository._project.items)} items from {project_path}")
        return repository

    def to_dict(self) -> Dict[str, Any]:
        """Export the project, including empty folders."""
        project = self._require_project()
        items = []
        for entry in project.items.values():
            item_data = entry.snapshot.to_dict()
            item_data["parent"] = list(self._folder_path(entry.parent_id))
            if entry.label_color is not None:
                item_data["labelColor"] = entry.label_color
            items.append(item_data)
        folders = sorted(self._folder_path(folder_id) for folder_id in project.folders)
        return {"folders": [list(path) for path in folders], "items": items}

    def save(self, project_path: Path) -> None:
        with open(project_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    # Inspection helpers

    def item_label_color(self, item_id: str) -> Optional[int]:
        return self._require_project().items[item_id].label_color

    def folder_label_color(self, path: Sequence[str]) -> Optional[int]:
        folder_id = self._find_folder(path)
        return self._require_project().folders[folder_id].label_color if folder_id else None

    def folder_paths(self) -> List[Tuple[str, ...]]:
        project = self._require_project()
        return sorted(self._folder_path(folder_id) for folder_id in project.folders)

    def close(self) -> None:
        """Drop the project, as if the host closed it."""
        self._project = None

    # ItemRepository

    def list_all_items(self) -> List[ItemSnapshot]:
        project = self._require_project()
        items = [
            ItemSnapshot(id=node.id, name=node.name, kind=ItemKind.CONTAINER)
            for node in project.folders.values()
        ]
        items.extend(entry.snapshot for entry in project.items.values())
        return items

    def is_item_in_subtree_named(self, item_id: str, folder_name: str) -> bool:
        project = self._require_project()
        entry = project.items.get(item_id)
        if entry is None:
            return False
        return folder_name in self._folder_path(entry.parent_id)

    def item_path(self, item_id: str) -> Tuple[str, ...]:
        return self._folder_path(self._require_project().items[item_id].parent_id)

    def find_or_create_folder(self, path: Sequence[str]) -> FolderHandle:
        folder_id = self._ensure_folder(path)
        return self._handle(folder_id)

    def move_item(self, item_id: str, folder: FolderHandle) -> bool:
        project = self._require_project()
        entry = project.items.get(item_id)
        if entry is None or folder.id not in project.folders:
            return False

        if self.reject_name_collisions:
            for other_id, other in project.items.items():
                if (other_id != item_id and other.parent_id == folder.id
                        and other.snapshot.name == entry.snapshot.name):
                    raise MoveRejectedError(
                        f"An item named '{entry.snapshot.name}' already exists in {'/'.join(folder.path)}"
                    )

        entry.parent_id = folder.id
        return True

    def set_label_color(self, item_id: str, color: int) -> None:
        project = self._require_project()
        if item_id in project.items:
            project.items[item_id].label_color = color

    def set_folder_label_color(self, folder: FolderHandle, color: int) -> None:
        project = self._require_project()
        if folder.id in project.folders:
            project.folders[folder.id].label_color = color

    def list_subfolders(self, folder: Optional[FolderHandle] = None) -> List[FolderHandle]:
        project = self._require_project()
        parent_id = folder.id if folder else None
        return [
            self._handle(node.id)
            for node in project.folders.values()
            if node.parent_id == parent_id
        ]

    def delete_folder_if_empty(self, folder: FolderHandle) -> bool:
        project = self._require_project()
        if folder.id not in project.folders:
            return False
        has_folders = any(node.parent_id == folder.id for node in project.folders.values())
        has_items = any(entry.parent_id == folder.id for entry in project.items.values())
        if has_folders or has_items:
            return False
        del project.folders[folder.id]
        return True

    def rename_item(self, item_id: str, new_name: str) -> None:
        project = self._require_project()
        entry = project.items[item_id]
        entry.snapshot = replace(entry.snapshot, name=new_name)

    # Internals

    def _require_project(self) -> InMemoryProject:
        if self._project is None:
            raise NoActiveProjectError("No project open")
        return self._project

    def _find_child(self, parent_id: Optional[str], name: str) -> Optional[str]:
        for node in self._require_project().folders.values():
            if node.parent_id == parent_id and node.name == name:
                return node.id
        return None

    def _find_folder(self, path: Sequence[str]) -> Optional[str]:
        current: Optional[str] = None
        for name in path:
            current = self._find_child(current, name)
            if current is None:
                return None
        return current

    def _ensure_folder(self, path: Sequence[str]) -> Optional[str]:
        project = self._require_project()
        current: Optional[str] = None
        for name in path:
            if not name:
                continue
            found = self._find_child(current, name)
            if found is None:
                found = f"folder-{project.next_folder_number}"
                project.next_folder_number += 1
                project.folders[found] = _FolderNode(id=found, name=name, parent_id=current)
                self.folders_created += 1
            current = found
        return current

    def _folder_path(self, folder_id: Optional[str]) -> Tuple[str, ...]:
        project = self._require_project()
        names: List[str] = []
        while folder_id is not None:
            node = project.folders[folder_id]
            names.append(node.name)
            folder_id = node.parent_id
        return tuple(reversed(names))

    def _handle(self, folder_id: Optional[str]) -> FolderHandle:
        if folder_id is None:
            raise ValueError("The project root is not a folder handle")
        node = self._require_project().folders[folder_id]
        return FolderHandle(id=node.id, name=node.name, path=self._folder_path(folder_id))
