"""Item Repository Interface.

The host application owns the project. Everything the placement engine
needs from it goes through this interface, so the engine never touches
host SDK objects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ...models.item import ItemSnapshot


@dataclass(frozen=True)
class FolderHandle:
    """Reference to a folder in the host project."""
    id: str
    name: str
    path: Tuple[str, ...]


class ItemRepository(ABC):
    """Repository over the items and folders of one host project."""

    @abstractmethod
    def list_all_items(self) -> List[ItemSnapshot]:
        """List every project item, containers included.

        Raises:
            NoActiveProjectError: If no project is open
        """
        pass

    @abstractmethod
    def is_item_in_subtree_named(self, item_id: str, folder_name: str) -> bool:
        """Check if any ancestor folder of an item has the given name."""
        pass

    @abstractmethod
    def item_path(self, item_id: str) -> Tuple[str, ...]:
        """Folder names from the project root down to the item's parent."""
        pass

    @abstractmethod
    def find_or_create_folder(self, path: Sequence[str]) -> FolderHandle:
        """Find or create the folder at a path of names below the project root.

        Each segment is looked up by exact name inside its parent.
        """
        pass

    @abstractmethod
    def move_item(self, item_id: str, folder: FolderHandle) -> bool:
        """Move an item into a folder.

        Returns:
            True if the item was moved

        Raises:
            MoveRejectedError: If the host refuses this one move
            HostError: If the host is in an unrecoverable state
        """
        pass

    @abstractmethod
    def set_label_color(self, item_id: str, color: int) -> None:
        """Set the label color (1-16) of an item."""
        pass

    @abstractmethod
    def set_folder_label_color(self, folder: FolderHandle, color: int) -> None:
        """Set the label color (1-16) of a folder."""
        pass

    @abstractmethod
    def list_subfolders(self, folder: Optional[FolderHandle] = None) -> List[FolderHandle]:
        """List the direct child folders of a folder, or of the project root."""
        pass

    @abstractmethod
    def delete_folder_if_empty(self, folder: FolderHandle) -> bool:
        """Delete a folder that has no children.

        Returns:
            True if the folder was deleted
        """
        pass

    @abstractmethod
    def rename_item(self, item_id: str, new_name: str) -> None:
        """Rename an item."""
        pass
