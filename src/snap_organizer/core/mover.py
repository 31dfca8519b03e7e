"""Folder tree materialization: creating folders, moving items, cleanup."""

import logging
from typing import Dict, List, Optional, Tuple

from ..exceptions import HostError, MoveRejectedError
from ..infrastructure.repositories.base import FolderHandle, ItemRepository
from ..models.result import Placement, PlacementReason

logger = logging.getLogger(__name__)


class FolderTreeMaterializer:
    """Execute a batch of placements against an item repository.

    Folders are looked up or created by exact name within their parent, so
    running the same placements twice creates no new folders.
    """

    def __init__(self, repository: ItemRepository):
        self.repository = repository
        self.moved_counts: Dict[str, int] = {}
        self.skipped = 0
        self._folders: Dict[Tuple[str, ...], FolderHandle] = {}

    def reset(self) -> None:
        self.moved_counts = {}
        self.skipped = 0
        self._folders = {}

    def ensure_folder(self, path: Tuple[str, ...]) -> FolderHandle:
        """Find or create the folder at a path, caching handles for the run."""
        handle = self._folders.get(path)
        if handle is None:
            handle = self.repository.find_or_create_folder(list(path))
            self._folders[path] = handle
        return handle

    def prepare_root_folders(self, display_names: List[str], label_colors: Optional[Dict[str, int]] = None) -> None:
        """Materialize every top-level folder in display order.

        Args:
            display_names: Numbered root folder names in sorted order
            label_colors: Optional label color per display name
        """
        label_colors = label_colors or {}
        for name in display_names:
            handle = self.ensure_folder((name,))
            color = label_colors.get(name)
            if color is not None:
                try:
                    self.repository.set_folder_label_color(handle, color)
                except HostError as e:
                    logger.warning(f"Could not set label color on folder {name}: {e}")

    def execute(self, placements: List[Placement]) -> None:
        """Move every resolved placement into its destination folder.

        A rejected move is counted as skipped. Any other host failure
        propagates and ends the batch; counts gathered so far stay available.
        Items in frozen folders are tallied under their folder but not touched.
        """
        for placement in placements:
            if placement.is_skipped:
                continue

            if placement.reason == PlacementReason.FROZEN:
                self._tally(placement)
                continue

            folder = self.ensure_folder(placement.destination_path)
            try:
                moved = self.repository.move_item(placement.item_id, folder)
            except MoveRejectedError as e:
                logger.warning(f"Move of {placement.item_name} rejected: {e}")
                self.skipped += 1
                continue

            if not moved:
                logger.warning(f"Could not move {placement.item_name} to {placement.path_string}")
                self.skipped += 1
                continue

            self._tally(placement)
            logger.debug(f"Moved {placement.item_name} -> {placement.path_string}")

            if placement.label_color is not None:
                try:
                    self.repository.set_label_color(placement.item_id, placement.label_color)
                except HostError as e:
                    logger.warning(f"Could not set label color on {placement.item_name}: {e}")

    def _tally(self, placement: Placement) -> None:
        self.moved_counts[placement.folder_id] = self.moved_counts.get(placement.folder_id, 0) + 1

    def delete_empty_folders(self) -> int:
        """Delete every empty folder, including parents emptied by the deletion.

        Returns:
            Number of folders deleted
        """
        deleted = 0
        for folder in self.repository.list_subfolders(None):
            deleted += self._prune(folder)

        self._folders = {}
        if deleted:
            logger.info(f"Removed {deleted} empty folders")
        return deleted

    def _prune(self, folder: FolderHandle) -> int:
        """Post-order deletion below and including a folder."""
        deleted = 0
        for child in self.repository.list_subfolders(folder):
            deleted += self._prune(child)

        if self.repository.delete_folder_if_empty(folder):
            logger.debug(f"Deleted empty folder {'/'.join(folder.path)}")
            deleted += 1
        return deleted
