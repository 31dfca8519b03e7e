"""Destination path assembly and numbered folder names."""

from typing import Dict, List, Optional, Tuple

from ..models.config import FolderRule, Subcategory, sort_folders
from ..models.defaults import SYSTEM_FOLDER_ID, SYSTEM_FOLDER_ORDER
from ..models.item import CategoryType
from .extensions import normalize_extension, sequence_type_name
from .rule_engine import others_folder_name

SEQUENCES_FOLDER_NAME = "Sequences"


def numbered_name(number: int, name: str) -> str:
    """Prefix a name with a two-digit number, e.g. ``01_Footage``."""
    return f"{number:02d}_{name}"


def display_folder_name(folder: FolderRule, index: int) -> str:
    """Displayed name of a top-level folder at a 0-based sorted position."""
    if folder.id == SYSTEM_FOLDER_ID:
        return numbered_name(SYSTEM_FOLDER_ORDER, folder.name)
    return numbered_name(index, folder.name)


def folder_display_names(folders: List[FolderRule]) -> Dict[str, str]:
    """Map folder ids to their displayed names, independent of input order."""
    return {
        folder.id: display_folder_name(folder, index)
        for index, folder in enumerate(sort_folders(folders))
    }


class PathBuilder:
    """Build a destination path one segment at a time.

    Example:
        >>> PathBuilder("01_Source").category(1, CategoryType.FOOTAGE).sequence("exr").build()
        ('01_Source', '01_Footage', 'Sequences', 'EXR Sequence')
    """

    def __init__(self, root: Optional[str] = None):
        self._segments: List[str] = [root] if root else []

    def category(self, rank: int, category: CategoryType) -> "PathBuilder":
        self._segments.append(numbered_name(rank, category.value))
        return self

    def subcategory(self, subcategory: Subcategory) -> "PathBuilder":
        self._segments.append(numbered_name(subcategory.order, subcategory.name))
        return self

    def others(self, subcategory_count: int) -> "PathBuilder":
        self._segments.append(others_folder_name(subcategory_count))
        return self

    def sequence(self, extension: str) -> "PathBuilder":
        self._segments.append(SEQUENCES_FOLDER_NAME)
        self._segments.append(sequence_type_name(extension))
        return self

    def extension(self, extension: Optional[str]) -> "PathBuilder":
        ext = normalize_extension(extension or "")
        if ext:
            self._segments.append(f"_{ext.upper()}")
        return self

    def build(self) -> Tuple[str, ...]:
        return tuple(self._segments)
