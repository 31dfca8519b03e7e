"""Category-to-folder mapping.

A category type may be collected by several folders. The first folder wins
unless a later entry carries a keyword found in the item name.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.config import CategoryRule, FolderRule, sort_folders
from ..models.item import CategoryType


@dataclass(frozen=True)
class CategoryMapping:
    """One folder that collects a category type."""
    folder_id: str
    rule: CategoryRule
    priority_rank: int  # 1-based, also the numeric prefix of the category subfolder

    def matches_keywords(self, item_name: str) -> bool:
        name = item_name.lower()
        return any(keyword in name for keyword in self.rule.active_keywords)


class CategoryMappings:
    """Ordered mapping entries for every category type."""

    def __init__(self, entries: Optional[Dict[CategoryType, List[CategoryMapping]]] = None):
        self._entries: Dict[CategoryType, List[CategoryMapping]] = entries or {}

    @classmethod
    def build(cls, folders: List[FolderRule]) -> "CategoryMappings":
        """Build mapping entries from folder rules.

        Folders are visited in display order; inside a folder categories are
        visited by their ``order``. Disabled categories keep their rank slot
        but produce no entry.
        """
        entries: Dict[CategoryType, List[CategoryMapping]] = {}
        for folder in sort_folders(folders):
            ordered = sorted(folder.categories, key=lambda c: c.order)
            for index, category in enumerate(ordered):
                if not category.enabled:
                    continue
                entries.setdefault(category.type, []).append(
                    CategoryMapping(folder_id=folder.id, rule=category, priority_rank=index + 1)
                )
        return cls(entries)

    def entries_for(self, category: CategoryType) -> List[CategoryMapping]:
        return list(self._entries.get(category, []))

    def select(self, category: CategoryType, item_name: str) -> Optional[CategoryMapping]:
        """Pick the mapping entry governing an item of the given category.

        Returns:
            The first keyword-matching entry, else the first entry, else None
        """
        entries = self._entries.get(category)
        if not entries:
            return None

        for entry in entries:
            if entry.matches_keywords(item_name):
                return entry
        return entries[0]

    def __contains__(self, category: CategoryType) -> bool:
        return bool(self._entries.get(category))
