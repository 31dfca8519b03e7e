"""Placement decisions and run outcomes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class PlacementReason(Enum):
    """Which step decided where an item goes."""
    RENDER = "render"
    CATEGORY = "category"
    SEQUENCE = "sequence"
    EXCEPTION = "exception"
    FROZEN = "frozen"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class Placement:
    """Destination decided for one item."""
    item_id: str
    item_name: str
    reason: PlacementReason
    folder_id: Optional[str] = None
    destination_path: Tuple[str, ...] = ()
    label_color: Optional[int] = None

    @property
    def is_skipped(self) -> bool:
        return self.folder_id is None

    @property
    def path_string(self) -> str:
        return "/".join(self.destination_path)


@dataclass
class PlacementPlan:
    """Every placement decision of one run, computed before anything moves."""
    placements: List[Placement] = field(default_factory=list)

    @property
    def resolved(self) -> List[Placement]:
        return [p for p in self.placements if not p.is_skipped]

    @property
    def skipped_count(self) -> int:
        return sum(1 for p in self.placements if p.is_skipped)

    def counts_by_folder(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for placement in self.resolved:
            counts[placement.folder_id] = counts.get(placement.folder_id, 0) + 1
        return counts

    def get(self, item_id: str) -> Optional[Placement]:
        for placement in self.placements:
            if placement.item_id == item_id:
                return placement
        return None


@dataclass
class MoveResult:
    """Number of items moved into one top-level folder."""
    folder_id: str
    folder_name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"folderId": self.folder_id, "folderName": self.folder_name, "count": self.count}


@dataclass
class OrganizeResult:
    """Outcome of one organize run reported to the caller."""
    success: bool
    moved_items: List[MoveResult] = field(default_factory=list)
    skipped_count: int = 0
    error: Optional[str] = None
    deleted_folders: int = 0
    plan: Optional[PlacementPlan] = None

    @property
    def moved_count(self) -> int:
        return sum(m.count for m in self.moved_items)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "success": self.success,
            "movedItems": [m.to_dict() for m in self.moved_items],
            "skippedCount": self.skipped_count,
        }
        if self.error is not None:
            result["error"] = self.error
        return result
