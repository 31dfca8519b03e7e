"""Data models for snap organizer."""

from .item import CategoryType, ItemKind, ItemSnapshot, ProjectStats
from .config import (
    CategoryRule,
    ExceptionKind,
    ExceptionRule,
    Filter,
    FilterKind,
    FolderRule,
    OrganizerConfig,
    OrganizerSettings,
    Subcategory,
)
from .result import MoveResult, OrganizeResult, Placement, PlacementPlan, PlacementReason

__all__ = [
    "CategoryType", "ItemKind", "ItemSnapshot", "ProjectStats",
    "CategoryRule", "ExceptionKind", "ExceptionRule", "Filter", "FilterKind",
    "FolderRule", "OrganizerConfig", "OrganizerSettings", "Subcategory",
    "MoveResult", "OrganizeResult", "Placement", "PlacementPlan", "PlacementReason",
]
