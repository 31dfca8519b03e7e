"""Snap Organizer

Rule-driven placement of project items into numbered folder trees.
"""

__version__ = "0.1.0"

# Models load first; the configuration model pulls in the schema validator
from .models import ItemKind, ItemSnapshot, OrganizeResult, OrganizerConfig
from .core.organizer import PlacementPlanner, ProjectOrganizer
from .infrastructure.repositories import InMemoryItemRepository, ItemRepository

__all__ = [
    "ItemKind",
    "ItemSnapshot",
    "OrganizeResult",
    "OrganizerConfig",
    "PlacementPlanner",
    "ProjectOrganizer",
    "InMemoryItemRepository",
    "ItemRepository",
]
