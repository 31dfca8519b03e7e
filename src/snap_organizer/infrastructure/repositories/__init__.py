"""Repository implementations for host project access."""

from .base import FolderHandle, ItemRepository
from .in_memory_repository import InMemoryItemRepository, InMemoryProject

__all__ = [
    "FolderHandle",
    "ItemRepository",
    "InMemoryItemRepository",
    "InMemoryProject",
]
