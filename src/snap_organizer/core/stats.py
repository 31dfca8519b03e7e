"""Project statistics."""

from typing import Iterable

from ..models.item import CategoryType, ItemKind, ItemSnapshot, ProjectStats
from .classifier import ItemClassifier


def collect_project_stats(items: Iterable[ItemSnapshot]) -> ProjectStats:
    """Count project items by category.

    Missing media is counted in ``missing`` as well as in its category.
    """
    stats = ProjectStats()
    for item in items:
        stats.total_items += 1

        if item.kind == ItemKind.CONTAINER:
            stats.folders += 1
            continue
        if item.kind == ItemKind.COMPOSITION:
            stats.comps += 1
            continue

        if item.is_missing:
            stats.missing += 1

        if item.is_solid_or_null:
            stats.solids += 1
            continue

        ext = item.effective_extension
        if ext:
            stats.by_extension[ext] = stats.by_extension.get(ext, 0) + 1

        if item.is_sequence_frame:
            stats.sequences += 1
            continue

        category = ItemClassifier.classify(ext).category
        if category == CategoryType.AUDIO:
            stats.audio += 1
        elif category == CategoryType.IMAGES:
            stats.images += 1
        else:
            stats.footage += 1

    return stats
