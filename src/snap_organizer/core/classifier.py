"""Category classification for project items."""

from dataclasses import dataclass
from typing import Optional

from ..models.item import CategoryType, ItemKind, ItemSnapshot
from .extensions import (
    AUDIO_EXTENSIONS,
    IMAGE_EXTENSIONS,
    SEQUENCE_CG_EXTENSIONS,
    normalize_extension,
)


@dataclass(frozen=True)
class Classification:
    """Category of an item; sequences are Footage with ``is_sequence`` set."""
    category: CategoryType
    is_sequence: bool = False


class ItemClassifier:
    """Classify project items into category types by kind and extension."""

    AUDIO_EXTENSIONS = AUDIO_EXTENSIONS
    IMAGE_EXTENSIONS = IMAGE_EXTENSIONS
    STILL_EXTENSIONS = SEQUENCE_CG_EXTENSIONS

    @classmethod
    def classify(cls, extension: str, is_sequence_frame: bool = False) -> Classification:
        """
        Classify a media extension.

        Lookup order is audio, images, CG stills, then Footage for anything
        else, including an empty extension.
        """
        if is_sequence_frame:
            return Classification(CategoryType.FOOTAGE, is_sequence=True)

        ext = normalize_extension(extension)
        if ext in cls.AUDIO_EXTENSIONS:
            return Classification(CategoryType.AUDIO)
        if ext in cls.IMAGE_EXTENSIONS:
            return Classification(CategoryType.IMAGES)
        # CG/VFX formats that are not flagged as a sequence are stills
        if ext in cls.STILL_EXTENSIONS:
            return Classification(CategoryType.IMAGES)
        return Classification(CategoryType.FOOTAGE)

    @classmethod
    def classify_item(cls, item: ItemSnapshot, detect_sequences: bool = False) -> Optional[Classification]:
        """
        Classify a project item.

        Returns:
            The classification, or None for containers
        """
        if item.kind == ItemKind.COMPOSITION:
            return Classification(CategoryType.COMPS)
        if item.kind == ItemKind.CONTAINER:
            return None
        if item.kind == ItemKind.MEDIA:
            if item.is_solid_or_null:
                return Classification(CategoryType.SOLIDS)
            return cls.classify(
                item.effective_extension,
                is_sequence_frame=detect_sequences and item.is_sequence_frame,
            )
        return None
