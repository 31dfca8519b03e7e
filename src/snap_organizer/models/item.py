"""Item snapshot model representing project items supplied by the host."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from ..core.extensions import normalize_extension, parse_extension


class ItemKind(Enum):
    """Kinds of project items."""
    COMPOSITION = "composition"
    MEDIA = "media"
    CONTAINER = "container"


class CategoryType(Enum):
    """Category types a folder can collect."""
    COMPS = "Comps"
    FOOTAGE = "Footage"
    IMAGES = "Images"
    AUDIO = "Audio"
    SOLIDS = "Solids"


@dataclass(frozen=True)
class ItemSnapshot:
    """Immutable view of one project item for the duration of a run."""

    id: str
    name: str
    kind: ItemKind = ItemKind.MEDIA
    extension: str = ""
    is_sequence_frame: bool = False
    is_solid_or_null: bool = False
    is_missing: bool = False

    @property
    def effective_extension(self) -> str:
        """Host-reported extension, or the one parsed from the name."""
        return normalize_extension(self.extension) or parse_extension(self.name)

    @property
    def is_container(self) -> bool:
        return self.kind == ItemKind.CONTAINER

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemSnapshot":
        """Build a snapshot from its JSON form."""
        kind = data.get("kind", ItemKind.MEDIA.value)
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            kind=kind if isinstance(kind, ItemKind) else ItemKind(str(kind).lower()),
            extension=str(data.get("extension", "") or ""),
            is_sequence_frame=bool(data.get("isSequenceFrame", False)),
            is_solid_or_null=bool(data.get("isSolidOrNull", False)),
            is_missing=bool(data.get("isMissing", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "extension": self.extension,
            "isSequenceFrame": self.is_sequence_frame,
            "isSolidOrNull": self.is_solid_or_null,
            "isMissing": self.is_missing,
        }


@dataclass
class ProjectStats:
    """Counts of project items by category."""
    total_items: int = 0
    comps: int = 0
    footage: int = 0
    images: int = 0
    audio: int = 0
    sequences: int = 0
    solids: int = 0
    folders: int = 0
    missing: int = 0
    by_extension: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalItems": self.total_items,
            "comps": self.comps,
            "footage": self.footage,
            "images": self.images,
            "audio": self.audio,
            "sequences": self.sequences,
            "solids": self.solids,
            "folders": self.folders,
            "missing": self.missing,
            "byExtension": dict(self.by_extension),
        }

