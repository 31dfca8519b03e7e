"""Configuration model for snap organizer.

The persisted format is the camelCase JSON written by the configuration
editor. Every object keeps the keys it does not know about in ``extra`` so
that payloads written by newer versions survive a load/save round trip.
"""

import copy
import json
import logging
import random
import string
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.extensions import normalize_extension
from ..core.rule_schema import validate_config_json
from ..exceptions import ConfigurationError
from .defaults import (
    CONFIG_VERSION,
    DEFAULT_CONFIG_DATA,
    MAX_LABEL_COLOR,
    MIN_LABEL_COLOR,
    SYSTEM_FOLDER_ID,
    SYSTEM_FOLDER_ORDER,
)
from .item import CategoryType

logger = logging.getLogger(__name__)


class FilterKind(Enum):
    """What part of an item name a filter looks at."""
    EXTENSION = "ext"
    NAME_PREFIX = "prefix"
    NAME_KEYWORD = "keyword"


class ExceptionKind(Enum):
    """How an exception rule pattern is compared."""
    NAME_CONTAINS = "nameContains"
    EXTENSION = "extension"


def _read_label_color(data: Dict[str, Any]) -> Optional[int]:
    """Read a label color, honouring the legacy enableLabelColor switch."""
    if data.get("enableLabelColor") is False:
        return None
    color = data.get("labelColor")
    if isinstance(color, bool) or not isinstance(color, int):
        return None
    if MIN_LABEL_COLOR <= color <= MAX_LABEL_COLOR:
        return color
    return None


def _write_label_color(result: Dict[str, Any], color: Optional[int]) -> None:
    if color is not None:
        result["enableLabelColor"] = True
        result["labelColor"] = color


def _extra(data: Dict[str, Any], known: frozenset) -> Dict[str, Any]:
    return {key: copy.deepcopy(value) for key, value in data.items() if key not in known}


@dataclass
class Filter:
    """A single atomic match against an item name."""
    kind: FilterKind
    value: str

    def __post_init__(self) -> None:
        """Normalize the filter value after creation."""
        if isinstance(self.kind, str):
            self.kind = FilterKind(self.kind)

        value = (self.value or "").strip()
        if self.kind == FilterKind.EXTENSION:
            value = normalize_extension(value)
        if not value:
            raise ValueError(f"Filter value must not be empty ({self.kind.value})")
        self.value = value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Filter":
        return cls(kind=FilterKind(data["type"]), value=str(data["value"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass
class Subcategory:
    """A named bucket inside a category, selected by its filters."""
    id: str
    name: str
    order: int = 0
    filters: List[Filter] = field(default_factory=list)
    create_subfolders: bool = False
    label_color: Optional[int] = None
    keyword_required: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = frozenset([
        "id", "name", "order", "filters", "createSubfolders", "labelColor",
        "enableLabelColor", "keywordRequired", "extensions", "keywords", "filterType",
    ])

    @property
    def matches_everything(self) -> bool:
        """True for an "All Items" subcategory (no filters)."""
        return not self.filters and not self.keyword_required

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subcategory":
        filters = [Filter.from_dict(f) for f in data.get("filters") or []]

        # Legacy extension/keyword lists predate the unified filter list
        keyword_required = bool(data.get("keywordRequired", False))
        if not filters and data.get("filterType") != "all":
            for ext in data.get("extensions") or []:
                if normalize_extension(ext):
                    filters.append(Filter(FilterKind.EXTENSION, ext))
            for keyword in data.get("keywords") or []:
                if keyword and keyword.strip():
                    filters.append(Filter(FilterKind.NAME_KEYWORD, keyword))
            # A legacy list-based subcategory with empty lists matches nothing
            if not filters and data.get("filterType") is not None:
                keyword_required = True

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            order=int(data.get("order", 0) or 0),
            filters=filters,
            create_subfolders=bool(data.get("createSubfolders", False)),
            label_color=_read_label_color(data),
            keyword_required=keyword_required,
            extra=_extra(data, cls.KNOWN_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = dict(copy.deepcopy(self.extra))
        result.update({
            "id": self.id,
            "name": self.name,
            "order": self.order,
            "filters": [f.to_dict() for f in self.filters],
            "createSubfolders": self.create_subfolders,
        })
        if self.keyword_required:
            result["keywordRequired"] = True
        _write_label_color(result, self.label_color)
        return result


@dataclass
class CategoryRule:
    """Assignment of one category type to a destination folder."""
    type: CategoryType
    enabled: bool = True
    order: int = 0
    create_subfolders: bool = False
    detect_sequences: bool = False
    keywords: List[str] = field(default_factory=list)
    subcategories: List[Subcategory] = field(default_factory=list)
    label_color: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = frozenset([
        "type", "enabled", "order", "createSubfolders", "detectSequences",
        "keywords", "subcategories", "labelColor", "enableLabelColor",
    ])

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = CategoryType(self.type)

    @property
    def active_keywords(self) -> List[str]:
        """Trimmed, lower-cased, non-empty keywords."""
        return [k.strip().lower() for k in self.keywords if k and k.strip()]

    def sorted_subcategories(self) -> List[Subcategory]:
        """Subcategories by order; ties keep their list position."""
        return sorted(self.subcategories, key=lambda s: s.order)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryRule":
        return cls(
            type=CategoryType(data["type"]),
            enabled=bool(data.get("enabled", True)),
            order=int(data.get("order", 0) or 0),
            create_subfolders=bool(data.get("createSubfolders", False)),
            detect_sequences=bool(data.get("detectSequences", False)),
            keywords=[str(k) for k in data.get("keywords") or []],
            subcategories=[Subcategory.from_dict(s) for s in data.get("subcategories") or []],
            label_color=_read_label_color(data),
            extra=_extra(data, cls.KNOWN_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = dict(copy.deepcopy(self.extra))
        result.update({
            "type": self.type.value,
            "enabled": self.enabled,
            "order": self.order,
            "createSubfolders": self.create_subfolders,
            "detectSequences": self.detect_sequences,
            "keywords": list(self.keywords),
            "subcategories": [s.to_dict() for s in self.subcategories],
        })
        _write_label_color(result, self.label_color)
        return result


@dataclass
class FolderRule:
    """A top-level destination folder and the categories it collects."""
    id: str
    name: str
    order: int = 0
    is_render_folder: bool = False
    render_keywords: List[str] = field(default_factory=list)
    skip_organization: bool = False
    categories: List[CategoryRule] = field(default_factory=list)
    label_color: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = frozenset([
        "id", "name", "order", "isRenderFolder", "renderKeywords", "skipOrganization",
        "categories", "labelColor", "enableLabelColor",
    ])

    @property
    def is_system(self) -> bool:
        return self.id == SYSTEM_FOLDER_ID

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FolderRule":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            order=int(data.get("order", 0) or 0),
            is_render_folder=bool(data.get("isRenderFolder", False)),
            render_keywords=[str(k) for k in data.get("renderKeywords") or []],
            skip_organization=bool(data.get("skipOrganization", False)),
            categories=[CategoryRule.from_dict(c) for c in data.get("categories") or []],
            label_color=_read_label_color(data),
            extra=_extra(data, cls.KNOWN_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = dict(copy.deepcopy(self.extra))
        result.update({
            "id": self.id,
            "name": self.name,
            "order": self.order,
            "isRenderFolder": self.is_render_folder,
            "renderKeywords": list(self.render_keywords),
            "skipOrganization": self.skip_organization,
            "categories": [c.to_dict() for c in self.categories],
        })
        _write_label_color(result, self.label_color)
        return result


@dataclass
class ExceptionRule:
    """User override sending matching items straight to a folder."""
    id: str
    kind: ExceptionKind
    pattern: str
    target_folder_id: str
    target_category: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = frozenset(["id", "type", "pattern", "targetFolderId", "targetCategory"])

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = ExceptionKind(self.kind)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExceptionRule":
        return cls(
            id=str(data.get("id") or generate_id()),
            kind=ExceptionKind(data["type"]),
            pattern=str(data["pattern"]),
            target_folder_id=str(data["targetFolderId"]),
            target_category=data.get("targetCategory"),
            extra=_extra(data, cls.KNOWN_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = dict(copy.deepcopy(self.extra))
        result.update({
            "id": self.id,
            "type": self.kind.value,
            "pattern": self.pattern,
            "targetFolderId": self.target_folder_id,
        })
        if self.target_category is not None:
            result["targetCategory"] = self.target_category
        return result


@dataclass
class OrganizerSettings:
    """Run-level switches."""
    delete_empty_folders_after_run: bool = True
    apply_folder_label_color: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = frozenset(["deleteEmptyFoldersAfterRun", "deleteEmptyFolders", "applyFolderLabelColor"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrganizerSettings":
        delete_empty = data.get("deleteEmptyFoldersAfterRun", data.get("deleteEmptyFolders", True))
        return cls(
            delete_empty_folders_after_run=bool(delete_empty),
            apply_folder_label_color=bool(data.get("applyFolderLabelColor", False)),
            extra=_extra(data, cls.KNOWN_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = dict(copy.deepcopy(self.extra))
        result.update({
            "deleteEmptyFoldersAfterRun": self.delete_empty_folders_after_run,
            "applyFolderLabelColor": self.apply_folder_label_color,
        })
        return result


@dataclass
class OrganizerConfig:
    """Main configuration model, an immutable snapshot for each run."""
    folders: List[FolderRule] = field(default_factory=list)
    exceptions: List[ExceptionRule] = field(default_factory=list)
    settings: OrganizerSettings = field(default_factory=OrganizerSettings)
    schema_version: int = CONFIG_VERSION
    render_item_ids: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = frozenset(["folders", "exceptions", "settings", "schemaVersion", "version", "renderCompIds"])

    def get_folder(self, folder_id: str) -> Optional[FolderRule]:
        """Get a folder rule by id."""
        for folder in self.folders:
            if folder.id == folder_id:
                return folder
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrganizerConfig":
        """Build a configuration from decoded JSON.

        Raises:
            ConfigurationError: If the payload fails structural validation
        """
        errors = validate_config_json(data)
        if errors:
            raise ConfigurationError("Invalid organizer configuration", errors)

        version = data.get("schemaVersion", data.get("version"))
        if version is None or version < CONFIG_VERSION:
            version = CONFIG_VERSION

        try:
            return cls(
                folders=[FolderRule.from_dict(f) for f in data["folders"]],
                exceptions=[ExceptionRule.from_dict(e) for e in data["exceptions"]],
                settings=OrganizerSettings.from_dict(data["settings"]),
                schema_version=version,
                render_item_ids=[str(i) for i in data.get("renderCompIds") or []],
                extra=_extra(data, cls.KNOWN_KEYS),
            )
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Invalid organizer configuration: {e}", [str(e)])

    def to_dict(self) -> Dict[str, Any]:
        result = dict(copy.deepcopy(self.extra))
        result.update({
            "schemaVersion": self.schema_version,
            "folders": [f.to_dict() for f in self.folders],
            "exceptions": [e.to_dict() for e in self.exceptions],
            "renderCompIds": list(self.render_item_ids),
            "settings": self.settings.to_dict(),
        })
        return result


def default_config() -> OrganizerConfig:
    """Create the default configuration."""
    return OrganizerConfig.from_dict(copy.deepcopy(DEFAULT_CONFIG_DATA))


def config_from_json(text: str) -> OrganizerConfig:
    """Parse a configuration from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration is not valid JSON: {e.msg}", [e.msg])
    return OrganizerConfig.from_dict(data)


def config_to_json(config: OrganizerConfig) -> str:
    """Serialize a configuration to a JSON string."""
    return json.dumps(config.to_dict(), indent=2, ensure_ascii=False)


def load_config(config_path: Path) -> OrganizerConfig:
    """Load configuration from JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}", [str(e)])
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Configuration {config_path} is not valid UTF-8: {e}", [str(e)])

    config = config_from_json(text)
    logger.info(f"Loaded configuration with {len(config.folders)} folders from {config_path}")
    return config


def load_config_or_default(config_path: Optional[Path]) -> OrganizerConfig:
    """Load configuration, falling back to the defaults when it is missing or invalid."""
    if config_path is None or not Path(config_path).exists():
        return default_config()

    try:
        return load_config(config_path)
    except ConfigurationError as e:
        for error in e.errors:
            logger.warning(error)
        logger.warning(f"Discarding configuration {config_path}, using defaults: {e}")
        return default_config()


def save_config(config: OrganizerConfig, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w', encoding='utf-8') as f:
        f.write(config_to_json(config))
    logger.info(f"Saved configuration to {config_path}")


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    save_config(default_config(), config_path)


# Editor helpers

def generate_id() -> str:
    """Generate a 7-character lowercase alphanumeric id."""
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(7))


def sort_folders(folders: List[FolderRule]) -> List[FolderRule]:
    """Sort folders by order, with the system folder always last."""
    return sorted(folders, key=lambda f: (f.is_system, f.order))


def recalculate_folder_orders(folders: List[FolderRule]) -> List[FolderRule]:
    """Renumber folders densely in list order; the system folder is pinned to 99."""
    result = []
    order = 0
    for folder in folders:
        if folder.is_system:
            result.append(replace(folder, order=SYSTEM_FOLDER_ORDER))
        else:
            result.append(replace(folder, order=order))
            order += 1
    return result


def recalculate_category_orders(categories: List[CategoryRule]) -> List[CategoryRule]:
    """Renumber categories by list position."""
    return [replace(category, order=index) for index, category in enumerate(categories)]


def parse_filter_input(text: str, kind: FilterKind) -> List[Filter]:
    """Parse comma-separated input into filters.

    Example:
        ``".mp4, .mov"`` with ``FilterKind.EXTENSION`` gives ``mp4`` and ``mov``
    """
    values = [v.strip() for v in (text or "").split(",")]
    filters = []
    for value in values:
        if kind == FilterKind.EXTENSION:
            value = normalize_extension(value)
        if value:
            filters.append(Filter(kind, value))
    return filters
