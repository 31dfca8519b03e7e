"""JSON schema and validation for organizer configurations."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List

import jsonschema

from ..models.defaults import ALL_CATEGORIES, MAX_LABEL_COLOR, MIN_LABEL_COLOR, MIN_SCHEMA_VERSION

if TYPE_CHECKING:
    from ..models.config import OrganizerConfig

LABEL_COLOR_SCHEMA = {
    "type": ["integer", "null"],
    "minimum": MIN_LABEL_COLOR,
    "maximum": MAX_LABEL_COLOR,
    "description": "Host label color index"
}

FILTER_SCHEMA = {
    "type": "object",
    "required": ["type", "value"],
    "properties": {
        "type": {
            "type": "string",
            "enum": ["ext", "prefix", "keyword"],
            "description": "What part of the item name the filter looks at"
        },
        "value": {
            "type": "string",
            "pattern": r"\S",
            "description": "Extension, prefix or keyword to match (case-insensitive)"
        }
    }
}

SUBCATEGORY_SCHEMA = {
    "type": "object",
    "required": ["id", "name"],
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "order": {"type": "integer"},
        "filters": {"type": "array", "items": FILTER_SCHEMA},
        "extensions": {"type": "array", "items": {"type": "string"}},
        "keywords": {"type": "array", "items": {"type": "string"}},
        "filterType": {"type": "string", "enum": ["extension", "keyword", "all"]},
        "keywordRequired": {"type": "boolean"},
        "createSubfolders": {"type": "boolean"},
        "enableLabelColor": {"type": "boolean"},
        "labelColor": LABEL_COLOR_SCHEMA
    }
}

CATEGORY_SCHEMA = {
    "type": "object",
    "required": ["type"],
    "properties": {
        "type": {
            "type": "string",
            "enum": ALL_CATEGORIES,
            "description": "Category type collected by this rule"
        },
        "enabled": {"type": "boolean", "default": True},
        "order": {"type": "integer"},
        "createSubfolders": {"type": "boolean"},
        "detectSequences": {"type": "boolean"},
        "keywords": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Name keywords that pick this folder when the type is mapped more than once"
        },
        "subcategories": {"type": "array", "items": SUBCATEGORY_SCHEMA},
        "enableLabelColor": {"type": "boolean"},
        "labelColor": LABEL_COLOR_SCHEMA
    }
}

FOLDER_SCHEMA = {
    "type": "object",
    "required": ["id", "name"],
    "properties": {
        "id": {"type": "string", "description": "Stable folder id, 'system' is reserved"},
        "name": {"type": "string", "description": "Base folder name without number prefix"},
        "order": {"type": "integer"},
        "isRenderFolder": {"type": "boolean"},
        "renderKeywords": {"type": "array", "items": {"type": "string"}},
        "skipOrganization": {"type": "boolean"},
        "categories": {"type": "array", "items": CATEGORY_SCHEMA},
        "enableLabelColor": {"type": "boolean"},
        "labelColor": LABEL_COLOR_SCHEMA
    }
}

EXCEPTION_SCHEMA = {
    "type": "object",
    "required": ["type", "pattern", "targetFolderId"],
    "properties": {
        "id": {"type": "string"},
        "type": {"type": "string", "enum": ["nameContains", "extension"]},
        "pattern": {"type": "string"},
        "targetFolderId": {"type": "string"},
        "targetCategory": {"type": ["string", "null"]}
    }
}

# JSON Schema for a persisted organizer configuration
CONFIG_SCHEMA = {
    "type": "object",
    "required": ["folders", "exceptions", "settings"],
    "properties": {
        "schemaVersion": {"type": "integer", "minimum": MIN_SCHEMA_VERSION},
        "version": {"type": "integer", "minimum": MIN_SCHEMA_VERSION},
        "folders": {"type": "array", "items": FOLDER_SCHEMA},
        "exceptions": {"type": "array", "items": EXCEPTION_SCHEMA},
        "renderCompIds": {"type": "array", "items": {"type": ["string", "integer"]}},
        "settings": {
            "type": "object",
            "properties": {
                "deleteEmptyFoldersAfterRun": {"type": "boolean"},
                "deleteEmptyFolders": {"type": "boolean"},
                "applyFolderLabelColor": {"type": "boolean"}
            }
        }
    }
}


def validate_config_json(config_data: Any) -> List[str]:
    """Validate an organizer configuration JSON object.

    Unknown fields are allowed everywhere so newer payloads still validate.

    Args:
        config_data: The decoded configuration

    Returns:
        List of validation error messages
    """
    validator = jsonschema.Draft7Validator(CONFIG_SCHEMA)
    errors = []
    for error in sorted(validator.iter_errors(config_data), key=lambda e: list(e.absolute_path)):
        path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
        errors.append(f"Validation error at {path}: {error.message}")
    return errors


def validate_config_file(file_path: Path) -> List[str]:
    """Validate an organizer configuration JSON file.

    Args:
        file_path: Path to the configuration file

    Returns:
        List of validation error messages
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
        return validate_config_json(config_data)
    except json.JSONDecodeError as e:
        return [f"JSON parsing error: {e.msg} at line {e.lineno}, column {e.colno}"]
    except UnicodeDecodeError as e:
        return [f"Encoding error: {str(e)}"]
    except OSError as e:
        return [f"Error reading file: {str(e)}"]


def find_config_warnings(config: "OrganizerConfig") -> List[str]:
    """Find configuration problems that do not block a run.

    Returns:
        List of warning messages
    """
    warnings = []
    folder_ids = {folder.id for folder in config.folders}

    # Same category type mapped in several folders needs keywords to be reachable
    placements: Dict[str, List[Any]] = {}
    for folder in config.folders:
        for category in folder.categories:
            if category.enabled:
                placements.setdefault(category.type.value, []).append((folder, category))

    for category_type, entries in placements.items():
        if len(entries) < 2:
            continue
        for folder, category in entries[1:]:
            if not any(k.strip() for k in category.keywords):
                warnings.append(
                    f"Category '{category_type}' in folder '{folder.name}' repeats an earlier "
                    f"folder without keywords and will never be selected"
                )

    for folder in config.folders:
        # Keywords shared between categories of one folder
        keyword_owners: Dict[str, List[str]] = {}
        for category in folder.categories:
            for keyword in category.keywords:
                keyword = keyword.strip().lower()
                if keyword:
                    keyword_owners.setdefault(keyword, []).append(category.type.value)
        for keyword, owners in keyword_owners.items():
            if len(owners) > 1:
                warnings.append(
                    f"Keyword '{keyword}' is used by several categories in folder "
                    f"'{folder.name}': {', '.join(owners)}"
                )

        for category in folder.categories:
            catch_all = [s for s in category.sorted_subcategories() if s.matches_everything]
            if len(catch_all) > 1:
                shadowed = ", ".join(s.name for s in catch_all[1:])
                warnings.append(
                    f"Category '{category.type.value}' in folder '{folder.name}' has several "
                    f"subcategories without filters; '{catch_all[0].name}' shadows {shadowed}"
                )

    for exception in config.exceptions:
        if exception.target_folder_id not in folder_ids:
            warnings.append(
                f"Exception '{exception.pattern}' targets unknown folder '{exception.target_folder_id}'"
            )

    return warnings
