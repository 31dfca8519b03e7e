"""Default configuration values for snap organizer."""

from typing import Any, Dict, List

# Current persisted configuration version
CONFIG_VERSION = 5

# Oldest persisted version that is still accepted
MIN_SCHEMA_VERSION = 1

# Reserved folder id, always sorted and numbered last
SYSTEM_FOLDER_ID = "system"
SYSTEM_FOLDER_ORDER = 99

MIN_LABEL_COLOR = 1
MAX_LABEL_COLOR = 16

ALL_CATEGORIES: List[str] = ["Comps", "Footage", "Images", "Audio", "Solids"]

DEFAULT_CONFIG_DATA: Dict[str, Any] = {
    "schemaVersion": CONFIG_VERSION,
    "folders": [
        {
            "id": "render",
            "name": "Render",
            "order": 0,
            "isRenderFolder": True,
            "renderKeywords": ["Main", "Render"],
            "skipOrganization": True,
            "categories": [],
        },
        {
            "id": "source",
            "name": "Source",
            "order": 1,
            "isRenderFolder": False,
            "categories": [
                {"type": "Comps", "enabled": True, "order": 0, "createSubfolders": False},
                {"type": "Footage", "enabled": True, "order": 1, "createSubfolders": False,
                 "detectSequences": True},
                {"type": "Images", "enabled": True, "order": 2, "createSubfolders": False,
                 "detectSequences": True},
                {"type": "Audio", "enabled": True, "order": 3, "createSubfolders": False},
            ],
        },
        {
            "id": SYSTEM_FOLDER_ID,
            "name": "System",
            "order": SYSTEM_FOLDER_ORDER,
            "isRenderFolder": False,
            "categories": [
                {"type": "Solids", "enabled": True, "order": 0, "createSubfolders": False},
            ],
        },
    ],
    "exceptions": [],
    "renderCompIds": [],
    "settings": {
        "deleteEmptyFoldersAfterRun": True,
        "applyFolderLabelColor": False,
    },
}

# Host label palette (index -> hex), used for display only
DEFAULT_LABEL_COLORS: Dict[int, str] = {
    1: "#ff0000",   # Red
    2: "#ffc500",   # Yellow
    3: "#ccff00",   # Green-Yellow
    4: "#00ff00",   # Green
    5: "#00ffcc",   # Cyan-Green
    6: "#00ccff",   # Cyan
    7: "#0066ff",   # Blue
    8: "#6600ff",   # Purple
    9: "#ff00ff",   # Magenta
    10: "#ff6699",  # Pink
    11: "#ff9933",  # Orange
    12: "#996633",  # Brown
    13: "#669999",  # Teal
    14: "#999966",  # Olive
    15: "#666699",  # Slate
    16: "#996699",  # Plum
}
