"""
Widget catalog: built-in defaults, tints, and the new-widget factory.
Shared by the store (first-run document) and the autosave client (add widget).
"""

import copy
import uuid
from typing import Dict, List

WIDGET_TYPES = ("clock", "weather", "stocks", "shortcuts", "notes", "quote")

# tint id -> display name
TINTS: Dict[str, str] = {
    "default": "Glass",
    "blue": "Ocean",
    "purple": "Neon",
    "green": "Forest",
    "orange": "Sunset",
}

DEFAULT_WIDGETS: List[Dict] = [
    {
        "id": "1",
        "type": "clock",
        "title": "Clock",
        "config": {"showDate": True, "showSeconds": False, "use24Hour": False, "colSpan": 2},
    },
    {"id": "2", "type": "weather", "title": "Weather", "config": {"tint": "blue"}},
    {"id": "3", "type": "stocks", "title": "SPY", "config": {"symbol": "SPY", "tint": "green"}},
    {"id": "4", "type": "shortcuts", "title": "Shortcuts", "config": {"tint": "orange"}},
]

_NEW_WIDGET_CONFIG: Dict[str, Dict] = {
    "stocks": {"symbol": "AAPL"},
    "clock": {"showDate": True, "colSpan": 2},
}


def default_widgets() -> List[Dict]:
    """Fresh copy of the built-in widgets; callers may mutate it."""
    return copy.deepcopy(DEFAULT_WIDGETS)


def new_widget(widget_type: str) -> Dict:
    """Create a widget record with a fresh id and the per-type starting config."""
    if widget_type not in WIDGET_TYPES:
        raise ValueError(f"Unknown widget type: {widget_type!r}")
    return {
        "id": str(uuid.uuid4()),
        "type": widget_type,
        "title": widget_type.capitalize(),
        "config": dict(_NEW_WIDGET_CONFIG.get(widget_type, {})),
    }

