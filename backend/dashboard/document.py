"""
Settings document: defaults and normalization.

The document has a fixed set of top-level fields. Normalization keeps each
incoming field that has the expected type and falls back to the base document
(the stored one, or the defaults) for everything else. Unknown top-level keys
are dropped; widget records and their config bags pass through untouched.
"""

import copy
from typing import Any, Dict, Optional, Tuple

from .widgets import default_widgets

DEFAULT_APP_TITLE = "Nexus"

# field -> expected type
DOCUMENT_FIELDS: Tuple[Tuple[str, type], ...] = (
    ("widgets", list),
    ("appTitle", str),
    ("showTitle", bool),
    ("enableSearchPreview", bool),
    ("lockWidgets", bool),
)


def default_document() -> Dict[str, Any]:
    return {
        "widgets": default_widgets(),
        "appTitle": DEFAULT_APP_TITLE,
        "showTitle": True,
        "enableSearchPreview": True,
        "lockWidgets": False,
    }


def _has_type(value: Any, expected: type) -> bool:
    # bool is a subclass of int; only str/list/bool are used here so isinstance is exact
    return isinstance(value, expected)


def normalize_document(incoming: Any, base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return a complete document built from incoming over base.

    base defaults to the built-in document. When base itself is missing fields
    or has mis-typed ones, the built-in defaults fill them in.
    """
    base = default_document() if base is None else normalize_document(base)
    src = incoming if isinstance(incoming, dict) else {}
    result: Dict[str, Any] = {}
    for field, expected in DOCUMENT_FIELDS:
        value = src.get(field)
        if value is not None and _has_type(value, expected):
            result[field] = copy.deepcopy(value)
        else:
            result[field] = copy.deepcopy(base[field])
    return result


def is_normalized(document: Any) -> bool:
    """True when document has exactly the known fields, each with the right type."""
    if not isinstance(document, dict) or set(document) != {f for f, _ in DOCUMENT_FIELDS}:
        return False
    return all(_has_type(document[f], t) for f, t in DOCUMENT_FIELDS)
