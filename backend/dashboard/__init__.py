"""Dashboard domain: settings document and widget catalog."""

from .document import DEFAULT_APP_TITLE, default_document, is_normalized, normalize_document
from .widgets import TINTS, WIDGET_TYPES, default_widgets, new_widget

__all__ = [
    "DEFAULT_APP_TITLE",
    "TINTS",
    "WIDGET_TYPES",
    "default_document",
    "default_widgets",
    "is_normalized",
    "new_widget",
    "normalize_document",
]
