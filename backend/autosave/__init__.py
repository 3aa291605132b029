"""
Autosave client for the settings service.
Debounced, serialized saves of the whole document; see session.DashboardSession.
"""

from .client import SettingsClient, SyncError
from .debounce import Debouncer, SaveQueue
from .session import DashboardLockedError, DashboardSession, SessionState, WidgetNotFoundError

__all__ = [
    "DashboardLockedError",
    "DashboardSession",
    "Debouncer",
    "SaveQueue",
    "SessionState",
    "SettingsClient",
    "SyncError",
    "WidgetNotFoundError",
]
