"""
Dashboard session: local copy of the settings document plus autosave.

State: not_loaded -> loaded -> (dirty -> saving -> saved)*.
A failed load or save sets sync_failed, which pauses autosave until
retry_sync() reloads successfully. Edits keep working locally while paused.
"""

import copy
from collections import Counter, defaultdict, deque
from enum import Enum
from typing import Dict, List, Optional, Tuple

from loguru import logger

from dashboard import TINTS, default_document, new_widget, normalize_document
from shared.config import get_autosave_delay

from .client import SettingsClient, SyncError
from .debounce import Debouncer, SaveQueue


class SessionState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    DIRTY = "dirty"
    SAVING = "saving"
    SAVED = "saved"


class WidgetNotFoundError(KeyError):
    pass


class DashboardLockedError(RuntimeError):
    """Widget layout is locked (lockWidgets)."""


class DashboardSession:
    def __init__(self, client: SettingsClient, autosave_delay: Optional[float] = None):
        self.client = client
        self.document: Dict = default_document()
        self.state = SessionState.NOT_LOADED
        self.sync_failed = False
        self.last_error: Optional[str] = None
        self._revision = 0
        self._saved_revision = 0
        delay = get_autosave_delay() if autosave_delay is None else autosave_delay
        self._debouncer = Debouncer(delay, self._enqueue_save)
        self._queue = SaveQueue(self._save)

    # ----- sync -----

    @property
    def loaded(self) -> bool:
        return self.state != SessionState.NOT_LOADED

    @property
    def autosave_enabled(self) -> bool:
        return self.loaded and not self.sync_failed

    async def load(self) -> Dict:
        """Fetch the document. On failure, fall back to defaults and pause autosave."""
        self._debouncer.cancel()
        try:
            data = await self.client.fetch()
        except SyncError as e:
            logger.warning("Settings unavailable, using defaults: {}", e)
            self.document = default_document()
            self.sync_failed = True
            self.last_error = str(e)
        else:
            self.document = normalize_document(data)
            self.sync_failed = False
            self.last_error = None
        self.state = SessionState.LOADED
        self._saved_revision = self._revision
        return self.document

    async def retry_sync(self) -> bool:
        """Reload from the service. Returns True when sync is available again."""
        await self.load()
        return not self.sync_failed

    async def flush(self) -> None:
        """Issue a pending debounced save now and wait for all queued saves."""
        self._debouncer.flush()
        await self._queue.join()

    async def close(self) -> None:
        await self.flush()
        await self._queue.close()

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise RuntimeError("Settings not loaded")

    def _touch(self) -> None:
        self._revision += 1
        self.state = SessionState.DIRTY
        if self.autosave_enabled:
            self._debouncer.schedule()

    def _enqueue_save(self) -> None:
        self._queue.put((self._revision, copy.deepcopy(self.document)))

    async def _save(self, item: Tuple[int, Dict]) -> None:
        revision, document = item
        if self.sync_failed:
            return
        self.state = SessionState.SAVING
        try:
            await self.client.save(document)
        except SyncError as e:
            logger.warning("Sync paused: {}", e)
            self.sync_failed = True
            self.last_error = str(e)
            self.state = SessionState.DIRTY
            return
        self._saved_revision = revision
        self.state = SessionState.SAVED if revision == self._revision else SessionState.DIRTY

    # ----- edits -----

    @property
    def widgets(self) -> List[Dict]:
        return self.document["widgets"]

    def _check_unlocked(self) -> None:
        self._require_loaded()
        if self.document["lockWidgets"]:
            raise DashboardLockedError("Widgets are locked")

    def _find(self, widget_id: str) -> Dict:
        for w in self.widgets:
            if isinstance(w, dict) and w.get("id") == widget_id:
                return w
        raise WidgetNotFoundError(widget_id)

    def add_widget(self, widget_type: str) -> Dict:
        self._require_loaded()
        widget = new_widget(widget_type)
        self.widgets.append(widget)
        self._touch()
        return widget

    def remove_widget(self, widget_id: str) -> None:
        self._check_unlocked()
        widget = self._find(widget_id)
        self.widgets.remove(widget)
        self._touch()

    def update_widget(self, widget_id: str, config: Optional[Dict] = None, **fields) -> Dict:
        """Update top-level widget fields; config is merged into the existing bag. id is immutable."""
        self._check_unlocked()
        if "id" in fields:
            raise ValueError("Widget id cannot be changed")
        widget = self._find(widget_id)
        widget.update(fields)
        if config:
            current = widget.get("config")
            widget["config"] = {**(current if isinstance(current, dict) else {}), **config}
        self._touch()
        return widget

    def reorder_widgets(self, widget_ids: List[Optional[str]]) -> None:
        """Apply a new display order. widget_ids must be a permutation of the current ids.

        Ids are not guaranteed unique; repeated ids keep their records in their current relative order.
        """
        self._check_unlocked()
        current = [w.get("id") if isinstance(w, dict) else None for w in self.widgets]
        if Counter(widget_ids) != Counter(current):
            raise ValueError("Reorder must list each current widget id as many times as it occurs")
        slots: Dict[Optional[str], deque] = defaultdict(deque)
        for wid, widget in zip(current, self.widgets):
            slots[wid].append(widget)
        self.document["widgets"] = [slots[wid].popleft() for wid in widget_ids]
        self._touch()

    def set_widget_tint(self, widget_id: str, tint: str) -> Dict:
        if tint not in TINTS:
            raise ValueError(f"Unknown tint: {tint!r}")
        return self.update_widget(widget_id, config={"tint": tint})

    def set_app_title(self, title: str) -> None:
        self._require_loaded()
        self.document["appTitle"] = title
        self._touch()

    def set_show_title(self, value: bool) -> None:
        self._require_loaded()
        self.document["showTitle"] = bool(value)
        self._touch()

    def set_enable_search_preview(self, value: bool) -> None:
        self._require_loaded()
        self.document["enableSearchPreview"] = bool(value)
        self._touch()

    def set_lock_widgets(self, value: bool) -> None:
        self._require_loaded()
        self.document["lockWidgets"] = bool(value)
        self._touch()
