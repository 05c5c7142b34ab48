"""Shared storage areas and per-context handles with change notification."""

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from kgsync.storage.database import (
    delete_setting,
    initialize_database,
    read_setting,
    write_setting,
)

logger = logging.getLogger(__name__)


class StorageEvent(BaseModel):
    """Notification that another context changed a key.

    ``new_value`` is the raw stored string, or None when the key was removed.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    key: str
    new_value: str | None
    storage_area: "StorageArea"


StorageListener = Callable[[StorageEvent], None]


class StorageArea:
    """A storage scope shared by several execution contexts.

    Backed by one SQLite file. Each context obtains its own handle through
    ``open_context``; a write made through one handle is announced to the
    listeners of every other open handle on the same area.

    Args:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        initialize_database(self.db_path)
        self._contexts: list[StorageContext] = []

    def open_context(self) -> "StorageContext":
        context = StorageContext(self)
        self._contexts.append(context)
        return context

    def _detach(self, context: "StorageContext") -> None:
        if context in self._contexts:
            self._contexts.remove(context)

    def _broadcast(self, event: StorageEvent, origin: "StorageContext") -> None:
        # The writing context never hears its own writes.
        for context in list(self._contexts):
            if context is not origin:
                context._dispatch(event)


class StorageContext:
    """One execution context's view of a StorageArea (a tab, a window)."""

    def __init__(self, area: StorageArea) -> None:
        self.area = area
        self._listeners: list[StorageListener] = []

    def get_item(self, key: str) -> str | None:
        return read_setting(self.area.db_path, key)

    def set_item(self, key: str, value: str) -> None:
        write_setting(self.area.db_path, key, value)
        self.area._broadcast(
            StorageEvent(key=key, new_value=value, storage_area=self.area), self
        )

    def remove_item(self, key: str) -> None:
        delete_setting(self.area.db_path, key)
        self.area._broadcast(
            StorageEvent(key=key, new_value=None, storage_area=self.area), self
        )

    def add_listener(self, listener: StorageListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StorageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def close(self) -> None:
        self._listeners.clear()
        self.area._detach(self)

    def _dispatch(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for key %s", event.key)


StorageEvent.model_rebuild()
