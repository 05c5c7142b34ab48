"""Persistent key/value entries with reactive cross-context sync."""

import json
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from kgsync.storage.area import StorageContext, StorageEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistentKeyedStore(Generic[T]):
    """A single persisted, JSON-serialized value bound to one key.

    The value is read synchronously on construction. Local writes are
    visible immediately; writes from other contexts arrive through storage
    events and update the in-memory value without writing back.

    Args:
        context: This execution context's storage handle.
        key: Storage key.
        default: Value used when the key is absent or removed.
    """

    def __init__(self, context: StorageContext, key: str, default: T) -> None:
        self._context = context
        self._key = key
        self._default = default
        self._subscribers: list[Callable[[T], None]] = []
        self._value: T = self._decode(context.get_item(key))
        context.add_listener(self.handle_event)

    @property
    def key(self) -> str:
        return self._key

    @property
    def default(self) -> T:
        return self._default

    @property
    def value(self) -> T:
        return self._value

    def get(self) -> T:
        return self._value

    def set(self, new_value: T | Callable[[T], T]) -> None:
        """Persist a value, or the result of applying an updater to the current one."""
        result = new_value(self._value) if callable(new_value) else new_value
        self._context.set_item(self._key, json.dumps(result))
        self._apply(result)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback`` for value changes. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def handle_event(self, event: StorageEvent) -> None:
        """Adopt a change made by another context to this key."""
        if event.storage_area is not self._context.area or event.key != self._key:
            return
        if event.new_value is None:
            self._apply(self._default)
        else:
            self._apply(self._decode(event.new_value))

    def close(self) -> None:
        self._context.remove_listener(self.handle_event)
        self._subscribers.clear()

    def _decode(self, raw: str | None) -> Any:
        if raw is None:
            return self._default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(
                "Ignoring malformed stored value for key %s; using default", self._key
            )
            return self._default

    def _apply(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            callback(value)
