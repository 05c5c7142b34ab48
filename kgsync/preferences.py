"""Display preferences persisted and shared across execution contexts."""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from kgsync.models.preferences import DisplayPreferences
from kgsync.storage.keyed_store import PersistentKeyedStore

logger = logging.getLogger(__name__)


class PreferencesService:
    """Explicit holder of the user's display preferences.

    Constructed once and handed to whatever needs the preferences. Updates
    go through the named operations below and are persisted, so other
    contexts sharing the storage area pick them up.

    Args:
        store: Keyed store holding the serialized preferences.
    """

    def __init__(self, store: PersistentKeyedStore[dict]) -> None:
        self._store = store

    @classmethod
    def default_value(cls) -> dict:
        return DisplayPreferences().model_dump()

    @property
    def current(self) -> DisplayPreferences:
        try:
            return DisplayPreferences.model_validate(self._store.value)
        except ValidationError:
            logger.warning("Stored display preferences are invalid; using defaults")
            return DisplayPreferences()

    def change_font_family(self, font_family: str) -> DisplayPreferences:
        return self._update(font_family=font_family)

    def change_border_radius(self, border_radius: int) -> DisplayPreferences:
        return self._update(border_radius=border_radius)

    def reset(self) -> DisplayPreferences:
        defaults = DisplayPreferences()
        self._store.set(defaults.model_dump())
        return defaults

    def subscribe(
        self, callback: Callable[[DisplayPreferences], None]
    ) -> Callable[[], None]:
        return self._store.subscribe(lambda _: callback(self.current))

    def _update(self, **changes: object) -> DisplayPreferences:
        updated = self.current.model_copy(update=changes)
        self._store.set(updated.model_dump())
        return updated
