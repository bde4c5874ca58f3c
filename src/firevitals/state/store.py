"""Write-through application state store.

This is the only component allowed to replace the application state. The
UI reads snapshots with :meth:`StateStore.get_state` and expresses intent
by dispatching transitions from :mod:`firevitals.state.transitions`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from firevitals._constants import LEGACY_STATE_KEY, STATE_KEY
from firevitals._redact import redact_for_log, summarize_blob
from firevitals.config import FireVitalsConfig
from firevitals.exceptions import FireVitalsError, FireVitalsStateError, NoActiveSceneError
from firevitals.models import AppState, now_ms
from firevitals.state.migrations import is_v1_blob, run_migrations
from firevitals.state.storage import JsonFileStorage, KeyValueStorage
from firevitals.state.transitions import Transition, clear_scene

_logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


def _parse_blob(raw: str, key: str) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        _logger.warning("Discarding unparseable blob under %s", key)
        return None


class StateStore:
    """Single owner of the application state.

    Every dispatched transition is persisted before listeners run, so the
    stored blob always matches the last completed transition.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._state: AppState | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(cls, config: FireVitalsConfig) -> StateStore:
        return cls(JsonFileStorage(config.data_dir))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> AppState:
        """Read the persisted state, migrating a legacy blob if needed.

        Never raises: absent, unparseable or malformed data yields an empty
        default state.
        """
        try:
            raw = self._storage.get(STATE_KEY)
        except FireVitalsError as exc:
            _logger.warning("Could not read persisted state: %s", exc)
            return AppState()

        if raw is not None:
            return self._load_current(raw)
        return self._load_legacy()

    def _load_current(self, raw: str) -> AppState:
        blob = _parse_blob(raw, STATE_KEY)
        if not isinstance(blob, dict) or not isinstance(blob.get("scenes"), list):
            _logger.warning("Persisted state under %s has an unexpected shape; starting empty", STATE_KEY)
            return AppState()
        try:
            state = AppState.model_validate(blob)
        except ValidationError as exc:
            _logger.warning("Persisted state failed validation (%d errors); starting empty", exc.error_count())
            return AppState()
        _logger.debug("Loaded state: %s", summarize_blob(blob))
        return state

    def _load_legacy(self) -> AppState:
        try:
            raw = self._storage.get(LEGACY_STATE_KEY)
        except FireVitalsError as exc:
            _logger.warning("Could not read legacy state: %s", exc)
            return AppState()
        if raw is None:
            return AppState()

        blob = _parse_blob(raw, LEGACY_STATE_KEY)
        if not is_v1_blob(blob):
            _logger.warning("Legacy blob under %s has an unexpected shape; starting empty", LEGACY_STATE_KEY)
            return AppState()

        try:
            migrated = run_migrations(blob, 1, now_ms=self._clock())
            state = AppState.model_validate(migrated)
        except (ValueError, ValidationError) as exc:
            _logger.warning("Legacy state could not be migrated: %s", exc)
            return AppState()

        _logger.info("Migrated legacy state: %s", summarize_blob(blob))
        _logger.debug("Legacy payload: %s", redact_for_log(blob))
        try:
            self.save(state)
        except FireVitalsError as exc:
            # The legacy blob is still there, so the next load retries the migration.
            _logger.warning("Could not persist migrated state: %s", exc)
        return state

    def save(self, state: AppState) -> None:
        """Overwrite the persisted blob with *state*."""
        self._storage.set(STATE_KEY, json.dumps(state.to_blob(), separators=(",", ":")))

    def clear_all(self) -> None:
        """Erase both the current and the legacy persisted blobs."""
        self._storage.remove(STATE_KEY)
        self._storage.remove(LEGACY_STATE_KEY)
        _logger.info("Cleared persisted state")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def init(self) -> AppState:
        """Load persisted state into memory. Call once on startup."""
        self._state = self.load()
        return self._state

    def teardown(self) -> None:
        """Drop in-memory state and listeners. Storage is left as-is."""
        self._state = None
        self._listeners.clear()

    def get_state(self) -> AppState:
        if self._state is None:
            raise FireVitalsStateError("State store is not initialized; call init() first")
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every new state. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, transition: Transition) -> AppState:
        """Apply *transition*, persist the result and notify listeners.

        If the transition raises, neither memory nor storage changes.
        """
        current = self.get_state()
        updated = transition(current)
        if updated is current:
            return current
        self.save(updated)
        self._state = updated
        for listener in list(self._listeners):
            listener(updated)
        return updated

    def reset_active_scene(self) -> AppState:
        """Erase persisted blobs and empty the active scene's roster and vitals.

        Other scenes survive: they are written back by the dispatch.
        """
        if self.get_state().current_scene is None:
            raise NoActiveSceneError("No active scene")
        self.clear_all()
        return self.dispatch(clear_scene())
