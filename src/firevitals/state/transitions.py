"""Pure state transitions.

Each public function here is a factory: it captures the user's intent and
returns a :data:`Transition`, a function from the current
:class:`~firevitals.models.AppState` to the next one. Transitions never
mutate their input and never touch storage; :meth:`StateStore.dispatch`
applies them and persists the result.

A transition that raises leaves the store untouched, which is how invalid
intents (a nameless firefighter, an unknown scene) are rejected.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from firevitals._constants import DEFAULT_SCENE_NAME
from firevitals.exceptions import (
    FirefighterNotFoundError,
    FireVitalsValidationError,
    NoActiveSceneError,
    SceneNotFoundError,
)
from firevitals.forms import vitals_from_form
from firevitals.models import (
    AppState,
    Firefighter,
    FirefighterStatus,
    Scene,
    Theme,
    Thresholds,
    VitalsEntry,
    new_id,
    now_ms,
)

Transition = Callable[[AppState], AppState]

_EDITABLE_FIREFIGHTER_FIELDS = frozenset({"first_name", "last_name", "unit", "status"})
_NAME_REQUIRED = "Enter a first or last name for the firefighter."
_SELECTION_REQUIRED = "Add/select a firefighter first."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_scene(state: AppState, scene_id: str | None) -> Scene:
    if scene_id is None:
        scene = state.current_scene
        if scene is None:
            raise NoActiveSceneError("No active scene")
        return scene
    scene = state.scene(scene_id)
    if scene is None:
        raise SceneNotFoundError(scene_id)
    return scene


def _replace_scene(state: AppState, scene: Scene, *, at: int | None = None) -> AppState:
    """Swap *scene* into *state*, bumping its ``updated_at``."""
    touched = scene.model_copy(update={"updated_at": now_ms() if at is None else at})
    scenes = [touched if existing.id == scene.id else existing for existing in state.scenes]
    return state.model_copy(update={"scenes": scenes})


def _sorted_roster(firefighters: list[Firefighter]) -> list[Firefighter]:
    return sorted(firefighters, key=lambda member: member.display_name)


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip()
    return text or None


# ---------------------------------------------------------------------------
# Scenes
# ---------------------------------------------------------------------------


def create_scene(name: str, *, scene_id: str | None = None, at: int | None = None) -> Transition:
    """Add a new, empty scene and make it the active one."""

    def apply(state: AppState) -> AppState:
        created = now_ms() if at is None else at
        scene = Scene(
            id=scene_id or new_id(),
            name=name.strip() or DEFAULT_SCENE_NAME,
            created_at=created,
            updated_at=created,
        )
        return state.model_copy(update={"scenes": [*state.scenes, scene], "current_scene_id": scene.id})

    return apply


def rename_scene(scene_id: str, name: str, *, at: int | None = None) -> Transition:
    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        renamed = scene.model_copy(update={"name": name.strip() or DEFAULT_SCENE_NAME})
        return _replace_scene(state, renamed, at=at)

    return apply


def switch_scene(scene_id: str) -> Transition:
    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        return state.model_copy(update={"current_scene_id": scene.id})

    return apply


def delete_scene(scene_id: str) -> Transition:
    """Remove a scene with everything it owns.

    Deleting the active scene moves the pointer to the first remaining
    scene, or to none.
    """

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        remaining = [existing for existing in state.scenes if existing.id != scene.id]
        current = state.current_scene_id
        if current == scene.id:
            current = remaining[0].id if remaining else None
        return state.model_copy(update={"scenes": remaining, "current_scene_id": current})

    return apply


def clear_scene(scene_id: str | None = None, *, at: int | None = None) -> Transition:
    """Empty a scene's roster, vitals log and selection. Defaults to the active scene."""

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        cleared = scene.model_copy(update={"firefighters": [], "vitals": [], "selected_firefighter_id": None})
        return _replace_scene(state, cleared, at=at)

    return apply


# ---------------------------------------------------------------------------
# Roster
# ---------------------------------------------------------------------------


def add_firefighter(
    first_name: str,
    last_name: str = "",
    *,
    unit: str | None = None,
    status: FirefighterStatus | str | None = None,
    firefighter_id: str | None = None,
    scene_id: str | None = None,
    at: int | None = None,
) -> Transition:
    """Add a firefighter to the roster and select them.

    Raises :class:`FireVitalsValidationError` when neither name part has
    any content.
    """

    def apply(state: AppState) -> AppState:
        member = Firefighter(
            id=firefighter_id or new_id(),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            unit=_clean_optional(unit),
            status=status,
        )
        if not member.has_name:
            raise FireVitalsValidationError(_NAME_REQUIRED)
        scene = _resolve_scene(state, scene_id)
        updated = scene.model_copy(
            update={
                "firefighters": _sorted_roster([*scene.firefighters, member]),
                "selected_firefighter_id": member.id,
            }
        )
        return _replace_scene(state, updated, at=at)

    return apply


def update_firefighter(
    firefighter_id: str,
    *,
    scene_id: str | None = None,
    at: int | None = None,
    **changes: Any,
) -> Transition:
    """Edit name, unit or status of a roster member."""
    unknown = set(changes) - _EDITABLE_FIREFIGHTER_FIELDS
    if unknown:
        raise TypeError(f"cannot edit firefighter fields: {', '.join(sorted(unknown))}")

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        member = scene.firefighter(firefighter_id)
        if member is None:
            raise FirefighterNotFoundError(firefighter_id)

        fields = member.model_dump()
        for key, value in changes.items():
            if key in ("first_name", "last_name"):
                fields[key] = (value or "").strip()
            elif key == "unit":
                fields[key] = _clean_optional(value)
            else:
                fields[key] = value
        edited = Firefighter.model_validate(fields)
        if not edited.has_name:
            raise FireVitalsValidationError(_NAME_REQUIRED)

        roster = [edited if existing.id == member.id else existing for existing in scene.firefighters]
        updated = scene.model_copy(update={"firefighters": _sorted_roster(roster)})
        return _replace_scene(state, updated, at=at)

    return apply


def remove_firefighter(firefighter_id: str, *, scene_id: str | None = None, at: int | None = None) -> Transition:
    """Remove a roster member and every vitals entry recorded for them.

    When the removed member was selected, selection moves to the first
    remaining member, or to none.
    """

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        if scene.firefighter(firefighter_id) is None:
            raise FirefighterNotFoundError(firefighter_id)
        remaining = [member for member in scene.firefighters if member.id != firefighter_id]
        vitals = [entry for entry in scene.vitals if entry.firefighter_id != firefighter_id]
        selected = scene.selected_firefighter_id
        if selected == firefighter_id:
            selected = remaining[0].id if remaining else None
        updated = scene.model_copy(
            update={"firefighters": remaining, "vitals": vitals, "selected_firefighter_id": selected}
        )
        return _replace_scene(state, updated, at=at)

    return apply


def select_firefighter(firefighter_id: str | None, *, scene_id: str | None = None) -> Transition:
    """Point the roster selection at a member, or clear it with ``None``."""

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        if firefighter_id is not None and scene.firefighter(firefighter_id) is None:
            raise FirefighterNotFoundError(firefighter_id)
        updated = scene.model_copy(update={"selected_firefighter_id": firefighter_id})
        return _replace_scene(state, updated)

    return apply


# ---------------------------------------------------------------------------
# Vitals
# ---------------------------------------------------------------------------


def append_vitals(entry: VitalsEntry, *, scene_id: str | None = None, at: int | None = None) -> Transition:
    """Append a prepared entry to the scene's vitals log."""

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        if any(existing.id == entry.id for existing in scene.vitals):
            raise FireVitalsValidationError(f"Vitals entry {entry.id!r} already recorded")
        updated = scene.model_copy(update={"vitals": [*scene.vitals, entry]})
        return _replace_scene(state, updated, at=at)

    return apply


def record_vitals(
    form: Mapping[str, Any],
    *,
    firefighter_id: str | None = None,
    scene_id: str | None = None,
    at: int | None = None,
) -> Transition:
    """Build an entry from raw form input and append it.

    Targets *firefighter_id*, or the selected firefighter when omitted.
    """

    def apply(state: AppState) -> AppState:
        scene = _resolve_scene(state, scene_id)
        target = firefighter_id or scene.selected_firefighter_id
        if target is None:
            raise FireVitalsValidationError(_SELECTION_REQUIRED)
        entry = vitals_from_form(form, target, now_ms() if at is None else at)
        return append_vitals(entry, scene_id=scene.id, at=entry.timestamp)(state)

    return apply


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def set_theme(theme: Theme | str) -> Transition:
    def apply(state: AppState) -> AppState:
        settings = state.settings.model_copy(update={"theme": Theme(theme)})
        return state.model_copy(update={"settings": settings})

    return apply


def update_thresholds(**bounds: float) -> Transition:
    """Change one or more alert bounds, e.g. ``update_thresholds(hr_high=110)``."""
    unknown = set(bounds) - set(Thresholds.model_fields)
    if unknown:
        raise TypeError(f"unknown threshold(s): {', '.join(sorted(unknown))}")

    def apply(state: AppState) -> AppState:
        merged = {**state.settings.thresholds.model_dump(), **bounds}
        thresholds = Thresholds.model_validate(merged)
        settings = state.settings.model_copy(update={"thresholds": thresholds})
        return state.model_copy(update={"settings": settings})

    return apply


def reset_thresholds() -> Transition:
    def apply(state: AppState) -> AppState:
        settings = state.settings.model_copy(update={"thresholds": Thresholds()})
        return state.model_copy(update={"settings": settings})

    return apply
