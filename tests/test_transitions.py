from __future__ import annotations

import pytest
from pydantic import ValidationError

from firevitals.exceptions import (
    FirefighterNotFoundError,
    FireVitalsValidationError,
    NoActiveSceneError,
    SceneNotFoundError,
)
from firevitals.models import AppState, FirefighterStatus, Scene, VitalsEntry
from firevitals.state import transitions as t

NOW = 1_760_000_000_000


def _apply(state: AppState, *transitions: t.Transition) -> AppState:
    for transition in transitions:
        state = transition(state)
    return state


def _scene(state: AppState) -> Scene:
    scene = state.current_scene
    assert scene is not None
    return scene


@pytest.fixture
def roster_state() -> AppState:
    return _apply(
        AppState(),
        t.create_scene("Warehouse", scene_id="s1", at=NOW),
        t.add_firefighter("Jane", "Smith", firefighter_id="smith", unit="E7", at=NOW),
        t.add_firefighter("Bob", "Adams", firefighter_id="adams", at=NOW),
        t.add_firefighter("Cher", "", firefighter_id="cher", at=NOW),
    )


# ------------------------------------------------------------------
# Scenes
# ------------------------------------------------------------------


def test_create_scene_becomes_current() -> None:
    state = _apply(AppState(), t.create_scene("  ", scene_id="s1", at=NOW))
    scene = _scene(state)
    assert scene.name == "Untitled Scene"
    assert scene.created_at == scene.updated_at == NOW

    state = t.create_scene("Second", scene_id="s2")(state)
    assert state.current_scene_id == "s2"
    assert [scene.id for scene in state.scenes] == ["s1", "s2"]


def test_transitions_do_not_mutate_input() -> None:
    original = AppState()
    t.create_scene("One")(original)
    assert original.scenes == []


def test_switch_to_unknown_scene_rejected() -> None:
    with pytest.raises(SceneNotFoundError):
        t.switch_scene("nope")(AppState())


def test_delete_current_scene_redirects_pointer() -> None:
    state = _apply(
        AppState(),
        t.create_scene("A", scene_id="a"),
        t.create_scene("B", scene_id="b"),
        t.create_scene("C", scene_id="c"),
    )
    state = t.delete_scene("c")(state)
    assert state.current_scene_id == "a"

    state = t.switch_scene("b")(state)
    state = t.delete_scene("a")(state)
    assert state.current_scene_id == "b"

    state = t.delete_scene("b")(state)
    assert state.scenes == []
    assert state.current_scene_id is None


def test_rename_scene_bumps_updated_at() -> None:
    state = _apply(AppState(), t.create_scene("Old", scene_id="s1", at=1))
    state = t.rename_scene("s1", "New", at=5)(state)
    scene = _scene(state)
    assert scene.name == "New"
    assert scene.created_at == 1
    assert scene.updated_at == 5


def test_clear_scene_empties_roster_and_log(roster_state: AppState) -> None:
    state = t.record_vitals({"hr": "80"}, at=NOW)(roster_state)
    state = t.clear_scene(at=NOW + 1)(state)
    scene = _scene(state)
    assert scene.firefighters == []
    assert scene.vitals == []
    assert scene.selected_firefighter_id is None
    assert scene.updated_at == NOW + 1


def test_scene_transitions_need_an_active_scene() -> None:
    with pytest.raises(NoActiveSceneError):
        t.add_firefighter("Jane", "Smith")(AppState())
    with pytest.raises(NoActiveSceneError):
        t.clear_scene()(AppState())


# ------------------------------------------------------------------
# Roster
# ------------------------------------------------------------------


def test_roster_sorted_by_display_name_and_newest_selected(roster_state: AppState) -> None:
    scene = _scene(roster_state)
    assert [member.display_name for member in scene.firefighters] == ["Adams, Bob", "Cher", "Smith, Jane"]
    assert scene.selected_firefighter_id == "cher"
    assert scene.firefighter("smith") is not None
    assert scene.firefighter("smith").unit == "E7"  # type: ignore[union-attr]


@pytest.mark.parametrize(("first", "last"), [("", ""), ("   ", "\t")])
def test_nameless_firefighter_rejected(roster_state: AppState, first: str, last: str) -> None:
    with pytest.raises(FireVitalsValidationError):
        t.add_firefighter(first, last)(roster_state)


def test_last_name_only_is_accepted() -> None:
    state = _apply(AppState(), t.create_scene("S"), t.add_firefighter("", "Okafor"))
    assert _scene(state).firefighters[0].display_name == "Okafor"


def test_update_firefighter(roster_state: AppState) -> None:
    state = t.update_firefighter("adams", first_name="Robert", unit=" L12 ", status="rehab")(roster_state)
    member = _scene(state).firefighter("adams")
    assert member is not None
    assert member.display_name == "Adams, Robert"
    assert member.unit == "L12"
    assert member.status is FirefighterStatus.REHAB

    with pytest.raises(FireVitalsValidationError):
        t.update_firefighter("adams", first_name="", last_name="")(state)
    with pytest.raises(FirefighterNotFoundError):
        t.update_firefighter("ghost", unit="E1")(state)
    with pytest.raises(TypeError):
        t.update_firefighter("adams", id="other")


def test_remove_firefighter_cascades_only_their_entries(roster_state: AppState) -> None:
    state = _apply(
        roster_state,
        t.append_vitals(VitalsEntry(id="v1", firefighter_id="smith", timestamp=NOW, heart_rate=90)),
        t.append_vitals(VitalsEntry(id="v2", firefighter_id="adams", timestamp=NOW, heart_rate=90)),
        t.append_vitals(VitalsEntry(id="v3", firefighter_id="smith", timestamp=NOW + 1, heart_rate=95)),
        t.append_vitals(VitalsEntry(id="v4", firefighter_id="cher", timestamp=NOW, resp_rate=18)),
    )
    state = t.remove_firefighter("smith")(state)
    scene = _scene(state)
    assert [entry.id for entry in scene.vitals] == ["v2", "v4"]
    assert scene.firefighter("smith") is None
    assert scene.selected_firefighter_id == "cher"


def test_remove_selected_firefighter_moves_selection(roster_state: AppState) -> None:
    state = t.remove_firefighter("cher")(roster_state)
    assert _scene(state).selected_firefighter_id == "adams"

    state = _apply(state, t.remove_firefighter("adams"), t.remove_firefighter("smith"))
    assert _scene(state).selected_firefighter_id is None


def test_select_firefighter(roster_state: AppState) -> None:
    state = t.select_firefighter("smith")(roster_state)
    assert _scene(state).selected_firefighter_id == "smith"
    state = t.select_firefighter(None)(state)
    assert _scene(state).selected_firefighter_id is None
    with pytest.raises(FirefighterNotFoundError):
        t.select_firefighter("ghost")(state)


# ------------------------------------------------------------------
# Vitals
# ------------------------------------------------------------------


def test_record_vitals_for_selected_firefighter(roster_state: AppState) -> None:
    form = {"hr": " 88 ", "rr": "", "spo2": "abc", "bpSys": "120", "bpDia": "80", "tempF": "99.1", "notes": "  "}
    state = t.record_vitals(form, at=NOW)(roster_state)
    (entry,) = _scene(state).vitals
    assert entry.firefighter_id == "cher"
    assert entry.timestamp == NOW
    assert entry.heart_rate == 88
    assert entry.resp_rate is None
    assert entry.oxygen_sat is None
    assert entry.bp_systolic == 120
    assert entry.temperature_f == 99.1
    assert entry.notes is None


def test_record_vitals_without_selection_rejected() -> None:
    state = _apply(AppState(), t.create_scene("Empty"))
    with pytest.raises(FireVitalsValidationError, match="select a firefighter"):
        t.record_vitals({"hr": "80"})(state)


def test_entries_are_append_only(roster_state: AppState) -> None:
    entry = VitalsEntry(id="v1", firefighter_id="smith", timestamp=NOW, heart_rate=90)
    state = t.append_vitals(entry)(roster_state)
    with pytest.raises(FireVitalsValidationError):
        t.append_vitals(entry)(state)
    with pytest.raises(ValidationError):
        entry.heart_rate = 100  # type: ignore[misc]


# ------------------------------------------------------------------
# Settings
# ------------------------------------------------------------------


def test_update_and_reset_thresholds() -> None:
    state = t.update_thresholds(hr_high=120, spo2_low=90)(AppState())
    assert state.settings.thresholds.hr_high == 120
    assert state.settings.thresholds.spo2_low == 90
    assert state.settings.thresholds.hr_low == 50

    state = t.reset_thresholds()(state)
    assert state.settings.thresholds.hr_high == 100

    with pytest.raises(TypeError):
        t.update_thresholds(pulse=1)
