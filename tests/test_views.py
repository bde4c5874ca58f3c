from __future__ import annotations

import pytest

from firevitals.models import Firefighter, Scene, VitalsEntry
from firevitals.views import (
    firefighter_history,
    last_reading,
    last_reading_label,
    minutes_ago,
    selected_firefighter,
)

NOW = 10 * 60_000


@pytest.fixture
def scene() -> Scene:
    return Scene(
        name="S",
        firefighters=[
            Firefighter(id="a", first_name="Ann", last_name="Lee"),
            Firefighter(id="b", first_name="Bo", last_name="Kim"),
        ],
        selected_firefighter_id="a",
        vitals=[
            VitalsEntry(id="1", firefighter_id="a", timestamp=60_000),
            VitalsEntry(id="2", firefighter_id="a", timestamp=7 * 60_000),
            VitalsEntry(id="3", firefighter_id="a", timestamp=3 * 60_000),
        ],
    )


def test_selected_firefighter(scene: Scene) -> None:
    member = selected_firefighter(scene)
    assert member is not None and member.id == "a"
    assert selected_firefighter(scene.model_copy(update={"selected_firefighter_id": None})) is None


def test_history_is_most_recent_first(scene: Scene) -> None:
    assert [entry.id for entry in firefighter_history(scene, "a")] == ["2", "3", "1"]
    assert firefighter_history(scene, "b") == []
    assert last_reading(scene, "b") is None


@pytest.mark.parametrize(
    ("timestamp", "expected"),
    [(NOW, "just now"), (NOW + 5_000, "just now"), (NOW - 60_000, "1 min ago"), (NOW - 125_000, "2 min ago")],
)
def test_minutes_ago(timestamp: int, expected: str) -> None:
    assert minutes_ago(timestamp, NOW) == expected


def test_last_reading_label(scene: Scene) -> None:
    assert last_reading_label(scene, "a", NOW) == "Last: 3 min ago"
    assert last_reading_label(scene, "b", NOW) == "No vitals yet"
