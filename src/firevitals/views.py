"""Read-only helpers the UI uses to render a scene."""

from __future__ import annotations

from firevitals.models import Firefighter, Scene, VitalsEntry


def selected_firefighter(scene: Scene) -> Firefighter | None:
    if scene.selected_firefighter_id is None:
        return None
    return scene.firefighter(scene.selected_firefighter_id)


def firefighter_history(scene: Scene, firefighter_id: str) -> list[VitalsEntry]:
    """One firefighter's entries, most recent first."""
    return sorted(scene.entries_for(firefighter_id), key=lambda entry: entry.timestamp, reverse=True)


def last_reading(scene: Scene, firefighter_id: str) -> VitalsEntry | None:
    history = firefighter_history(scene, firefighter_id)
    return history[0] if history else None


def minutes_ago(timestamp: int, now_ms: int) -> str:
    """Coarse "time since" label. Informational only."""
    minutes = (now_ms - timestamp) // 60_000
    if minutes <= 0:
        return "just now"
    if minutes == 1:
        return "1 min ago"
    return f"{minutes} min ago"


def last_reading_label(scene: Scene, firefighter_id: str, now_ms: int) -> str:
    entry = last_reading(scene, firefighter_id)
    if entry is None:
        return "No vitals yet"
    return f"Last: {minutes_ago(entry.timestamp, now_ms)}"
