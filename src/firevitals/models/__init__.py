"""Data models for persisted firevitals state."""

from firevitals.models._base import VitalsBaseModel, new_id, now_ms
from firevitals.models.scene import Firefighter, FirefighterStatus, Scene, VitalsEntry
from firevitals.models.settings import Settings, Theme, Thresholds
from firevitals.models.state import AppState

__all__ = [
    "AppState",
    "Firefighter",
    "FirefighterStatus",
    "Scene",
    "Settings",
    "Theme",
    "Thresholds",
    "VitalsBaseModel",
    "VitalsEntry",
    "new_id",
    "now_ms",
]
