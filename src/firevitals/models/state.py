"""Top-level application state."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from firevitals.models._base import VitalsBaseModel, drop_missing
from firevitals.models.scene import Scene
from firevitals.models.settings import Settings


class AppState(VitalsBaseModel):
    """Everything persisted on the device: all scenes plus settings."""

    current_scene_id: str | None = None
    scenes: list[Scene] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)

    @model_validator(mode="before")
    @classmethod
    def _default_null_parts(cls, values: Any) -> Any:
        # A stored null means "not saved yet", same as an absent key.
        if not isinstance(values, dict):
            return values
        return drop_missing(values)

    @model_validator(mode="after")
    def _clear_dangling_scene_pointer(self) -> AppState:
        if self.current_scene_id is not None and self.scene(self.current_scene_id) is None:
            object.__setattr__(self, "current_scene_id", None)
        return self

    def scene(self, scene_id: str) -> Scene | None:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        return None

    @property
    def current_scene(self) -> Scene | None:
        if self.current_scene_id is None:
            return None
        return self.scene(self.current_scene_id)
