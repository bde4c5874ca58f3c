"""Custom exception hierarchy for firevitals."""

from __future__ import annotations


class FireVitalsError(Exception):
    """Base exception for all firevitals errors."""


class FireVitalsConfigError(FireVitalsError):
    """Invalid or missing configuration."""


class FireVitalsStorageError(FireVitalsError):
    """Local storage read/write failure."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class FireVitalsValidationError(FireVitalsError):
    """User input rejected before any state mutation.

    The message is suitable for showing to the user as-is.
    """


class FireVitalsStateError(FireVitalsError):
    """A transition could not be applied to the current state."""


class NoActiveSceneError(FireVitalsStateError):
    """A scene-level transition was dispatched while no scene is active."""


class SceneNotFoundError(FireVitalsStateError):
    """The referenced scene does not exist."""

    def __init__(self, scene_id: str) -> None:
        self.scene_id = scene_id
        super().__init__(f"Scene {scene_id!r} not found")


class FirefighterNotFoundError(FireVitalsStateError):
    """The referenced firefighter is not on the scene roster."""

    def __init__(self, firefighter_id: str) -> None:
        self.firefighter_id = firefighter_id
        super().__init__(f"Firefighter {firefighter_id!r} not found")


class FireVitalsExportError(FireVitalsError):
    """Building or delivering an export failed."""


class ShareError(FireVitalsExportError):
    """Native share hand-off failed.

    Never surfaced to the user: the export pipeline catches it and falls
    back to downloads.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
