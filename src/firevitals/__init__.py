"""firevitals - offline vitals tracking for firefighters at an incident scene."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("firevitals")
except PackageNotFoundError:
    __version__ = "0+local"
from firevitals.alerts import AlertTag, evaluate, latest_alerts
from firevitals.config import FireVitalsConfig
from firevitals.exceptions import (
    FirefighterNotFoundError,
    FireVitalsConfigError,
    FireVitalsError,
    FireVitalsExportError,
    FireVitalsStateError,
    FireVitalsStorageError,
    FireVitalsValidationError,
    NoActiveSceneError,
    SceneNotFoundError,
    ShareError,
)
from firevitals.export import ExportPipeline, ExportResult, build_report, build_table
from firevitals.models import (
    AppState,
    Firefighter,
    FirefighterStatus,
    Scene,
    Settings,
    Theme,
    Thresholds,
    VitalsEntry,
)
from firevitals.series import BloodPressureSeries, Metric, SeriesPoint, build_series
from firevitals.state import JsonFileStorage, MemoryStorage, StateStore

__all__ = [
    "__version__",
    "AlertTag",
    "AppState",
    "BloodPressureSeries",
    "ExportPipeline",
    "ExportResult",
    "FireVitalsConfig",
    "FireVitalsConfigError",
    "FireVitalsError",
    "FireVitalsExportError",
    "FireVitalsStateError",
    "FireVitalsStorageError",
    "FireVitalsValidationError",
    "Firefighter",
    "FirefighterNotFoundError",
    "FirefighterStatus",
    "JsonFileStorage",
    "MemoryStorage",
    "Metric",
    "NoActiveSceneError",
    "Scene",
    "SceneNotFoundError",
    "SeriesPoint",
    "Settings",
    "ShareError",
    "StateStore",
    "Theme",
    "Thresholds",
    "VitalsEntry",
    "build_report",
    "build_series",
    "build_table",
    "evaluate",
    "latest_alerts",
]
