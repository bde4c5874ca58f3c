"""Runtime configuration for firevitals."""

from __future__ import annotations

import dataclasses
import os
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from firevitals._constants import EXPORT_TITLE
from firevitals.exceptions import FireVitalsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _default_data_dir() -> Path:
    return Path.home() / ".firevitals"


@dataclasses.dataclass(frozen=True)
class FireVitalsConfig:
    """Device-local configuration.

    Parameters
    ----------
    data_dir : Path
        Directory holding the persisted state blobs.
    export_dir : Path
        Directory the download fallback writes export files into.
    share_url : str or None
        Endpoint receiving both export files in one multipart upload.
        When unset, exports always use the download fallback.
    share_enabled : bool
        Master switch for the share hand-off.
    share_title : str
        Title sent along with shared files and used as the email subject.
    time_zone : str or None
        IANA time zone used for timestamps in exports. ``None`` uses the
        device's local time zone.
    """

    data_dir: Path = dataclasses.field(default_factory=_default_data_dir)
    export_dir: Path = dataclasses.field(default_factory=lambda: Path.cwd() / "exports")
    share_url: str | None = None
    share_enabled: bool = True
    share_title: str = EXPORT_TITLE
    time_zone: str | None = None

    def __post_init__(self) -> None:
        # Accept plain strings for paths.
        object.__setattr__(self, "data_dir", Path(self.data_dir).expanduser())
        object.__setattr__(self, "export_dir", Path(self.export_dir).expanduser())
        # Fail fast on unknown zones rather than at export time.
        _ = self.tzinfo

    @property
    def tzinfo(self) -> tzinfo | None:
        """Resolved time zone, or ``None`` for the device's local zone."""
        if self.time_zone is None:
            return None
        try:
            return ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise FireVitalsConfigError(f"Unknown time zone: {self.time_zone!r}") from exc

    @property
    def can_share(self) -> bool:
        return self.share_enabled and bool(self.share_url)

    @classmethod
    def from_env(cls, **overrides: Any) -> FireVitalsConfig:
        """Create configuration from ``FIREVITALS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FIREVITALS_DATA_DIR": "data_dir",
            "FIREVITALS_EXPORT_DIR": "export_dir",
            "FIREVITALS_SHARE_URL": "share_url",
            "FIREVITALS_SHARE_TITLE": "share_title",
            "FIREVITALS_TIME_ZONE": "time_zone",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and val.strip():
                config_kwargs[field_name] = val.strip()

        if "share_enabled" not in overrides:
            config_kwargs["share_enabled"] = _env_bool(env.get("FIREVITALS_SHARE_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
