from __future__ import annotations

from pathlib import Path

import pytest

from firevitals._constants import EXPORT_TITLE
from firevitals.config import FireVitalsConfig, _env_bool
from firevitals.exceptions import FireVitalsConfigError

_ENV_KEYS = (
    "FIREVITALS_DATA_DIR",
    "FIREVITALS_EXPORT_DIR",
    "FIREVITALS_SHARE_URL",
    "FIREVITALS_SHARE_TITLE",
    "FIREVITALS_TIME_ZONE",
    "FIREVITALS_SHARE_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.mark.parametrize(
    ("raw", "default", "expected"),
    [
        (None, True, True),
        ("yes", False, True),
        (" OFF ", True, False),
        ("0", True, False),
        ("maybe", False, False),
    ],
)
def test_env_bool(raw: str | None, default: bool, expected: bool) -> None:
    assert _env_bool(raw, default) is expected


def test_defaults() -> None:
    config = FireVitalsConfig()
    assert config.share_url is None
    assert config.share_enabled is True
    assert config.share_title == EXPORT_TITLE
    assert config.tzinfo is None
    assert not config.can_share


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FIREVITALS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FIREVITALS_EXPORT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("FIREVITALS_SHARE_URL", " http://share.local/upload ")
    monkeypatch.setenv("FIREVITALS_SHARE_TITLE", "Brush fire vitals")

    config = FireVitalsConfig.from_env()
    assert config.data_dir == tmp_path / "data"
    assert config.export_dir == tmp_path / "out"
    assert config.share_url == "http://share.local/upload"
    assert config.share_title == "Brush fire vitals"
    assert config.can_share


def test_from_env_share_switch_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIREVITALS_SHARE_URL", "http://share.local/upload")
    monkeypatch.setenv("FIREVITALS_SHARE_ENABLED", "false")
    assert not FireVitalsConfig.from_env().can_share

    config = FireVitalsConfig.from_env(share_enabled=True, share_title="Override")
    assert config.can_share
    assert config.share_title == "Override"


def test_blank_env_values_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIREVITALS_SHARE_URL", "   ")
    assert FireVitalsConfig.from_env().share_url is None


def test_string_paths_are_converted() -> None:
    config = FireVitalsConfig(data_dir="~/vitals", export_dir="exports")  # type: ignore[arg-type]
    assert isinstance(config.data_dir, Path)
    assert "~" not in str(config.data_dir)
    assert config.export_dir == Path("exports")


def test_unknown_time_zone_rejected() -> None:
    with pytest.raises(FireVitalsConfigError, match="Unknown time zone"):
        FireVitalsConfig(time_zone="Mars/Olympus_Mons")
