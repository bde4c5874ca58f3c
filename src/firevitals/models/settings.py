"""User settings: theme and alert thresholds."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field, model_validator

from firevitals.models._base import VitalsBaseModel, drop_missing


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class Thresholds(VitalsBaseModel):
    """Configured bounds used to flag out-of-range readings.

    Every bound is exclusive: a reading equal to a bound is in range.
    """

    hr_high: float = 100
    hr_low: float = 50
    rr_high: float = 24
    rr_low: float = 10
    spo2_low: float = 92
    bp_sys_high: float = 160
    bp_sys_low: float = 90
    bp_dia_high: float = 100
    bp_dia_low: float = 60
    temp_high_f: float = 100.4

    @model_validator(mode="before")
    @classmethod
    def _default_null_bounds(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return drop_missing(values)


class Settings(VitalsBaseModel):
    theme: Theme = Theme.LIGHT
    thresholds: Thresholds = Field(default_factory=Thresholds)

    @model_validator(mode="before")
    @classmethod
    def _default_null_parts(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return drop_missing(values)
