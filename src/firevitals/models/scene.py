"""Scene, roster and vitals log models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator, model_validator

from firevitals.models._base import VitalsBaseModel, drop_missing, new_id, now_ms

__all__ = [
    "Firefighter",
    "FirefighterStatus",
    "Scene",
    "VitalsEntry",
]


class FirefighterStatus(StrEnum):
    """Where a firefighter currently is in the incident workflow."""

    ON_DUTY = "duty"
    REHAB = "rehab"
    TRANSPORT = "transport"

    @classmethod
    def parse(cls, value: Any) -> FirefighterStatus | None:
        """Return the matching member, or ``None`` for anything unrecognised."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class Firefighter(VitalsBaseModel):
    """A roster member on one scene."""

    id: str = Field(default_factory=new_id)
    first_name: str = ""
    last_name: str = ""
    unit: str | None = None
    status: FirefighterStatus | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _clear_unknown_status(cls, value: Any) -> FirefighterStatus | None:
        return FirefighterStatus.parse(value)

    @property
    def display_name(self) -> str:
        """``"Last, First"``, without a dangling separator when a part is empty."""
        parts = [part for part in (self.last_name.strip(), self.first_name.strip()) if part]
        return ", ".join(parts)

    @property
    def has_name(self) -> bool:
        return bool(self.first_name.strip() or self.last_name.strip())

    @property
    def label(self) -> str:
        """Display name followed by the unit in parentheses, when known."""
        if self.unit:
            return f"{self.display_name} ({self.unit})"
        return self.display_name


class VitalsEntry(VitalsBaseModel):
    """One timestamped, partially filled set of readings.

    Entries are append-only: once recorded they are never edited.
    """

    id: str = Field(default_factory=new_id)
    firefighter_id: str
    timestamp: int = Field(default_factory=now_ms)
    """Epoch milliseconds."""
    heart_rate: float | None = None
    resp_rate: float | None = None
    oxygen_sat: float | None = None
    bp_systolic: float | None = None
    bp_diastolic: float | None = None
    temperature_f: float | None = None
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_missing_readings(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return drop_missing(values)


class Scene(VitalsBaseModel):
    """One incident: its roster, vitals log and roster selection."""

    id: str = Field(default_factory=new_id)
    name: str
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)
    firefighters: list[Firefighter] = Field(default_factory=list)
    selected_firefighter_id: str | None = None
    vitals: list[VitalsEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _clear_dangling_selection(self) -> Scene:
        selected = self.selected_firefighter_id
        if selected is not None and self.firefighter(selected) is None:
            object.__setattr__(self, "selected_firefighter_id", None)
        return self

    def firefighter(self, firefighter_id: str) -> Firefighter | None:
        for member in self.firefighters:
            if member.id == firefighter_id:
                return member
        return None

    def entries_for(self, firefighter_id: str) -> list[VitalsEntry]:
        """Entries recorded for one firefighter, in log order."""
        return [entry for entry in self.vitals if entry.firefighter_id == firefighter_id]
