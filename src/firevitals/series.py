"""Sparse trend series for charting vitals over time."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import NamedTuple

from firevitals.models import Scene, VitalsEntry


class Metric(StrEnum):
    HEART_RATE = "heartRate"
    RESP_RATE = "respRate"
    OXYGEN_SAT = "oxygenSat"
    BLOOD_PRESSURE = "bloodPressure"
    TEMPERATURE = "temperatureF"


_METRIC_FIELDS: dict[Metric, str] = {
    Metric.HEART_RATE: "heart_rate",
    Metric.RESP_RATE: "resp_rate",
    Metric.OXYGEN_SAT: "oxygen_sat",
    Metric.TEMPERATURE: "temperature_f",
}


class SeriesPoint(NamedTuple):
    timestamp: int
    value: float


class BloodPressureSeries(NamedTuple):
    """Systolic and diastolic points, filtered independently."""

    systolic: tuple[SeriesPoint, ...]
    diastolic: tuple[SeriesPoint, ...]


def _points(entries: Iterable[VitalsEntry], field_name: str) -> tuple[SeriesPoint, ...]:
    present = [entry for entry in entries if getattr(entry, field_name) is not None]
    # list.sort is stable: equal timestamps keep their log order.
    present.sort(key=lambda entry: entry.timestamp)
    return tuple(SeriesPoint(entry.timestamp, getattr(entry, field_name)) for entry in present)


def build_series(entries: Iterable[VitalsEntry], metric: Metric | str) -> tuple[SeriesPoint, ...] | BloodPressureSeries:
    """Time-ordered points for *metric*, skipping entries where it was not measured.

    Blood pressure yields a :class:`BloodPressureSeries`; an entry missing
    one of its two values still contributes to the other series.
    """
    metric = Metric(metric)
    entries = list(entries)
    if metric is Metric.BLOOD_PRESSURE:
        return BloodPressureSeries(
            systolic=_points(entries, "bp_systolic"),
            diastolic=_points(entries, "bp_diastolic"),
        )
    return _points(entries, _METRIC_FIELDS[metric])


def firefighter_series(
    scene: Scene, firefighter_id: str, metric: Metric | str
) -> tuple[SeriesPoint, ...] | BloodPressureSeries:
    """:func:`build_series` restricted to one firefighter's entries."""
    return build_series(scene.entries_for(firefighter_id), metric)
