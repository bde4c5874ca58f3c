"""Threshold alerting for vitals entries."""

from __future__ import annotations

import enum

from firevitals.models import Scene, Thresholds, VitalsEntry


class AlertTag(enum.Flag):
    """Physiological categories that can be out of range for one entry.

    Systolic and diastolic share :attr:`BLOOD_PRESSURE`; the tag alone does
    not say which one tripped.
    """

    HEART_RATE = enum.auto()
    RESP_RATE = enum.auto()
    OXYGEN_SAT = enum.auto()
    BLOOD_PRESSURE = enum.auto()
    TEMPERATURE = enum.auto()

    @classmethod
    def none(cls) -> AlertTag:
        return cls(0)


def _outside(value: float | None, low: float, high: float) -> bool:
    return value is not None and (value > high or value < low)


def evaluate(entry: VitalsEntry, thresholds: Thresholds) -> AlertTag:
    """Return the categories of *entry* outside the *thresholds*.

    Absent readings never raise a tag and bounds are exclusive. Oxygen
    saturation is only checked on the low side, temperature only on the
    high side.
    """
    tags = AlertTag.none()
    if _outside(entry.heart_rate, thresholds.hr_low, thresholds.hr_high):
        tags |= AlertTag.HEART_RATE
    if _outside(entry.resp_rate, thresholds.rr_low, thresholds.rr_high):
        tags |= AlertTag.RESP_RATE
    if entry.oxygen_sat is not None and entry.oxygen_sat < thresholds.spo2_low:
        tags |= AlertTag.OXYGEN_SAT
    if _outside(entry.bp_systolic, thresholds.bp_sys_low, thresholds.bp_sys_high) or _outside(
        entry.bp_diastolic, thresholds.bp_dia_low, thresholds.bp_dia_high
    ):
        tags |= AlertTag.BLOOD_PRESSURE
    if entry.temperature_f is not None and entry.temperature_f > thresholds.temp_high_f:
        tags |= AlertTag.TEMPERATURE
    return tags


def latest_alerts(scene: Scene, thresholds: Thresholds) -> dict[str, AlertTag]:
    """Tags of each roster member's most recent entry.

    Members without entries map to an empty tag set.
    """
    latest: dict[str, VitalsEntry] = {}
    for entry in scene.vitals:
        current = latest.get(entry.firefighter_id)
        if current is None or entry.timestamp >= current.timestamp:
            latest[entry.firefighter_id] = entry
    result: dict[str, AlertTag] = {}
    for member in scene.firefighters:
        entry = latest.get(member.id)
        result[member.id] = evaluate(entry, thresholds) if entry is not None else AlertTag.none()
    return result


def tag_names(tags: AlertTag) -> list[str]:
    """Member names of *tags* in declaration order, e.g. ``["HEART_RATE"]``."""
    return [tag.name for tag in AlertTag if tag in tags and tag.name is not None]
