"""Form-input boundary.

Raw form values arrive as strings where blank means "not measured". This
module is the one place that conversion happens; everything inward of it
(alerts, series, export) only ever sees true optional fields.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from firevitals.models import FirefighterStatus, VitalsEntry, new_id

#: Form field name -> VitalsEntry field. Both the on-screen short names and
#: the long model names are accepted.
VITALS_FORM_FIELDS: dict[str, str] = {
    "hr": "heart_rate",
    "rr": "resp_rate",
    "spo2": "oxygen_sat",
    "bpSys": "bp_systolic",
    "bpDia": "bp_diastolic",
    "tempF": "temperature_f",
    "heartRate": "heart_rate",
    "respRate": "resp_rate",
    "oxygenSat": "oxygen_sat",
    "bpSystolic": "bp_systolic",
    "bpDiastolic": "bp_diastolic",
    "temperatureF": "temperature_f",
    "heart_rate": "heart_rate",
    "resp_rate": "resp_rate",
    "oxygen_sat": "oxygen_sat",
    "bp_systolic": "bp_systolic",
    "bp_diastolic": "bp_diastolic",
    "temperature_f": "temperature_f",
}


def parse_number(value: Any) -> float | None:
    """Parse a numeric form field.

    Blank, unparseable and non-finite input all mean "absent"; never zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None
    if not math.isfinite(result):
        return None
    return result


def parse_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_status(value: Any) -> FirefighterStatus | None:
    return FirefighterStatus.parse(value)


def vitals_from_form(form: Mapping[str, Any], firefighter_id: str, timestamp: int) -> VitalsEntry:
    """Build a :class:`VitalsEntry` from raw form values."""
    readings: dict[str, float] = {}
    for key, raw in form.items():
        field_name = VITALS_FORM_FIELDS.get(key)
        if field_name is None:
            continue
        number = parse_number(raw)
        if number is not None:
            readings[field_name] = number

    return VitalsEntry(
        id=new_id(),
        firefighter_id=firefighter_id,
        timestamp=timestamp,
        notes=parse_text(form.get("notes")),
        **readings,
    )
