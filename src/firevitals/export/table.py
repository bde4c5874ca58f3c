"""Tabular (CSV) export of a scene's vitals log."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from datetime import tzinfo

from firevitals._constants import TABLE_COLUMNS, UNKNOWN_FIREFIGHTER
from firevitals.export._format import format_number, format_timestamp
from firevitals.models import Firefighter, VitalsEntry


def build_rows(
    firefighters: Sequence[Firefighter],
    vitals: Sequence[VitalsEntry],
    tz: tzinfo | None = None,
) -> list[dict[str, str]]:
    """One row per entry, oldest first across the whole scene.

    Entries whose firefighter is no longer on the roster are attributed to
    ``"Unknown"`` rather than dropped.
    """
    by_id = {member.id: member for member in firefighters}
    rows: list[dict[str, str]] = []
    for entry in sorted(vitals, key=lambda item: item.timestamp):
        member = by_id.get(entry.firefighter_id)
        rows.append(
            {
                "time": format_timestamp(entry.timestamp, tz),
                "firefighter": member.display_name if member is not None else UNKNOWN_FIREFIGHTER,
                "unit": (member.unit or "") if member is not None else "",
                "heartRate": format_number(entry.heart_rate),
                "respRate": format_number(entry.resp_rate),
                "oxygenSat": format_number(entry.oxygen_sat),
                "bpSystolic": format_number(entry.bp_systolic),
                "bpDiastolic": format_number(entry.bp_diastolic),
                "temperatureF": format_number(entry.temperature_f),
                "notes": entry.notes or "",
            }
        )
    return rows


def build_table(
    firefighters: Sequence[Firefighter],
    vitals: Sequence[VitalsEntry],
    tz: tzinfo | None = None,
) -> str:
    """CSV text with a header row and one row per vitals entry.

    Fields containing commas, quotes or newlines are quoted so they
    survive a round trip through any standard CSV reader.
    """
    buffer = io.StringIO(newline="")
    writer = csv.DictWriter(buffer, fieldnames=TABLE_COLUMNS, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writeheader()
    writer.writerows(build_rows(firefighters, vitals, tz))
    return buffer.getvalue()
