from __future__ import annotations

import csv
import io
from datetime import UTC

from firevitals._constants import TABLE_COLUMNS
from firevitals.export.table import build_rows, build_table
from firevitals.models import Firefighter, VitalsEntry

T0 = 1_760_000_000_000  # 2025-10-09 08:53:20 UTC

ROSTER = [
    Firefighter(id="a", first_name="Jane", last_name="Smith", unit="E7"),
    Firefighter(id="b", first_name="Cher", last_name=""),
]


def _read(text: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(text, newline="")))


def test_header_and_one_row_per_entry() -> None:
    vitals = [
        VitalsEntry(firefighter_id="a", timestamp=T0, heart_rate=88),
        VitalsEntry(firefighter_id="b", timestamp=T0 + 1_000, resp_rate=18),
        VitalsEntry(firefighter_id="a", timestamp=T0 + 2_000),
    ]
    text = build_table(ROSTER, vitals, UTC)
    assert text.splitlines()[0] == ",".join(TABLE_COLUMNS)
    assert len(_read(text)) == len(vitals)


def test_empty_log_is_header_only() -> None:
    assert _read(build_table(ROSTER, [], UTC)) == []


def test_rows_are_oldest_first_with_formatted_values() -> None:
    vitals = [
        VitalsEntry(firefighter_id="b", timestamp=T0 + 60_000, temperature_f=99.1),
        VitalsEntry(firefighter_id="a", timestamp=T0, heart_rate=88, bp_systolic=128, bp_diastolic=82),
    ]
    first, second = build_rows(ROSTER, vitals, UTC)
    assert first["time"] == "2025-10-09 08:53:20"
    assert first["firefighter"] == "Smith, Jane"
    assert first["unit"] == "E7"
    assert first["heartRate"] == "88"
    assert first["bpSystolic"] == "128"
    assert second["time"] == "2025-10-09 08:54:20"
    assert second["firefighter"] == "Cher"
    assert second["unit"] == ""
    assert second["temperatureF"] == "99.1"


def test_missing_readings_are_blank_not_zero() -> None:
    (row,) = build_rows(ROSTER, [VitalsEntry(firefighter_id="a", timestamp=T0, oxygen_sat=97)], UTC)
    assert row["oxygenSat"] == "97"
    for column in ("heartRate", "respRate", "bpSystolic", "bpDiastolic", "temperatureF", "notes"):
        assert row[column] == ""


def test_orphaned_entries_attributed_to_unknown() -> None:
    (row,) = build_rows(ROSTER, [VitalsEntry(firefighter_id="gone", timestamp=T0, heart_rate=60)], UTC)
    assert row["firefighter"] == "Unknown"
    assert row["unit"] == ""


def test_awkward_notes_survive_csv_round_trip() -> None:
    notes = 'said "I\'m fine", then sat down,\nasked for water'
    vitals = [VitalsEntry(firefighter_id="a", timestamp=T0, heart_rate=100, notes=notes)]
    roster = [Firefighter(id="a", first_name="Jane", last_name="Smith, Jr.")]

    (row,) = _read(build_table(roster, vitals, UTC))
    assert row["notes"] == notes
    assert row["firefighter"] == "Smith, Jr., Jane"
    assert row["heartRate"] == "100"
