from __future__ import annotations

import pytest

from firevitals.forms import parse_number, parse_status, parse_text, vitals_from_form
from firevitals.models import FirefighterStatus


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", None),
        ("   ", None),
        (None, None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        (True, None),
        ("0", 0.0),
        (" 98.6 ", 98.6),
        ("1e2", 100.0),
        (72, 72.0),
        (float("nan"), None),
    ],
)
def test_parse_number(raw: object, expected: float | None) -> None:
    assert parse_number(raw) == expected


def test_parse_text_trims_and_blanks_to_none() -> None:
    assert parse_text("  hello ") == "hello"
    assert parse_text("\n\t") is None
    assert parse_text(None) is None


def test_parse_status() -> None:
    assert parse_status("transport") is FirefighterStatus.TRANSPORT
    assert parse_status("") is None
    assert parse_status("off") is None


def test_vitals_from_form_accepts_short_and_long_keys() -> None:
    entry = vitals_from_form(
        {"hr": "90", "respRate": "16", "oxygen_sat": "95", "bpSys": "", "mood": "grumpy", "notes": " ok "},
        "f1",
        1_000,
    )
    assert entry.firefighter_id == "f1"
    assert entry.timestamp == 1_000
    assert entry.heart_rate == 90
    assert entry.resp_rate == 16
    assert entry.oxygen_sat == 95
    assert entry.bp_systolic is None
    assert entry.notes == "ok"


def test_vitals_from_form_zero_is_a_reading() -> None:
    entry = vitals_from_form({"hr": "0"}, "f1", 1)
    assert entry.heart_rate == 0


def test_blank_form_gives_empty_entry() -> None:
    entry = vitals_from_form({}, "f1", 1)
    blob = entry.to_blob()
    assert set(blob) == {"id", "firefighterId", "timestamp"}
