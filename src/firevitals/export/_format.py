"""Value formatting shared by the table and report exports."""

from __future__ import annotations

from datetime import datetime, tzinfo

from firevitals._constants import TIME_FORMAT


def format_timestamp(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    """Human-readable time for an epoch-millisecond timestamp.

    ``tz=None`` renders in the device's local time zone.
    """
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=tz)
    return moment.strftime(TIME_FORMAT)


def format_number(value: float | None, missing: str = "") -> str:
    """Render a reading; whole numbers lose their ``.0``."""
    if value is None:
        return missing
    if value.is_integer():
        return str(int(value))
    return str(value)
