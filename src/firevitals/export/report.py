"""Paginated PDF report of a scene's vitals.

Layout and rendering are separate steps: :func:`layout_report` decides
which text lands on which page and where, and :func:`render_pdf` only
draws those lines with reportlab. Page-break behaviour can therefore be
checked without parsing PDF output.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from firevitals._constants import (
    BODY_FONT,
    CONTENT_HEIGHT_LIMIT,
    CONTENT_WIDTH,
    EXPORTED_ADVANCE,
    HEADER_FONT,
    HEADER_LINE_HEIGHT,
    LINE_HEIGHT,
    NO_VITALS_LINE,
    PAGE_MARGIN,
    SECTION_GAP,
    TIME_FORMAT,
    TITLE_ADVANCE,
    TITLE_FONT,
)
from firevitals.export._format import format_number, format_timestamp
from firevitals.models import Firefighter, VitalsEntry

_logger = logging.getLogger(__name__)

Font = tuple[str, int]


@dataclass(frozen=True, slots=True)
class ReportLine:
    text: str
    font: Font
    y: float
    """Baseline offset from the top of the page, in points."""


@dataclass(slots=True)
class _PageWriter:
    pages: list[list[ReportLine]] = field(default_factory=lambda: [[]])
    y: float = PAGE_MARGIN

    def write(self, text: str, font: Font, advance: float) -> None:
        if self.y > CONTENT_HEIGHT_LIMIT:
            self.pages.append([])
            self.y = PAGE_MARGIN
        self.pages[-1].append(ReportLine(text, font, self.y))
        self.y += advance


def wrap_text(text: str, font: Font = BODY_FONT, width: float = CONTENT_WIDTH) -> list[str]:
    """Word-wrap *text* to *width* points using the font's real metrics."""
    name, size = font
    return simpleSplit(text, name, size, width) or [""]


def format_entry_line(entry: VitalsEntry, tz: tzinfo | None = None) -> str:
    return (
        f"{format_timestamp(entry.timestamp, tz)}  "
        f"HR:{format_number(entry.heart_rate, '-')} "
        f"RR:{format_number(entry.resp_rate, '-')} "
        f"SpO2:{format_number(entry.oxygen_sat, '-')} "
        f"BP:{format_number(entry.bp_systolic, '-')} / {format_number(entry.bp_diastolic, '-')} "
        f"TempF:{format_number(entry.temperature_f, '-')}"
    )


def layout_report(
    firefighters: Sequence[Firefighter],
    vitals: Sequence[VitalsEntry],
    *,
    title: str,
    exported_at: datetime,
    tz: tzinfo | None = None,
) -> list[list[ReportLine]]:
    """Lay the report out into pages of positioned lines.

    Sections follow display-name order; inside a section the most recent
    entry comes first. A page break happens whenever the cursor is past
    the content-height limit before a line is written.
    """
    writer = _PageWriter()
    writer.write(title, TITLE_FONT, TITLE_ADVANCE)
    writer.write(f"Exported: {exported_at.strftime(TIME_FORMAT)}", BODY_FONT, EXPORTED_ADVANCE)

    grouped: dict[str, list[VitalsEntry]] = {}
    for entry in vitals:
        grouped.setdefault(entry.firefighter_id, []).append(entry)

    for member in sorted(firefighters, key=lambda item: item.display_name):
        writer.write(member.label, HEADER_FONT, HEADER_LINE_HEIGHT)
        entries = sorted(grouped.get(member.id, []), key=lambda item: item.timestamp, reverse=True)
        if not entries:
            writer.write(NO_VITALS_LINE, BODY_FONT, HEADER_LINE_HEIGHT)
            continue
        for entry in entries:
            writer.write(format_entry_line(entry, tz), BODY_FONT, LINE_HEIGHT)
            notes = (entry.notes or "").strip()
            if notes:
                for line in wrap_text(f"Notes: {notes}"):
                    writer.write(line, BODY_FONT, LINE_HEIGHT)
        writer.y += SECTION_GAP

    return writer.pages


def render_pdf(pages: Sequence[Sequence[ReportLine]], *, title: str) -> bytes:
    buffer = io.BytesIO()
    _, page_height = letter
    pdf = canvas.Canvas(buffer, pagesize=letter)
    pdf.setTitle(title)
    for page in pages:
        for line in page:
            pdf.setFont(*line.font)
            pdf.drawString(PAGE_MARGIN, page_height - line.y, line.text)
        pdf.showPage()
    pdf.save()
    data = buffer.getvalue()
    _logger.debug("Rendered %d page report (%d bytes)", len(pages), len(data))
    return data


def build_report(
    firefighters: Sequence[Firefighter],
    vitals: Sequence[VitalsEntry],
    *,
    title: str,
    exported_at: datetime,
    tz: tzinfo | None = None,
) -> bytes:
    """Render the scene's vitals as a PDF document."""
    pages = layout_report(firefighters, vitals, title=title, exported_at=exported_at, tz=tz)
    return render_pdf(pages, title=title)
