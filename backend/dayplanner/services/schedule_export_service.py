"""
Schedule export to PDF and CSV.

Both renderers take a finished list of entries and return bytes; they
never touch editor state.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from dayplanner.models.schedule import ScheduleEntry
from dayplanner.utils.datetime_utils import format_date

TITLE = "DAILY SCHEDULE"
HEADER_BG = colors.HexColor("#111827")
ROW_ALT_BG = colors.HexColor("#F9FAFB")
GRID = colors.HexColor("#D1D5DB")
TIME_COL_W = 45 * mm


@dataclass
class ExportOwner:
    """Who the exported schedule belongs to (admin exports only)."""

    username: str
    email: Optional[str] = None
    last_edited: Optional[datetime] = None


def timing_label(entry: ScheduleEntry) -> str:
    return f"{entry.start} - {entry.end}"


def export_filename(extension: str, owner: Optional[ExportOwner] = None) -> str:
    if owner:
        return f"{owner.username}_Schedule.{extension}"
    return f"Daily_Schedule.{extension}"


class ScheduleExportService:
    """Renders schedules as CSV text or a PDF document."""

    def to_csv(self, entries: list[ScheduleEntry], owner: Optional[ExportOwner] = None) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        if owner:
            modified = format_date(owner.last_edited)
            writer.writerow(["TIMINGS", "PLAN", "USER", "LAST_MODIFIED"])
            for entry in entries:
                writer.writerow([timing_label(entry), entry.task, owner.username, modified])
        else:
            writer.writerow(["TIMINGS", "PLAN"])
            for entry in entries:
                writer.writerow([timing_label(entry), entry.task])
        return buffer.getvalue().encode("utf-8")

    def to_pdf(self, entries: list[ScheduleEntry], owner: Optional[ExportOwner] = None) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=18 * mm,
            rightMargin=18 * mm,
            topMargin=18 * mm,
            bottomMargin=18 * mm,
            title=TITLE,
        )
        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "ScheduleTitle", parent=styles["Title"], fontName="Helvetica-Bold", fontSize=20
        )
        cell_style = ParagraphStyle(
            "ScheduleCell", parent=styles["BodyText"], fontName="Helvetica", fontSize=10, leading=12
        )

        story = [Paragraph(TITLE, title_style), Spacer(1, 6 * mm)]
        if owner:
            who = owner.username if not owner.email else f"{owner.username} ({owner.email})"
            story.append(Paragraph(f"User: {escape(who)}", styles["Normal"]))
            story.append(
                Paragraph(f"Last Modified: {format_date(owner.last_edited)}", styles["Normal"])
            )
            story.append(Spacer(1, 6 * mm))

        story.append(self._build_table(entries, cell_style))
        doc.build(story)
        return buffer.getvalue()

    def _build_table(self, entries: list[ScheduleEntry], cell_style: ParagraphStyle) -> Table:
        data = [["TIMINGS", "PLAN"]]
        for entry in entries:
            data.append([timing_label(entry), Paragraph(escape(entry.task), cell_style)])

        table = Table(data, colWidths=[TIME_COL_W, None], repeatRows=1, hAlign="LEFT")
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (0, 1), (0, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, GRID),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]
        for row in range(2, len(data), 2):
            style.append(("BACKGROUND", (0, row), (-1, row), ROW_ALT_BG))
        table.setStyle(TableStyle(style))
        return table
