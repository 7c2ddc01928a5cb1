from __future__ import annotations

import io
from datetime import date, timedelta
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import KeepTogether, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..common.datetime_utils import format_day_slash, format_long_date
from ..core.constants import GROUPS_PER_BOOK_PAGE
from ..core.enums import TimeSlot
from ..groups.model import Group

FRIDAY = 4
BLUE = colors.Color(37 / 255, 99 / 255, 235 / 255)
SLATE = colors.Color(71 / 255, 85 / 255, 105 / 255)
GRID_GREY = colors.Color(100 / 255, 100 / 255, 100 / 255)
HEADER_GREY = colors.Color(240 / 255, 240 / 255, 240 / 255)

CONTENT_WIDTH = 18.2 * cm
NO_COL = 1.0 * cm
NAME_COL = 5.5 * cm


def week_days(week_start: date) -> list[date]:
    """The six teaching days of a week; Friday is skipped."""
    days = [week_start + timedelta(days=i) for i in range(7)]
    return [d for d in days if d.weekday() != FRIDAY]


def slot_initials(slots: Iterable[TimeSlot]) -> list[str]:
    return [TimeSlot(s).value[0] for s in slots]


def select_groups(groups: Iterable[Group], *, group_type: str, cohort: Optional[str] = None) -> list[Group]:
    chosen = [
        g
        for g in groups
        if g.group_type.value == group_type and (not cohort or cohort == "all" or g.cohort == cohort)
    ]
    return sorted(chosen, key=lambda g: (g.cohort, g.name.lower()))


def _styles() -> dict:
    ss = getSampleStyleSheet()
    return {
        "cover_title": ParagraphStyle("BookTitle", parent=ss["Title"], fontSize=26, leading=32, alignment=TA_CENTER),
        "cover_school": ParagraphStyle(
            "BookSchool", parent=ss["Normal"], fontSize=14, leading=18, alignment=TA_CENTER,
            textColor=BLUE, fontName="Helvetica-Bold",
        ),
        "cover_body": ParagraphStyle("BookBody", parent=ss["Normal"], fontSize=12, leading=16, alignment=TA_CENTER),
        "week_title": ParagraphStyle(
            "WeekTitle", parent=ss["Normal"], fontSize=30, leading=36, alignment=TA_CENTER,
            textColor=BLUE, fontName="Helvetica-Bold",
        ),
        "week_period": ParagraphStyle(
            "WeekPeriod", parent=ss["Normal"], fontSize=14, leading=18, alignment=TA_CENTER, textColor=SLATE,
        ),
        "group_header": ParagraphStyle("GroupHeader", parent=ss["Normal"], fontSize=9, leading=11),
        "cell": ParagraphStyle("BookCell", parent=ss["Normal"], fontSize=9, leading=11),
    }


class AttendanceBookBuilder:
    """Printable blank attendance book: cover, then per week a separator page
    followed by the group sheets, three groups per page."""

    def __init__(self, *, school_name: str, school_location: str = ""):
        self._school_name = school_name
        self._school_location = school_location

    def build(
        self,
        groups: Iterable[Group],
        *,
        start_date: date,
        weeks: int = 1,
        group_type: str,
        cohort: Optional[str] = None,
    ) -> bytes:
        weeks = max(int(weeks), 1)
        st = _styles()
        story = self._cover(st, start_date=start_date, weeks=weeks, group_type=group_type, cohort=cohort)

        for week_index in range(weeks):
            days = week_days(start_date + timedelta(days=7 * week_index))
            story.append(PageBreak())
            story.extend(self._separator(st, week_index + 1, days))
            story.append(PageBreak())
            for idx, group in enumerate(groups, start=1):
                if idx > 1 and (idx - 1) % GROUPS_PER_BOOK_PAGE == 0:
                    story.append(PageBreak())
                story.append(KeepTogether(self._group_block(st, idx, group, days)))
                story.append(Spacer(1, 0.6 * cm))

        output = io.BytesIO()
        doc = SimpleDocTemplate(
            output,
            pagesize=A4,
            leftMargin=1.4 * cm,
            rightMargin=1.4 * cm,
            topMargin=1.5 * cm,
            bottomMargin=1.5 * cm,
            title="Buku Absensi Halaqah",
        )
        doc.build(story)
        return output.getvalue()

    def _cover(self, st, *, start_date: date, weeks: int, group_type: str, cohort: Optional[str]) -> list:
        end = start_date + timedelta(days=weeks * 7 - 1)
        cohort_label = "SEMUA MARHALAH" if not cohort or cohort == "all" else cohort.upper()
        story = [
            Spacer(1, 6 * cm),
            Paragraph("BUKU ABSENSI", st["cover_title"]),
            Paragraph("HALAQAH AL-QURAN", st["cover_title"]),
            Spacer(1, 0.6 * cm),
            Paragraph(escape(self._school_name), st["cover_school"]),
        ]
        if self._school_location:
            story.append(Paragraph(self._school_location, st["cover_body"]))
        story += [
            Spacer(1, 1.2 * cm),
            Paragraph(group_type.upper(), st["cover_body"]),
            Paragraph(f"Marhalah: {cohort_label}", st["cover_body"]),
            Spacer(1, 1.5 * cm),
            Paragraph("<b>PERIODE TOTAL</b>", st["cover_body"]),
            Paragraph(f"{format_long_date(start_date)} - {format_long_date(end)}", st["cover_body"]),
            Paragraph(f"({weeks} Minggu)", st["cover_body"]),
        ]
        return story

    def _separator(self, st, week_number: int, days: list[date]) -> list:
        box = Table(
            [
                [Paragraph(f"MINGGU KE-{week_number}", st["week_title"])],
                [Paragraph(f"{format_long_date(days[0])} - {format_long_date(days[-1])}", st["week_period"])],
            ],
            colWidths=[17 * cm],
            rowHeights=[2.4 * cm, 1.2 * cm],
        )
        box.setStyle(
            TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 1, BLUE),
                    ("BACKGROUND", (0, 0), (-1, -1), colors.Color(248 / 255, 250 / 255, 252 / 255)),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        return [Spacer(1, 8 * cm), box]

    def _group_block(self, st, index: int, group: Group, days: list[date]) -> list:
        teacher = group.teacher.name if group.teacher else "-"
        header = Table(
            [[
                Paragraph(f"<b>{index}. {escape(group.name)}</b>", st["group_header"]),
                Paragraph(f"Musammi': {escape(teacher)}", st["group_header"]),
                Paragraph(f"({group.cohort})", st["group_header"]),
            ]],
            colWidths=[7.6 * cm, 8.0 * cm, 2.6 * cm],
        )
        header.setStyle(TableStyle([("BACKGROUND", (0, 0), (-1, -1), HEADER_GREY)]))
        return [header, Spacer(1, 0.15 * cm), self._sheet(st, group, days)]

    def _sheet(self, st, group: Group, days: list[date]) -> Table:
        initials = slot_initials(group.slots) or ["-"]
        per_day = len(initials)
        row1 = ["No", "Nama Santri (Kelas)"]
        row2 = ["", ""]
        for d in days:
            row1 += [format_day_slash(d)] + [""] * (per_day - 1)
            row2 += initials

        members = sorted(group.members, key=lambda s: (s.name.lower(), s.name))
        body = [
            [str(i), Paragraph(escape(f"{s.name} ({s.class_label})"), st["cell"])] + [""] * (len(days) * per_day)
            for i, s in enumerate(members, start=1)
        ]

        check_width = (CONTENT_WIDTH - NO_COL - NAME_COL) / (len(days) * per_day)
        t = Table([row1, row2] + body, colWidths=[NO_COL, NAME_COL] + [check_width] * (len(days) * per_day), repeatRows=2)
        style = [
            ("GRID", (0, 0), (-1, -1), 0.3, GRID_GREY),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("FONTSIZE", (2, 0), (-1, 0), 7),
            ("FONTNAME", (2, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (2, 1), (-1, 1), 7),
            ("ALIGN", (0, 0), (0, -1), "CENTER"),
            ("ALIGN", (2, 0), (-1, 1), "CENTER"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("SPAN", (0, 0), (0, 1)),
            ("SPAN", (1, 0), (1, 1)),
        ]
        if per_day > 1:
            for i in range(len(days)):
                first = 2 + i * per_day
                style.append(("SPAN", (first, 0), (first + per_day - 1, 0)))
        t.setStyle(TableStyle(style))
        return t
