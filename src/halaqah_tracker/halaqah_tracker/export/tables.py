from __future__ import annotations

import io
from datetime import datetime
from typing import Optional

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..reports.formatter import ExportTable

SHEET_NAME = "Laporan"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"

HEADER_BLUE = colors.Color(37 / 255, 99 / 255, 235 / 255)
STRIPE = colors.Color(248 / 255, 250 / 255, 252 / 255)


class SpreadsheetExporter:
    """Single-sheet xlsx through pandas + openpyxl."""

    def export_table(self, table: ExportTable) -> bytes:
        df = pd.DataFrame(table.rows, columns=table.columns)
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
        return output.getvalue()


def _styles() -> dict:
    ss = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ExportTitle", parent=ss["Heading1"], fontSize=16, leading=20, spaceAfter=4),
        "meta": ParagraphStyle("ExportMeta", parent=ss["Normal"], fontSize=10, leading=12, textColor=colors.black),
    }


def grid_table(data: list[list], col_widths=None) -> Table:
    t = Table(data, colWidths=col_widths, repeatRows=1)
    t.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#cbd5e1")),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE]),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ]
        )
    )
    return t


class PdfExporter:
    """Title, print date and a striped grid table, A4 portrait."""

    def export_document(self, table: ExportTable, *, printed_at: Optional[datetime] = None) -> bytes:
        printed_at = printed_at or datetime.now()
        st = _styles()
        story = [
            Paragraph(table.title, st["title"]),
            Paragraph(f"Dicetak pada: {printed_at.strftime('%d/%m/%Y')}", st["meta"]),
            Spacer(1, 0.3 * cm),
        ]
        data = [list(table.columns)] + [["" if v is None else str(v) for v in row] for row in table.rows]
        story.append(grid_table(data))

        output = io.BytesIO()
        doc = SimpleDocTemplate(
            output,
            pagesize=A4,
            leftMargin=1.4 * cm,
            rightMargin=1.4 * cm,
            topMargin=1.2 * cm,
            bottomMargin=1.5 * cm,
            title=table.title,
        )
        doc.build(story)
        return output.getvalue()
