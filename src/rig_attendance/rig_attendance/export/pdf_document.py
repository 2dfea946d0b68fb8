"""PDF rendition of the export: one landscape A4 table built from the same column schema
and painted cells as the XLSX workbook."""

from __future__ import annotations

from io import BytesIO
from typing import Any, List, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.enums import TableType
from .layout import PLAIN_ROLES, ColumnSpec, header_row_count
from .painters.base import PaintedCell

PAGE_SIZE = landscape(A4)
MARGIN = 10 * mm

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
BODY_FONT_SIZE = 6
HEADER_BACKGROUND = colors.HexColor("#DDEBF7")
GRID_COLOR = colors.HexColor("#808080")


def _title_styles() -> List[ParagraphStyle]:
    sheet = getSampleStyleSheet()
    return [
        ParagraphStyle("ExportTitle", parent=sheet["Title"], fontSize=14, alignment=TA_CENTER, spaceAfter=2),
        ParagraphStyle("ExportSubtitle", parent=sheet["Heading2"], fontSize=12, alignment=TA_CENTER, spaceAfter=2),
        ParagraphStyle("ExportPeriod", parent=sheet["Heading3"], fontSize=11, alignment=TA_CENTER, spaceAfter=4),
    ]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _column_widths(columns: Sequence[ColumnSpec], available: float) -> List[float]:
    # Spreadsheet widths are relative; stretch them over the printable width.
    total = sum(c.width for c in columns)
    return [available * c.width / total for c in columns]


def _header_rows(columns: Sequence[ColumnSpec], table_type: TableType) -> Tuple[List[List[str]], List[tuple]]:
    if table_type != TableType.SHIFTS:
        return [[c.label for c in columns]], []

    top: List[str] = []
    bottom: List[str] = []
    spans: List[tuple] = []
    idx = 0
    while idx < len(columns):
        column = columns[idx]
        if column.is_day:
            top += [str(column.day), ""]
            bottom += [column.label, columns[idx + 1].label]
            spans.append(("SPAN", (idx, 0), (idx + 1, 0)))
            idx += 2
            continue
        top.append(column.label)
        bottom.append("")
        spans.append(("SPAN", (idx, 0), (idx, 1)))
        idx += 1
    return [top, bottom], spans


def _body_style(
    columns: Sequence[ColumnSpec], rows: Sequence[Sequence[PaintedCell]], *, first_row: int
) -> List[tuple]:
    commands: List[tuple] = []
    for r_offset, cells in enumerate(rows):
        row_idx = first_row + r_offset
        for c_idx, (column, painted) in enumerate(zip(columns, cells)):
            if painted.bold:
                commands.append(("FONTNAME", (c_idx, row_idx), (c_idx, row_idx), BOLD_FONT))
            if painted.fill and painted.value is not None:
                commands.append(("BACKGROUND", (c_idx, row_idx), (c_idx, row_idx), colors.HexColor(f"#{painted.fill}")))
            if column.role in PLAIN_ROLES:
                commands.append(("ALIGN", (c_idx, row_idx), (c_idx, row_idx), "LEFT"))
    return commands


def render_pdf(
    *,
    columns: Sequence[ColumnSpec],
    rows: Sequence[Sequence[PaintedCell]],
    titles: Sequence[str],
    table_type: TableType,
) -> bytes:
    """Write titles, header and painted rows as a single table, repeated header on each page."""
    output = BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=PAGE_SIZE,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=" - ".join(titles),
    )

    story: list = []
    for text, style in zip(titles, _title_styles()):
        story.append(Paragraph(escape(text), style))
    story.append(Spacer(1, 4 * mm))

    header, spans = _header_rows(columns, table_type)
    n_header = header_row_count(table_type)
    body = [[_text(c.value) for c in cells] for cells in rows]

    table = Table(header + body, colWidths=_column_widths(columns, doc.width), repeatRows=n_header)
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), BODY_FONT),
                ("FONTSIZE", (0, 0), (-1, -1), BODY_FONT_SIZE),
                ("LEADING", (0, 0), (-1, -1), BODY_FONT_SIZE + 1),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LEFTPADDING", (0, 0), (-1, -1), 1),
                ("RIGHTPADDING", (0, 0), (-1, -1), 1),
                ("GRID", (0, 0), (-1, -1), 0.25, GRID_COLOR),
                ("FONTNAME", (0, 0), (-1, n_header - 1), BOLD_FONT),
                ("BACKGROUND", (0, 0), (-1, n_header - 1), HEADER_BACKGROUND),
                *spans,
                *_body_style(columns, rows, first_row=n_header),
            ]
        )
    )
    story.append(table)

    doc.build(story)
    return output.getvalue()
