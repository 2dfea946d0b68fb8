from __future__ import annotations

from io import BytesIO
from typing import Sequence

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..core.enums import TableType
from .layout import PLAIN_ROLES, ColumnSpec, header_row_count
from .painters.base import PaintedCell

SHEET_NAME = "Attendance"

TITLE_FONT = Font(bold=True, size=14)
SUBTITLE_FONT = Font(bold=True, size=12)
HEADER_FONT = Font(bold=True)
BOLD_FONT = Font(bold=True)
PLAIN_FONT = Font(bold=False)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="DDEBF7")

THIN_SIDE = Side(style="thin", color="808080")
THIN_BORDER = Border(left=THIN_SIDE, right=THIN_SIDE, top=THIN_SIDE, bottom=THIN_SIDE)
CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
LEFT = Alignment(horizontal="left", vertical="center")


def _merge_title(ws: Worksheet, row: int, text: str, width: int, *, font: Font) -> None:
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
    cell = ws.cell(row=row, column=1, value=text)
    cell.font = font
    cell.alignment = CENTER


def _style_header_cell(ws: Worksheet, row: int, col: int, value) -> None:
    cell = ws.cell(row=row, column=col, value=value)
    cell.font = HEADER_FONT
    cell.fill = HEADER_FILL
    cell.alignment = CENTER
    cell.border = THIN_BORDER


def _write_header(ws: Worksheet, columns: Sequence[ColumnSpec], *, start_row: int, table_type: TableType) -> None:
    if table_type != TableType.SHIFTS:
        for idx, column in enumerate(columns, start=1):
            _style_header_cell(ws, start_row, idx, column.label)
        return

    second = start_row + 1
    idx = 1
    while idx <= len(columns):
        column = columns[idx - 1]
        if column.is_day:
            # D/N pair under one day number.
            _style_header_cell(ws, start_row, idx, column.day)
            _style_header_cell(ws, start_row, idx + 1, None)
            ws.merge_cells(start_row=start_row, start_column=idx, end_row=start_row, end_column=idx + 1)
            _style_header_cell(ws, second, idx, column.label)
            _style_header_cell(ws, second, idx + 1, columns[idx].label)
            idx += 2
            continue
        _style_header_cell(ws, start_row, idx, column.label)
        _style_header_cell(ws, second, idx, None)
        ws.merge_cells(start_row=start_row, start_column=idx, end_row=second, end_column=idx)
        idx += 1


def _style_body(
    ws: Worksheet,
    columns: Sequence[ColumnSpec],
    rows: Sequence[Sequence[PaintedCell]],
    *,
    start_row: int,
) -> None:
    for r_offset, cells in enumerate(rows):
        row_idx = start_row + r_offset
        for c_idx, (column, painted) in enumerate(zip(columns, cells), start=1):
            cell = ws.cell(row=row_idx, column=c_idx)
            if painted.value is None:
                cell.value = None
            cell.font = BOLD_FONT if painted.bold else PLAIN_FONT
            cell.border = THIN_BORDER
            cell.alignment = LEFT if column.role in PLAIN_ROLES else CENTER
            if painted.fill:
                cell.fill = PatternFill(fill_type="solid", fgColor=painted.fill)


def _apply_widths(ws: Worksheet, columns: Sequence[ColumnSpec]) -> None:
    for idx, column in enumerate(columns, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = column.width


def render_workbook(
    *,
    columns: Sequence[ColumnSpec],
    rows: Sequence[Sequence[PaintedCell]],
    titles: Sequence[str],
    table_type: TableType,
) -> bytes:
    """Write titles, header and painted rows into a single-sheet XLSX document."""
    header_start = len(titles) + 1
    body_start = header_start + header_row_count(table_type)

    frame = pd.DataFrame([[c.value for c in cells] for cells in rows], columns=range(len(columns)))

    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, header=False, sheet_name=SHEET_NAME, startrow=body_start - 1)
        ws = writer.sheets[SHEET_NAME]

        for offset, text in enumerate(titles):
            _merge_title(ws, offset + 1, text, len(columns), font=TITLE_FONT if offset == 0 else SUBTITLE_FONT)
        _write_header(ws, columns, start_row=header_start, table_type=table_type)
        _style_body(ws, columns, rows, start_row=body_start)
        _apply_widths(ws, columns)
        ws.freeze_panes = ws.cell(row=body_start, column=4)

    return output.getvalue()
