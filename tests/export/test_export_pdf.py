from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader

from src.rig_attendance.rig_attendance.core.enums import ShiftCode, TableType
from src.rig_attendance.rig_attendance.core.exceptions import ValidationError
from src.rig_attendance.rig_attendance.export.layout import build_columns
from src.rig_attendance.rig_attendance.export.painters.base import PaintedCell
from src.rig_attendance.rig_attendance.export.pdf_document import _body_style, _header_rows
from src.rig_attendance.rig_attendance.export.service import ExportService
from src.rig_attendance.rig_attendance.settings.model import AppSettings


def _text(result) -> str:
    reader = PdfReader(BytesIO(result.content))
    return "\n".join(page.extract_text() for page in reader.pages)


def _set_days(attendance_repo, employee, days, month=2, year=2024):
    attendance_repo.upsert(
        employee_id=employee.id, month=month, year=year, days=days, total_on_duty=0, ot_days=0, remarks="Crew change"
    )


def test_pdf_export_reads_back(export_service, attendance_repo, settings_repo, add_employee):
    settings_repo.settings = AppSettings(company_name="Acme & Sons Drilling", rig_name="ROM-7")
    crew = add_employee("Arun", "Rig Man")
    _set_days(attendance_repo, crew, {1: "P", 2: "OT"})

    result = export_service.export_table(workspace_id="domestic", month=2, year=2024, output_format="pdf")

    assert result.content.startswith(b"%PDF")
    assert result.mimetype == "application/pdf"
    assert result.filename == "attendance_February_2024_20250314090000.pdf"
    text = _text(result)
    assert "ROM-7" in text and "February 2024" in text
    for expected in ("Acme & Sons Drilling", "SL.NO", "T/ON DUTY", "Arun", "Rig Man", "Crew change"):
        assert expected in text


def test_pdf_shift_grid_reads_back(export_service, attendance_repo, shift_repo, add_employee):
    crew = add_employee("Arun", "Rig Man")
    _set_days(attendance_repo, crew, {1: "P"})
    shift_repo.upsert(employee_id=crew.id, month=2, year=2024, days={1: ShiftCode.NIGHT}, total_on_duty=1)

    result = export_service.export_table(
        workspace_id="domestic", month=2, year=2024, table_type="shifts", output_format="pdf"
    )

    assert result.filename.startswith("shifts_February_2024_")
    assert result.filename.endswith(".pdf")
    assert "Arun" in _text(result)


def test_unknown_output_format_is_rejected(export_service, add_employee):
    add_employee("Arun")

    with pytest.raises(ValidationError):
        export_service.export_table(workspace_id="domestic", month=2, year=2024, output_format="docx")


def test_pdf_uses_the_same_painted_cells(employees_repo, attendance_repo, shift_repo, settings_repo, fixed_now, add_employee):
    crew = add_employee("Arun")
    _set_days(attendance_repo, crew, {3: "A"})
    seen = {}

    def capture(**kwargs):
        seen.update(kwargs)
        return b"%PDF-stub"

    service = ExportService(
        employees_repo, attendance_repo, shift_repo, settings_repo, clock=lambda: fixed_now, pdf_renderer=capture
    )
    service.export_table(workspace_id="domestic", month=2, year=2024, output_format="pdf")

    assert seen["columns"] == build_columns(29, TableType.ATTENDANCE)
    day3 = seen["rows"][0][5]
    assert (day3.value, day3.fill, day3.bold) == ("A", "FFC7CE", True)


def test_cell_backgrounds_follow_fills_and_skip_blanks():
    columns = build_columns(29, TableType.ATTENDANCE)
    cells = [PaintedCell(value=None)] * len(columns)
    cells[3] = PaintedCell(value="P", fill="C6EFCE", bold=True)

    commands = _body_style(columns, [cells], first_row=1)

    backgrounds = [c for c in commands if c[0] == "BACKGROUND"]
    assert len(backgrounds) == 1
    assert backgrounds[0][1:3] == ((3, 1), (3, 1))
    assert backgrounds[0][3].hexval().lower() == "0xc6efce"
    assert ("FONTNAME", (3, 1), (3, 1), "Helvetica-Bold") in commands


def test_shift_header_spans_day_pairs_and_fixed_columns():
    columns = build_columns(29, TableType.SHIFTS)

    (top, bottom), spans = _header_rows(columns, TableType.SHIFTS)

    assert top[:5] == ["SL.NO", "NAME", "DESIGNATION", "1", ""]
    assert bottom[:5] == ["", "", "", "D", "N"]
    assert ("SPAN", (3, 0), (4, 0)) in spans
    assert ("SPAN", (0, 0), (0, 1)) in spans
