from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from ..attendance.model import AttendanceRecord, ShiftAttendanceRecord
from ..attendance.repository import AttendanceRepository, ShiftAttendanceRepository
from ..common.datetime_utils import days_in_month, is_future_month, month_name, now_local
from ..common.validators import require_int, require_month_year
from ..core.constants import DEFAULT_EXPORT_TIMEOUT_SECONDS
from ..core.enums import ExportFormat, TableType
from ..core.exceptions import ExportTimeoutError, NotFoundError, ValidationError
from ..employees.designation import sort_employees
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..settings.model import AppSettings
from ..settings.repository import SettingsRepository
from .layout import build_columns
from .painters.attendance_painter import AttendancePainter
from .painters.base import ExportRow, RowPainter
from .painters.shift_painter import ShiftPainter
from .pdf_document import render_pdf
from .workbook import render_workbook

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"

MIMETYPES = {
    ExportFormat.XLSX: XLSX_MIMETYPE,
    ExportFormat.PDF: PDF_MIMETYPE,
}

ATTENDANCE_LABEL = "Attendance"

PAINTERS: Dict[TableType, RowPainter] = {
    TableType.ATTENDANCE: AttendancePainter(),
    TableType.SHIFTS: ShiftPainter(),
}


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    filename: str
    mimetype: str = XLSX_MIMETYPE


def parse_table_type(value: Any) -> TableType:
    if isinstance(value, TableType):
        return value
    try:
        return TableType(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in TableType)
        raise ValidationError(f"Table type must be one of: {allowed}")


def parse_export_format(value: Any) -> ExportFormat:
    if isinstance(value, ExportFormat):
        return value
    try:
        return ExportFormat(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(f.value for f in ExportFormat)
        raise ValidationError(f"Export format must be one of: {allowed}")


def build_filename(
    table_type: TableType,
    month: int,
    year: int,
    generated_at: datetime,
    output_format: ExportFormat = ExportFormat.XLSX,
) -> str:
    stamp = generated_at.strftime("%Y%m%d%H%M%S")
    return f"{table_type.value}_{month_name(month)}_{year}_{stamp}.{output_format.value}"


def title_lines(settings: AppSettings, month: int, year: int) -> List[str]:
    return [
        settings.company_name,
        ATTENDANCE_LABEL,
        f"{settings.rig_name} - {month_name(month)} {year}",
    ]


class ExportService:
    """Builds the monthly XLSX or PDF document for one workspace.

    Rows are Active employees only, in designation-then-name order, serial numbers
    1..n per document. Every summary is derived from the day maps at render time.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        shifts: ShiftAttendanceRepository,
        settings: SettingsRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        timeout_seconds: float = DEFAULT_EXPORT_TIMEOUT_SECONDS,
        renderer: Callable[..., bytes] = render_workbook,
        pdf_renderer: Callable[..., bytes] = render_pdf,
    ):
        self._employees = employees
        self._attendance = attendance
        self._shifts = shifts
        self._settings = settings
        self._clock = clock
        self._timeout = float(timeout_seconds)
        self._renderers: Dict[ExportFormat, Callable[..., bytes]] = {
            ExportFormat.XLSX: renderer,
            ExportFormat.PDF: pdf_renderer,
        }

    def export_table(
        self,
        *,
        workspace_id: str,
        month: Any,
        year: Any,
        employee_ids: Optional[Iterable[Any]] = None,
        table_type: Any = TableType.ATTENDANCE,
        with_colors: bool = True,
        output_format: Any = ExportFormat.XLSX,
    ) -> ExportResult:
        month, year = require_month_year(month, year)
        table_type = parse_table_type(table_type)
        output_format = parse_export_format(output_format)
        now = self._clock()
        if is_future_month(month, year, now=now):
            raise ValidationError("Cannot export attendance for a future month")

        employees = self._select_employees(workspace_id, employee_ids)
        if not employees:
            raise NotFoundError("No active employees to export")

        attendance = {r.employee_id: r for r in self._attendance.list_for_workspace_month(workspace_id, month, year)}
        shifts: Dict[int, ShiftAttendanceRecord] = {}
        if table_type == TableType.SHIFTS:
            shifts = {r.employee_id: r for r in self._shifts.list_for_workspace_month(workspace_id, month, year)}

        rows = [
            ExportRow(
                serial=serial,
                employee=employee,
                attendance=attendance.get(employee.id) or AttendanceRecord.empty(employee.id, month, year),
                shifts=shifts.get(employee.id) or ShiftAttendanceRecord.empty(employee.id, month, year),
            )
            for serial, employee in enumerate(employees, start=1)
        ]

        content = self._render_with_timeout(
            rows,
            table_type=table_type,
            month=month,
            year=year,
            with_colors=bool(with_colors),
            output_format=output_format,
        )
        filename = build_filename(table_type, month, year, now, output_format)
        logger.info(
            "Exported %s as %s for workspace=%s %s/%s (%d employees, %d bytes)",
            table_type.value,
            output_format.value,
            workspace_id,
            month,
            year,
            len(rows),
            len(content),
        )
        return ExportResult(content=content, filename=filename, mimetype=MIMETYPES[output_format])

    def _select_employees(self, workspace_id: str, employee_ids: Optional[Iterable[Any]]) -> List[Employee]:
        active = [e for e in self._employees.list_active(workspace_id) if e.is_active]
        if employee_ids is not None:
            wanted = {require_int(pk, "Employee") for pk in employee_ids}
            active = [e for e in active if e.id in wanted]
        return sort_employees(active)

    def _render(
        self,
        rows: Sequence[ExportRow],
        *,
        table_type: TableType,
        month: int,
        year: int,
        with_colors: bool,
        output_format: ExportFormat,
    ) -> bytes:
        columns = build_columns(days_in_month(month, year), table_type)
        painter = PAINTERS[table_type]
        painted = [painter.paint(columns, row, with_colors=with_colors) for row in rows]
        return self._renderers[output_format](
            columns=columns,
            rows=painted,
            titles=title_lines(self._settings.get(), month, year),
            table_type=table_type,
        )

    def _render_with_timeout(self, rows: Sequence[ExportRow], **kwargs: Any) -> bytes:
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="export")
        future = executor.submit(self._render, rows, **kwargs)
        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.error("Export timed out after %.1fs", self._timeout)
            raise ExportTimeoutError(f"Export did not finish within {self._timeout:g} seconds")
        finally:
            executor.shutdown(wait=False)
