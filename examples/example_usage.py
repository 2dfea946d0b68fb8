"""Example: drive the service layer directly (no Flask).

Records a few days for the first active employee of a workspace and writes the
month's shift grid as XLSX and PDF next to this script.
"""

import importlib
from pathlib import Path

from config import get_settings_module

from src.rig_attendance.rig_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    employees = container.employee_service.list_for_workspace("domestic")
    if not employees:
        employees = [container.employee_service.create(workspace_id="domestic", name="Demo Crew", designation="Rig Man")]

    employee = employees[0]
    container.attendance_service.record_attendance_range(
        employee_id=employee.id, month=2, year=2024, start_day=1, end_day=5, status="P", shift="D"
    )
    container.attendance_service.record_attendance_day(employee_id=employee.id, month=2, year=2024, day=6, status="OT")
    print(container.attendance_service.get_record(employee.id, 2, 2024))

    for output_format in ("xlsx", "pdf"):
        result = container.export_service.export_table(
            workspace_id="domestic", month=2, year=2024, table_type="shifts", output_format=output_format
        )
        out = Path(__file__).resolve().parent / result.filename
        out.write_bytes(result.content)
        print(f"Wrote {out}")


if __name__ == "__main__":
    main()
