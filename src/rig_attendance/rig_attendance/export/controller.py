from __future__ import annotations

from io import BytesIO

from flask import Flask, send_file

from ..common.http import json_body
from ..common.validators import require_bool
from ..container import Container
from ..core.enums import ExportFormat
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _export(output_format: ExportFormat):
        data = json_body()
        workspace_id = str(data.get("workspace_id") or "").strip()
        if not workspace_id:
            raise ValidationError("workspace_id is required")
        container.workspace_service.require(workspace_id)

        employee_ids = data.get("employee_ids")
        if employee_ids == "all":
            employee_ids = None
        elif employee_ids is not None and not isinstance(employee_ids, list):
            raise ValidationError("employee_ids must be a list or 'all'")

        result = container.export_service.export_table(
            workspace_id=workspace_id,
            month=data.get("month"),
            year=data.get("year"),
            employee_ids=employee_ids,
            table_type=data.get("table_type") or "attendance",
            with_colors=require_bool(data.get("with_colors", True), "with_colors"),
            output_format=output_format,
        )
        return send_file(
            BytesIO(result.content),
            download_name=result.filename,
            as_attachment=True,
            mimetype=result.mimetype,
        )

    @app.route("/api/export/xlsx", methods=["POST"], endpoint="export_xlsx")
    def export_xlsx():
        return _export(ExportFormat.XLSX)

    @app.route("/api/export/pdf", methods=["POST"], endpoint="export_pdf")
    def export_pdf():
        return _export(ExportFormat.PDF)
