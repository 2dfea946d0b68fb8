from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .model import Employee

_EDITABLE = ("name", "designation", "status")


def employee_to_json(employee: Employee) -> dict:
    return {
        "id": employee.id,
        "workspace_id": employee.workspace_id,
        "employee_id": employee.employee_id,
        "name": employee.name,
        "designation": employee.designation,
        "designation_order": employee.designation_order,
        "status": employee.status.value,
        "serial_number": employee.serial_number,
    }


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/workspaces/<workspace_id>/employees", methods=["GET"], endpoint="list_employees")
    def list_employees(workspace_id: str):
        container.workspace_service.require(workspace_id)
        return jsonify([employee_to_json(e) for e in service.list_for_workspace(workspace_id)])

    @app.route("/api/workspaces/<workspace_id>/employees", methods=["POST"], endpoint="create_employee")
    def create_employee(workspace_id: str):
        container.workspace_service.require(workspace_id)
        data = json_body()
        employee = service.create(
            workspace_id=workspace_id,
            name=data.get("name"),
            designation=data.get("designation"),
            status=data.get("status") or "Active",
        )
        return jsonify(employee_to_json(employee)), 201

    @app.route("/api/employees/<int:employee_pk>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_pk: int):
        data = json_body()
        changes = {k: data[k] for k in _EDITABLE if k in data}
        employee = service.update(employee_pk, **changes)
        return jsonify(employee_to_json(employee))

    @app.route("/api/employees/<int:employee_pk>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_pk: int):
        service.delete(employee_pk)
        return jsonify({"message": "Employee deleted successfully"})
