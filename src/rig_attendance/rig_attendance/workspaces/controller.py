from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workspaces", methods=["GET"], endpoint="list_workspaces")
    def list_workspaces():
        return jsonify([{"id": w.workspace_id, "name": w.name} for w in container.workspace_service.list_all()])
