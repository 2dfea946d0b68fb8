from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .model import AppSettings


def settings_to_json(settings: AppSettings) -> dict:
    return {"company_name": settings.company_name, "rig_name": settings.rig_name}


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    def get_settings():
        return jsonify(settings_to_json(service.get()))

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    def update_settings():
        data = json_body()
        current = service.get()
        settings = service.update(
            company_name=data.get("company_name", current.company_name),
            rig_name=data.get("rig_name", current.rig_name),
        )
        return jsonify(settings_to_json(settings))
