from __future__ import annotations

from ..common.validators import require_non_empty
from .model import AppSettings
from .repository import SettingsRepository


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self) -> AppSettings:
        return self._settings.get()

    def update(self, *, company_name: str, rig_name: str) -> AppSettings:
        return self._settings.save(
            AppSettings(
                company_name=require_non_empty(company_name, "Company name"),
                rig_name=require_non_empty(rig_name, "Rig name"),
            )
        )
