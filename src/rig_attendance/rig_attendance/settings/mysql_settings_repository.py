from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AppSettings
from .repository import SettingsRepository

_SETTINGS_ID = "default"


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> AppSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT company_name, rig_name FROM app_settings WHERE settings_id=%s",
                (_SETTINGS_ID,),
            )
            r = fetchone(cur)
            if not r:
                return AppSettings()
            return AppSettings(company_name=r["company_name"], rig_name=r["rig_name"])

    def save(self, settings: AppSettings) -> AppSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_settings(settings_id, company_name, rig_name)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE company_name=VALUES(company_name), rig_name=VALUES(rig_name)
                """,
                (_SETTINGS_ID, settings.company_name, settings.rig_name),
            )
        return settings
