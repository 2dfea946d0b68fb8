from __future__ import annotations

from typing import Protocol

from .model import AppSettings


class SettingsRepository(Protocol):
    def get(self) -> AppSettings:
        raise NotImplementedError

    def save(self, settings: AppSettings) -> AppSettings:
        raise NotImplementedError
