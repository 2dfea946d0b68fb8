from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_COMPANY_NAME, DEFAULT_RIG_NAME


@dataclass(frozen=True)
class AppSettings:
    """Singleton settings used as export header text."""

    company_name: str = DEFAULT_COMPANY_NAME
    rig_name: str = DEFAULT_RIG_NAME
