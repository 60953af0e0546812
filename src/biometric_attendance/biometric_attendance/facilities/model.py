from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Facility:
    """Domain entity: a site with its own biometric devices and timezone."""

    facility_id: int
    name: str
    code: str
    timezone: Optional[str] = None
