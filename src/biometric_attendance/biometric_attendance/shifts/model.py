from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.constants import DEFAULT_GRACE_MINUTES


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift.

    Times are wall-clock (no date, no timezone); they are applied to a
    calendar day in the facility timezone when an event is evaluated.
    """

    shift_id: int
    name: str
    code: str
    start_time: time
    end_time: time
    working_hours: float
    grace_minutes: int = DEFAULT_GRACE_MINUTES

    @property
    def expected_minutes(self) -> int:
        return int(round(self.working_hours * 60))
