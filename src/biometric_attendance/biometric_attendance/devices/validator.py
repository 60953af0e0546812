from __future__ import annotations

import logging
from typing import Any, List, Mapping

from ..common.datetime_utils import from_epoch_millis
from ..common.validators import has_text, text_value
from ..core.enums import Direction
from ..core.exceptions import DuplicateEvent, MalformedEvent
from .events import DeviceEvent, verification_methods
from .window import RecentEventWindow

logger = logging.getLogger(__name__)

_DIRECTIONS = {d.value for d in Direction}


class EventValidator:
    """Accept only successful scans of registered people with a known direction.

    Owns the recent-event window; callers `remember` an event once it has been
    handled so a retry after a storage failure is not silently dropped here.
    """

    def __init__(self, window: RecentEventWindow | None = None):
        self._window = window or RecentEventWindow()

    @property
    def window(self) -> RecentEventWindow:
        return self._window

    def filter_reasons(self, payload: Mapping[str, Any]) -> List[str]:
        reasons: List[str] = []
        if not has_text(payload, "recordId"):
            reasons.append("No recordId")
        if not has_text(payload, "deviceKey"):
            reasons.append("No deviceKey")
        if not has_text(payload, "recordTimeStr"):
            reasons.append("No recordTimeStr")
        try:
            from_epoch_millis(text_value(payload, "recordTime"))
        except (ValueError, OverflowError, OSError):
            reasons.append(f"Invalid recordTime ({payload.get('recordTime')})")
        if text_value(payload, "resultFlag") != "1":
            reasons.append(f"Failed access ({payload.get('resultFlag')})")
        if text_value(payload, "personType") != "1":
            reasons.append(f"Not registered user ({payload.get('personType')})")
        if not has_text(payload, "personSn"):
            reasons.append("No person ID")
        if not verification_methods(payload):
            reasons.append("No verification method")
        if text_value(payload, "direction") not in _DIRECTIONS:
            reasons.append(f"Invalid direction ({payload.get('direction')})")
        return reasons

    def validate(self, payload: Mapping[str, Any]) -> DeviceEvent:
        reasons = self.filter_reasons(payload)
        if reasons:
            raise MalformedEvent(reasons)

        event = DeviceEvent.from_payload(payload)
        if event.dedup_key in self._window:
            raise DuplicateEvent(f"Record {event.record_id} from {event.device_key} already handled")
        return event

    def remember(self, event: DeviceEvent) -> None:
        self._window.remember(event.dedup_key)
