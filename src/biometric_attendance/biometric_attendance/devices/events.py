from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Tuple

from ..common.datetime_utils import from_epoch_millis
from ..common.validators import is_flag_set, text_value
from ..core.enums import AttendanceType, Direction

# Webhook flag field -> verification method name.
VERIFICATION_FLAGS = (
    ("faceFlag", "face"),
    ("fingerFlag", "fingerprint"),
    ("cardFlag", "card"),
    ("pwdFlag", "manual"),
)


def verification_methods(payload: Mapping[str, Any]) -> Tuple[str, ...]:
    return tuple(method for flag, method in VERIFICATION_FLAGS if is_flag_set(payload, flag))


@dataclass(frozen=True)
class DeviceEvent:
    """An accepted scan reported by a biometric device."""

    record_id: str
    device_key: str
    record_time: str
    record_time_str: str
    timestamp: datetime
    person_sn: str
    direction: Direction
    verification_methods: Tuple[str, ...]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DeviceEvent":
        """Build from an already validated webhook payload."""
        return cls(
            record_id=text_value(payload, "recordId"),
            device_key=text_value(payload, "deviceKey"),
            record_time=text_value(payload, "recordTime"),
            record_time_str=text_value(payload, "recordTimeStr"),
            timestamp=from_epoch_millis(text_value(payload, "recordTime")),
            person_sn=text_value(payload, "personSn"),
            direction=Direction(text_value(payload, "direction")),
            verification_methods=verification_methods(payload),
            raw={str(k): v for k, v in payload.items()},
        )

    @property
    def dedup_key(self) -> Tuple[str, str, str]:
        return (self.device_key, self.record_id, self.record_time)

    @property
    def logical_type(self) -> AttendanceType:
        return self.direction.logical_type

    def describe(self) -> str:
        methods = ", ".join(self.verification_methods) or "none"
        return (
            f"record {self.record_id} from {self.device_key}: person {self.person_sn}, "
            f"{self.direction.label}, via {methods}, at {self.timestamp.isoformat()}"
        )
