from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.biometric_attendance.biometric_attendance.core.enums import AttendanceType, Direction
from src.biometric_attendance.biometric_attendance.core.exceptions import DuplicateEvent, MalformedEvent
from src.biometric_attendance.biometric_attendance.devices.validator import EventValidator
from src.biometric_attendance.biometric_attendance.devices.window import RecentEventWindow

LAGOS = ZoneInfo("Africa/Lagos")
SCAN_AT = datetime(2025, 3, 3, 8, 5, tzinfo=LAGOS)


@pytest.mark.parametrize(
    "direction, expected",
    [
        ("1", AttendanceType.CHECK_IN),
        ("3", AttendanceType.CHECK_IN),
        ("2", AttendanceType.CHECK_OUT),
        ("4", AttendanceType.CHECK_OUT),
    ],
)
def test_direction_codes_map_to_logical_types(make_payload, direction, expected):
    event = EventValidator().validate(make_payload("r-1", SCAN_AT, direction=direction))

    assert event.direction == Direction(direction)
    assert event.logical_type == expected


def test_accepted_event_is_decoded(make_payload):
    payload = make_payload("r-1", SCAN_AT, fingerFlag="1", cardFlag="1")

    event = EventValidator().validate(payload)

    assert event.record_id == "r-1"
    assert event.device_key == "XO5-LGH-01"
    assert event.person_sn == "1001"
    assert event.timestamp == SCAN_AT
    assert event.verification_methods == ("face", "fingerprint", "card")
    assert event.raw["recordId"] == "r-1"
    assert "CHECK-IN" in event.describe()


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"resultFlag": "0"}, "Failed access (0)"),
        ({"personType": "2"}, "Not registered user (2)"),
        ({"direction": "5"}, "Invalid direction (5)"),
        ({"faceFlag": "0"}, "No verification method"),
        ({"recordId": ""}, "No recordId"),
        ({"deviceKey": None}, "No deviceKey"),
        ({"recordTimeStr": " "}, "No recordTimeStr"),
        ({"personSn": ""}, "No person ID"),
        ({"recordTime": "yesterday"}, "Invalid recordTime (yesterday)"),
    ],
)
def test_rejected_events_carry_reason(make_payload, overrides, reason):
    payload = make_payload("r-1", SCAN_AT, **overrides)

    with pytest.raises(MalformedEvent) as exc:
        EventValidator().validate(payload)

    assert exc.value.reasons == [reason]
    assert str(exc.value) == reason


def test_every_failed_check_is_reported(make_payload):
    payload = make_payload("r-1", SCAN_AT, resultFlag="0", personType="0", direction="9")

    with pytest.raises(MalformedEvent) as exc:
        EventValidator().validate(payload)

    assert len(exc.value.reasons) == 3


def test_manual_verification_alone_is_accepted(make_payload):
    payload = make_payload("r-1", SCAN_AT, faceFlag="0", pwdFlag="1")

    assert EventValidator().validate(payload).verification_methods == ("manual",)


def test_remembered_event_is_rejected_until_window_reset(make_payload):
    validator = EventValidator(RecentEventWindow(10))
    payload = make_payload("r-1", SCAN_AT)

    validator.remember(validator.validate(payload))
    with pytest.raises(DuplicateEvent):
        validator.validate(payload)

    validator.window.reset()
    assert validator.validate(payload).record_id == "r-1"


def test_validation_alone_does_not_remember(make_payload):
    validator = EventValidator()
    payload = make_payload("r-1", SCAN_AT)

    validator.validate(payload)

    assert validator.validate(payload).record_id == "r-1"


def test_same_record_id_from_another_device_is_not_a_duplicate(make_payload):
    validator = EventValidator()
    validator.remember(validator.validate(make_payload("r-1", SCAN_AT)))

    event = validator.validate(make_payload("r-1", SCAN_AT, deviceKey="XO5-LGH-02"))

    assert event.device_key == "XO5-LGH-02"
