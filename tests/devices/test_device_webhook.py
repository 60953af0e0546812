from dataclasses import replace
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.biometric_attendance.biometric_attendance.main import create_app

LAGOS = ZoneInfo("Africa/Lagos")
CHECK_IN_AT = datetime(2025, 3, 3, 8, 25, tzinfo=LAGOS)


@pytest.fixture
def client(world, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=world.container)
    return app.test_client()


def test_check_in_is_stored(client, make_payload, world):
    resp = client.post("/api/device/record", json=make_payload("r-1", CHECK_IN_AT))

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "success"
    assert body["attendanceId"] == 1
    assert body["type"] == "check-in"
    assert body["attendanceStatus"] == "late"
    assert body["duplicate"] is False
    assert len(world.attendance.records) == 1


def test_form_encoded_payload_and_legacy_route(client, make_payload):
    resp = client.post("/api/xo5/record", data=make_payload("r-1", CHECK_IN_AT))

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "success"


def test_query_string_payload(client, make_payload):
    resp = client.get("/api/device/record", query_string=make_payload("r-1", CHECK_IN_AT))

    assert resp.get_json()["status"] == "success"


def test_filtered_event_is_acknowledged(client, make_payload, world):
    resp = client.post("/api/device/record", json=make_payload("r-1", CHECK_IN_AT, resultFlag="0"))

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "received"
    assert "Failed access" in body["reason"]
    assert world.attendance.records == {}


def test_redelivery_is_acknowledged_then_resolved_by_store(client, make_payload, world):
    payload = make_payload("r-1", CHECK_IN_AT)
    first = client.post("/api/device/record", json=payload).get_json()

    second = client.post("/api/device/record", json=payload).get_json()
    assert second["status"] == "received"
    assert "already handled" in second["reason"]

    world.container.event_validator.window.reset()
    third = client.post("/api/device/record", json=payload).get_json()
    assert third["status"] == "success"
    assert third["duplicate"] is True
    assert third["attendanceId"] == first["attendanceId"]
    assert len(world.attendance.records) == 1


@pytest.mark.parametrize("person_sn, message", [("9999", "Employee not found"), ("3003", "No shift assigned")])
def test_unattributable_events_are_acknowledged(client, make_payload, world, person_sn, message):
    resp = client.post("/api/device/record", json=make_payload("r-1", CHECK_IN_AT, person_sn=person_sn))

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "received"
    assert body["message"] == message
    assert body["reason"]
    assert world.attendance.records == {}


def test_unknown_facility_timezone_is_acknowledged(client, make_payload, world):
    world.facilities.facilities[1] = replace(world.facilities.facilities[1], timezone="Mars/Olympus")
    payload = make_payload("r-1", CHECK_IN_AT)

    resp = client.post("/api/device/record", json=payload)

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "received"
    assert body["message"] == "Facility misconfigured"
    assert "Mars/Olympus" in body["reason"]
    assert world.attendance.records == {}

    retry = client.post("/api/device/record", json=payload).get_json()
    assert retry["status"] == "received"
    assert "already handled" in retry["reason"]


def test_storage_failure_is_reported(client, make_payload, world):
    world.attendance.fail_with = RuntimeError("deadlock")
    payload = make_payload("r-1", CHECK_IN_AT)

    resp = client.post("/api/device/record", json=payload)

    assert resp.status_code == 500
    assert resp.get_json()["status"] == "error"

    # Not remembered, so the device retry goes through once storage is back.
    world.attendance.fail_with = None
    retry = client.post("/api/device/record", json=payload)
    assert retry.get_json()["status"] == "success"


def test_unexpected_error_is_reported(client, make_payload, world, monkeypatch):
    def _boom(event):
        raise KeyError("bad")

    monkeypatch.setattr(world.container.attendance_service, "process_event", _boom)

    resp = client.post("/api/device/record", json=make_payload("r-1", CHECK_IN_AT))

    assert resp.status_code == 500
    assert resp.get_json()["status"] == "error"
