from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request

from ..core.exceptions import (
    DuplicateEvent,
    MalformedEvent,
    NoEmployeeMatch,
    NoShiftAssigned,
    PersistenceFailure,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)


def _read_payload() -> Dict[str, Any]:
    """Devices post JSON, form data or a bare query string depending on firmware."""
    data = request.get_json(silent=True)
    if isinstance(data, dict) and data:
        return data
    if request.form:
        return request.form.to_dict()
    return request.args.to_dict()


def register(app: Flask, container: Container) -> None:
    validator = container.event_validator
    attendance = container.attendance_service

    def _received(message: str, reason: str):
        return jsonify({"status": "received", "message": message, "reason": reason}), 200

    @app.route("/api/device/record", methods=["GET", "POST"], endpoint="device_record")
    @app.route("/api/xo5/record", methods=["GET", "POST"], endpoint="device_record_legacy")
    def device_record():
        payload = _read_payload()

        try:
            event = validator.validate(payload)
        except MalformedEvent as e:
            logger.debug("Filtered device event %s: %s", payload.get("recordId"), e)
            return _received("Event filtered", str(e))
        except DuplicateEvent as e:
            logger.debug("%s", e)
            return _received("Duplicate event", str(e))

        logger.info("Device event %s", event.describe())

        try:
            result = attendance.process_event(event)
        except NoEmployeeMatch as e:
            logger.warning("Device event %s dropped: %s", event.record_id, e)
            validator.remember(event)
            return _received("Employee not found", str(e))
        except NoShiftAssigned as e:
            logger.warning("Device event %s dropped: %s", event.record_id, e)
            validator.remember(event)
            return _received("No shift assigned", str(e))
        except ValidationError as e:
            logger.warning("Device event %s dropped, facility misconfigured: %s", event.record_id, e)
            validator.remember(event)
            return _received("Facility misconfigured", str(e))
        except PersistenceFailure:
            logger.exception("Could not store device event %s", event.record_id)
            return jsonify({"status": "error", "message": "Attendance could not be stored"}), 500
        except Exception:
            logger.exception("Unexpected error while processing device event %s", event.record_id)
            return jsonify({"status": "error", "message": "Internal error"}), 500

        validator.remember(event)
        return jsonify(
            {
                "status": "success",
                "message": result.message,
                "attendanceId": result.record.attendance_id,
                "type": result.record.type.value,
                "attendanceStatus": result.record.status.value,
                "duplicate": result.duplicate,
            }
        ), 200
