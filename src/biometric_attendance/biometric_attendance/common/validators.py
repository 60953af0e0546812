from __future__ import annotations

from typing import Any, Mapping


def has_text(payload: Mapping[str, Any], field_name: str) -> bool:
    value = payload.get(field_name)
    return value is not None and bool(str(value).strip())


def text_value(payload: Mapping[str, Any], field_name: str) -> str:
    value = payload.get(field_name)
    return "" if value is None else str(value).strip()


def is_flag_set(payload: Mapping[str, Any], field_name: str) -> bool:
    """Device flags are the string "1" when set."""
    return text_value(payload, field_name) == "1"
