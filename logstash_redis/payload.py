"""Detect and unpack log lines whose payload is itself a JSON object."""

import json
from typing import Any, Union

# Values found in a decoded payload: str, int, float, bool, None, list, dict
JsonValue = Union[str, int, float, bool, None, list, dict]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_payload(raw: str) -> dict[str, JsonValue] | None:
    """Decode *raw* as strict JSON. Returns the object, or None if it isn't one."""
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError):
        return None

    if not isinstance(data, dict):
        return None
    return data


def is_json_object(raw: str) -> bool:
    return parse_payload(raw) is not None


def string_field(payload: dict[str, JsonValue], key: str) -> str | None:
    """Return payload[key] when it is a string, otherwise None."""
    value = payload.get(key)
    if isinstance(value, str):
        return value
    return None
