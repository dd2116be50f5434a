"""Container log event model."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_NANOS_PER_SECOND = 1_000_000_000

# 2016-01-26T14:28:16.595123456Z or ...+01:00
_RFC3339_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|z|[+-]\d{2}:?\d{2})?$"
)


class EventError(ValueError):
    """Raised when an incoming event is missing fields or has the wrong shape."""


@dataclass(frozen=True)
class LogEvent:
    container_id: str
    container_name: str
    hostname: str
    image: str
    source: str
    data: str
    timestamp: datetime

    @classmethod
    def from_dict(cls, d: dict) -> "LogEvent":
        """Build an event from either the nested docker shape or a flat dict."""
        if not isinstance(d, dict):
            raise EventError(f"event must be a JSON object, got {type(d).__name__}")

        if "container" in d:
            container = _require_dict(d, "container")
            container_config = _require_dict(container, "config")
            return cls(
                container_id=_require_str(container, "id"),
                container_name=_require_str(container, "name"),
                hostname=_require_str(container_config, "hostname"),
                image=_require_str(container_config, "image"),
                source=_require_str(d, "source"),
                data=_require_str(d, "data"),
                timestamp=parse_time(_require(d, "time")),
            )

        return cls(
            container_id=_require_str(d, "container_id"),
            container_name=_require_str(d, "container_name"),
            hostname=_require_str(d, "hostname"),
            image=_require_str(d, "image"),
            source=_require_str(d, "source"),
            data=_require_str(d, "data"),
            timestamp=parse_time(_require(d, "timestamp")),
        )


def parse_time(value) -> datetime:
    """Parse an RFC 3339 string or integer epoch nanoseconds into an aware UTC datetime.

    Fractional digits beyond microseconds are truncated.
    """
    if isinstance(value, bool):
        raise EventError(f"invalid timestamp: {value!r}")

    if isinstance(value, int):
        seconds, nanos = divmod(value, _NANOS_PER_SECOND)
        return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(
            microseconds=nanos // 1000
        )

    if not isinstance(value, str):
        raise EventError(f"invalid timestamp: {value!r}")

    match = _RFC3339_RE.match(value.strip())
    if match is None:
        raise EventError(f"invalid timestamp: {value!r}")

    text = match.group("base").replace(" ", "T")
    frac = match.group("frac")
    if frac:
        text += "." + frac[:6].ljust(6, "0")
    tz = match.group("tz")
    if tz is None or tz in ("Z", "z"):
        text += "+00:00"
    elif ":" not in tz:
        text += f"{tz[:3]}:{tz[3:]}"
    else:
        text += tz

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise EventError(f"invalid timestamp: {value!r}") from e
    return parsed.astimezone(timezone.utc)


def _require(d: dict, key: str):
    if key not in d:
        raise EventError(f"missing field: {key}")
    return d[key]


def _require_str(d: dict, key: str) -> str:
    value = _require(d, key)
    if not isinstance(value, str):
        raise EventError(f"field {key} must be a string")
    return value


def _require_dict(d: dict, key: str) -> dict:
    value = _require(d, key)
    if not isinstance(value, dict):
        raise EventError(f"field {key} must be an object")
    return value
