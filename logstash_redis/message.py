"""Build logstash documents from container log events."""

import json
import logging
from datetime import datetime, timezone
from typing import Iterable

from logstash_redis.image import split_image
from logstash_redis.models import LogEvent
from logstash_redis.payload import parse_payload, string_field

logger = logging.getLogger(__name__)

DEFAULT_LOGTYPES = ("applog", "accesslog")

NO_MESSAGE = "no message"

# Set from the event before payload fields are merged; never overridden.
PROTECTED_FIELDS = frozenset({"@timestamp", "@type", "host", "docker"})


class SerializationError(Exception):
    """Raised when a document cannot be encoded to JSON bytes."""


def format_timestamp(ts: datetime) -> str:
    """Format as UTC ISO 8601 with millisecond precision, e.g. 2016-01-26T14:28:16.595Z."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    else:
        ts = ts.astimezone(timezone.utc)
    return (
        f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"
        f"T{ts.hour:02d}:{ts.minute:02d}:{ts.second:02d}"
        f".{ts.microsecond // 1000:03d}Z"
    )


def serialize(document: dict) -> bytes:
    """Encode *document* as compact UTF-8 JSON."""
    try:
        return json.dumps(
            document, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot serialize document: {e}") from e


class MessageBuilder:
    """Turns LogEvents into logstash documents for one configured docker host.

    Immutable after construction, so one instance can be shared by any
    number of worker threads.
    """

    def __init__(
        self,
        docker_host: str,
        logstash_type: str = "",
        suppress_type: bool = False,
        logtypes: Iterable[str] = DEFAULT_LOGTYPES,
        use_v0_layout: bool = False,
    ):
        self._docker_host = docker_host
        self._logstash_type = logstash_type
        self._suppress_type = suppress_type
        self._logtypes = frozenset(logtypes)
        self._use_v0_layout = use_v0_layout

    @classmethod
    def from_config(cls, config) -> "MessageBuilder":
        return cls(
            docker_host=config.docker_host,
            logstash_type=config.logstash_type,
            suppress_type=config.suppress_type,
            logtypes=config.logtypes,
            use_v0_layout=config.use_v0_layout,
        )

    @property
    def logtypes(self) -> frozenset[str]:
        return self._logtypes

    def build(self, event: LogEvent) -> dict:
        """Return the document for *event* as a plain dict."""
        return self._build(event)[0]

    def encode(self, event: LogEvent) -> bytes:
        """Build and serialize. Raises SerializationError if encoding fails."""
        return self.encode_event(event)[0]

    def encode_event(self, event: LogEvent) -> tuple[bytes, bool]:
        """Like encode, also reporting whether JSON payload fields were merged in."""
        doc, merged = self._build(event)
        return serialize(doc), merged

    def _build(self, event: LogEvent) -> tuple[dict, bool]:
        if self._use_v0_layout:
            return self._build_v0(event), False
        return self._build_v1(event)

    def _docker_fields(self, event: LogEvent) -> dict:
        image, tag = split_image(event.image)
        return {
            "name": event.container_name.lstrip("/"),
            "cid": event.container_id,
            "image": image,
            "image_tag": tag,
            "source": event.source,
            "docker_host": self._docker_host,
        }

    def _build_v1(self, event: LogEvent) -> tuple[dict, bool]:
        doc = {}
        if not self._suppress_type:
            doc["@type"] = self._logstash_type
        doc["@timestamp"] = format_timestamp(event.timestamp)
        doc["host"] = event.hostname
        doc["message"] = event.data
        doc["docker"] = self._docker_fields(event)

        payload = parse_payload(event.data)
        if payload is None:
            return doc, False

        message = string_field(payload, "message")
        doc["message"] = message if message is not None else NO_MESSAGE

        for key, value in payload.items():
            if key in PROTECTED_FIELDS or key == "message":
                continue
            if key == "logtype" and (
                not isinstance(value, str) or value not in self._logtypes
            ):
                logger.debug("Dropping unrecognized logtype %r", value)
                continue
            doc[key] = value
        return doc, True

    def _build_v0(self, event: LogEvent) -> dict:
        doc = {}
        if not self._suppress_type:
            doc["@type"] = self._logstash_type
        doc["@timestamp"] = format_timestamp(event.timestamp)
        doc["@source_host"] = event.hostname
        doc["@message"] = event.data
        doc["@fields"] = {"docker": self._docker_fields(event)}
        return doc


def build_message(
    event: LogEvent,
    docker_host: str,
    suppress_type: bool,
    logstash_type: str,
    logtypes: Iterable[str] = DEFAULT_LOGTYPES,
) -> bytes:
    """One-shot V1 document for *event*, as UTF-8 JSON bytes."""
    builder = MessageBuilder(
        docker_host,
        logstash_type=logstash_type,
        suppress_type=suppress_type,
        logtypes=logtypes,
    )
    return builder.encode(event)
