"""Shared pytest fixtures for the formatter test suite."""

from datetime import datetime, timezone

import pytest

from logstash_redis.models import LogEvent


def _make_event(**overrides) -> LogEvent:
    fields = {
        "container_id": "6feffd9428dc",
        "container_name": "/my_app",
        "hostname": "container_hostname",
        "image": "my.registry.host:443/path/to/image:1234",
        "source": "stdout",
        "data": "hello world",
        "timestamp": datetime(2016, 1, 26, 14, 28, 16, 595000, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return LogEvent(**fields)


@pytest.fixture()
def make_event():
    """Return a factory for my_app container events, with field overrides."""
    return _make_event


@pytest.fixture()
def event() -> LogEvent:
    return _make_event()
