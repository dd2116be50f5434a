"""Generator-based reading of NDJSON event files and streams."""

import json
import sys
from typing import BinaryIO, Generator, TextIO

from logstash_redis.models import EventError, LogEvent

STDIN_PATH = "-"


def read_stream(
    stream: BinaryIO | TextIO, name: str = "<stdin>"
) -> Generator[tuple[bytes | str, str], None, None]:
    """Yield (line, name) for each line of an open stream.

    Lines are yielded undecoded so one bad byte only spoils its own line.
    """
    for line in stream:
        yield line, name


def read_lines(filepath: str) -> Generator[tuple[bytes | str, str], None, None]:
    """Yield (line, filepath) for each line in a single file, or stdin for '-'."""
    if filepath == STDIN_PATH:
        yield from read_stream(getattr(sys.stdin, "buffer", sys.stdin))
        return
    with open(filepath, "rb") as f:
        yield from read_stream(f, filepath)


def read_multiple(paths: list[str]) -> Generator[tuple[bytes | str, str], None, None]:
    """Yield (line, filepath) from multiple files, sequentially."""
    for path in paths:
        yield from read_lines(path)


def parse_event_line(line: bytes | str) -> LogEvent | None:
    """Decode one NDJSON line into a LogEvent.

    Returns None for blank lines. Raises EventError for anything else that
    is not a valid event, including bytes that are not UTF-8.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EventError(f"event is not valid UTF-8: {e}") from e
    stripped = line.strip()
    if not stripped:
        return None
    try:
        data = json.loads(stripped)
    except (json.JSONDecodeError, RecursionError) as e:
        raise EventError(f"event is not valid JSON: {e}") from e
    return LogEvent.from_dict(data)
