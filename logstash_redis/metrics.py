"""Thread-safe counters for a formatting run."""

import threading


class Metrics:
    """Counts events formatted, skipped as invalid, and failed to serialize."""

    def __init__(self):
        self._lock = threading.Lock()
        self._formatted = 0
        self._json_payloads = 0
        self._invalid = 0
        self._failed = 0

    def record_formatted(self, json_payload: bool = False):
        """Record a written document; *json_payload* if payload fields were merged into it."""
        with self._lock:
            self._formatted += 1
            if json_payload:
                self._json_payloads += 1

    def record_invalid(self):
        """Record an input line that could not be read as an event."""
        with self._lock:
            self._invalid += 1

    def record_failed(self):
        """Record an event whose document failed to serialize."""
        with self._lock:
            self._failed += 1

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "formatted": self._formatted,
                "json_payloads": self._json_payloads,
                "invalid": self._invalid,
                "failed": self._failed,
                "total": self._formatted + self._invalid + self._failed,
            }
