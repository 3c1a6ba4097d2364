"""Delivery counters for a channel registry."""

import threading
from typing import Dict


class Metrics:
    """Thread-safe counters (published, delivered, ...) and gauges (channels)."""

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._gauges: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, name: str, value: int = 1) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def set_gauge(self, name: str, value: int) -> None:
        with self._lock:
            self._gauges[name] = value

    def get_counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def get_gauge(self, name: str) -> int:
        return self._gauges.get(name, 0)

    def reset(self) -> None:
        """Zero every counter; gauges describe current state and are kept."""
        with self._lock:
            self._counters.clear()

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        """Return {"counters": {...}, "gauges": {...}} copied under the lock."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
            }
