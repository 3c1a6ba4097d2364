"""Channel: a named, ordered list of bindings (in-memory only)."""

import threading
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from publisher.binding import Binding


class Channel:
    """Ordered bindings for one channel name; insertion order is delivery order."""

    def __init__(self, name: str, lock: Optional[threading.RLock] = None) -> None:
        self._name = name
        self._bindings: List["Binding"] = []
        self._messages_delivered: int = 0
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._bindings)

    @property
    def messages_delivered(self) -> int:
        return self._messages_delivered

    def append(self, binding: "Binding") -> None:
        """Add a binding at the tail. Duplicates are kept."""
        with self._lock:
            self._bindings.append(binding)

    def remove(self, binding: "Binding") -> bool:
        """Remove the first entry that is `binding`. Returns False if absent."""
        with self._lock:
            for index, entry in enumerate(self._bindings):
                if entry is binding:
                    del self._bindings[index]
                    return True
        return False

    def contains(self, binding: "Binding") -> bool:
        with self._lock:
            return any(entry is binding for entry in self._bindings)

    def snapshot(self) -> List["Binding"]:
        """Return a copy of the binding list taken under the lock."""
        with self._lock:
            return list(self._bindings)

    def mark_delivered(self) -> None:
        with self._lock:
            self._messages_delivered += 1

    def __len__(self) -> int:
        return self.subscriber_count

    def __repr__(self) -> str:
        return f"Channel(name={self._name!r}, subscribers={len(self._bindings)})"
