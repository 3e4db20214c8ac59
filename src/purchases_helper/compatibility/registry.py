"""In-memory registry of backwards-compatibility rules."""

import threading
from typing import Iterator

from purchases_helper.compatibility.models import BackwardsCompatibilityEntitlement


class EntitlementRegistry:
    """
    Insertion-ordered rules, at most one per entitlement name.

    Every access goes through a lock so register/unregister/resolve can run
    from several threads. Readers scan a snapshot rather than holding the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[BackwardsCompatibilityEntitlement] = []

    def register(self, entry: BackwardsCompatibilityEntitlement) -> bool:
        """Append ``entry`` unless its name is already registered. First one wins."""
        with self._lock:
            if entry in self._entries:
                return False
            self._entries.append(entry)
            return True

    def unregister(self, entitlement: str) -> int:
        """Remove every rule named ``entitlement``; returns how many were removed."""
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e.entitlement != entitlement]
            return before - len(self._entries)

    def snapshot(self) -> tuple[BackwardsCompatibilityEntitlement, ...]:
        with self._lock:
            return tuple(self._entries)

    def get(self, entitlement: str) -> BackwardsCompatibilityEntitlement | None:
        for entry in self.snapshot():
            if entry.entitlement == entitlement:
                return entry
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, entitlement: object) -> bool:
        return any(e.entitlement == entitlement for e in self.snapshot())

    def __iter__(self) -> Iterator[BackwardsCompatibilityEntitlement]:
        return iter(self.snapshot())
