"""Progression tracking for defeated opponents and consumed map locations.

Both flags are monotonic: once set they are never cleared, so re-entering
a location or re-challenging a defeated opponent is a no-op. The tracker is
queried by the presentation layer between encounter steps, so reads and
writes are guarded by a lock.
"""

from __future__ import annotations

import threading

from quizclash.core.logging import get_logger


logger = get_logger(__name__)


class ProgressionTracker:
    """Records which opponents are defeated and which locations have fired.

    Example:
        >>> tracker = ProgressionTracker()
        >>> tracker.mark_defeated("johanna")
        True
        >>> tracker.mark_defeated("johanna")
        False
        >>> tracker.is_defeated("johanna")
        True
    """

    def __init__(self) -> None:
        self._defeated: set[str] = set()
        self._consumed: set[str] = set()
        self._lock = threading.Lock()

    def is_defeated(self, opponent_id: str) -> bool:
        with self._lock:
            return opponent_id in self._defeated

    def mark_defeated(self, opponent_id: str) -> bool:
        """Set the defeated flag for an opponent.

        Returns:
            True if the flag changed, False if it was already set.
        """
        with self._lock:
            if opponent_id in self._defeated:
                return False
            self._defeated.add(opponent_id)
        logger.info("Opponent marked defeated", opponent_id=opponent_id)
        return True

    def is_consumed(self, location_id: str) -> bool:
        with self._lock:
            return location_id in self._consumed

    def mark_consumed(self, location_id: str) -> bool:
        """Set the consumed flag for a map location.

        Returns:
            True if the flag changed, False if it was already set.
        """
        with self._lock:
            if location_id in self._consumed:
                return False
            self._consumed.add(location_id)
        logger.info("Location marked consumed", location_id=location_id)
        return True

    def defeated_opponents(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._defeated)

    def consumed_locations(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._consumed)


__all__ = ["ProgressionTracker"]
