"""Background health regeneration for regenerating opponents.

A RegenerationProcess is owned by exactly one encounter. It runs a daemon
worker thread that sleeps on a cancellation event for one interval, then
restores health. The event is the single monotonic cancellation signal:
once set, the worker wakes immediately and exits.

Ordering guarantee: each tick takes the opponent's lock and re-checks both
the cancellation signal and ``health > 0`` before mutating. The combat
engine decides victory under the same lock, so a tick that lands between
the defeat decision and :meth:`RegenerationProcess.stop` finds the opponent
defeated and does nothing. ``stop`` sets the signal under the lock and joins
the worker, so no tick mutates health after it returns.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from types import TracebackType
from typing import TYPE_CHECKING

from quizclash.core.constants import REGEN_JOIN_TIMEOUT_SECONDS
from quizclash.core.exceptions import InvalidGameStateError, ValidationError
from quizclash.core.logging import get_logger


if TYPE_CHECKING:
    from quizclash.models.opponents import Opponent

logger = get_logger(__name__)


class RegenState(StrEnum):
    """Lifecycle of a regeneration process."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    STOPPED = "stopped"


@dataclass(frozen=True)
class RegenerationEvent:
    """Emitted after each regeneration tick.

    Attributes:
        opponent_id: The regenerating opponent.
        amount: Health actually restored by this tick (after clamping).
        health: Opponent health after the tick.
        tick: 1-based tick counter for this process.
    """

    opponent_id: str
    amount: int
    health: int
    tick: int


RegenerationListener = Callable[[RegenerationEvent], None]


class RegenerationProcess:
    """Cancellable periodic health regeneration tied to one encounter.

    Example:
        >>> with RegenerationProcess(boss) as regen:
        ...     regen.start()
        ...     # fight
        >>> regen.state
        <RegenState.STOPPED: 'stopped'>
    """

    def __init__(
        self,
        opponent: "Opponent",
        *,
        interval_seconds: float | None = None,
        listeners: list[RegenerationListener] | None = None,
    ) -> None:
        """Initialize the process without starting it.

        Args:
            opponent: A regenerating opponent.
            interval_seconds: Override for the opponent's tick interval.
            listeners: Callbacks invoked after each tick.

        Raises:
            ValidationError: If the opponent has no regeneration capability.
        """
        if opponent.regeneration is None:
            raise ValidationError(
                "Opponent cannot regenerate",
                field_name="opponent",
                invalid_value=opponent.id,
            )
        self._opponent = opponent
        self._amount = opponent.regeneration.amount
        self._interval = interval_seconds or opponent.regeneration.interval_seconds
        self._listeners: list[RegenerationListener] = list(listeners or [])
        self._cancel = threading.Event()
        self._state = RegenState.INACTIVE
        self._state_lock = threading.Lock()
        self._worker: threading.Thread | None = None
        self._ticks = 0

    @property
    def state(self) -> RegenState:
        return self._state

    @property
    def ticks(self) -> int:
        """Number of ticks run so far."""
        return self._ticks

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def add_listener(self, listener: RegenerationListener) -> None:
        self._listeners.append(listener)

    def start(self) -> None:
        """Launch the worker. Idempotent while active.

        Raises:
            InvalidGameStateError: If the process has already been stopped.
        """
        with self._state_lock:
            if self._state == RegenState.ACTIVE:
                return
            if self._state == RegenState.STOPPED:
                raise InvalidGameStateError(
                    "Regeneration cannot restart after it was stopped",
                    current_state=self._state.value,
                    expected_states=[RegenState.INACTIVE.value],
                )
            self._state = RegenState.ACTIVE
            self._opponent.regenerating = True
            self._worker = threading.Thread(
                target=self._run,
                name=f"regen-{self._opponent.id}",
                daemon=True,
            )
            self._worker.start()

        logger.info(
            "Regeneration started",
            opponent_id=self._opponent.id,
            amount=self._amount,
            interval_seconds=self._interval,
        )

    def stop(self) -> None:
        """Cancel the worker and wait for it to exit.

        Safe to call in any state and more than once.
        """
        with self._state_lock:
            if self._state == RegenState.STOPPED:
                return
            with self._opponent.locked():
                self._cancel.set()
                self._state = RegenState.STOPPED
                self._opponent.regenerating = False
            worker = self._worker

        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout=REGEN_JOIN_TIMEOUT_SECONDS)
            if worker.is_alive():
                logger.warning("Regeneration worker did not exit", opponent_id=self._opponent.id)

        logger.info("Regeneration stopped", opponent_id=self._opponent.id, ticks=self._ticks)

    def _run(self) -> None:
        # Event.wait returns True as soon as stop() sets the signal
        while not self._cancel.wait(self._interval):
            event = self._tick()
            if event is None:
                break
            self._emit(event)

    def _tick(self) -> RegenerationEvent | None:
        with self._opponent.locked():
            if self._cancel.is_set() or self._opponent.is_defeated:
                return None
            restored = self._opponent.restore(self._amount)
            self._ticks += 1
            event = RegenerationEvent(
                opponent_id=self._opponent.id,
                amount=restored,
                health=self._opponent.health,
                tick=self._ticks,
            )
        logger.info(
            "Opponent regenerated",
            opponent_id=event.opponent_id,
            amount=event.amount,
            health=event.health,
        )
        return event

    def _emit(self, event: RegenerationEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Regeneration listener failed", opponent_id=event.opponent_id)

    def __enter__(self) -> "RegenerationProcess":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


__all__ = [
    "RegenState",
    "RegenerationEvent",
    "RegenerationListener",
    "RegenerationProcess",
]
