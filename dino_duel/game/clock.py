"""
Wall-clock sources, the pausable round timer, and cancellable deferred events.

All times are milliseconds. Round deadlines are absolute timestamps on
the game's clock so that a stalled frame never stretches a round.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import heapq
import itertools
import math
import time


class SystemClock:
    """Monotonic wall clock."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to. Used for headless runs and tests."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        self._now += ms


class RoundTimer:
    """
    Countdown to an absolute deadline.

    Pausing freezes the remaining time; resuming shifts the deadline forward
    by exactly the paused duration.
    """

    def __init__(self) -> None:
        self.deadline: float = 0.0
        self.limit_seconds: int = 0
        self._paused_at: Optional[float] = None

    def start(self, now: float, limit_seconds: int) -> None:
        self.limit_seconds = limit_seconds
        self.deadline = now + limit_seconds * 1000.0
        self._paused_at = None

    @property
    def paused(self) -> bool:
        return self._paused_at is not None

    def pause(self, now: float) -> None:
        if self._paused_at is None:
            self._paused_at = now

    def resume(self, now: float) -> float:
        """Resume counting. Returns the paused duration in ms."""
        if self._paused_at is None:
            return 0.0
        paused_for = now - self._paused_at
        self.deadline += paused_for
        self._paused_at = None
        return paused_for

    def remaining_ms(self, now: float) -> float:
        reference = self._paused_at if self._paused_at is not None else now
        return max(0.0, self.deadline - reference)

    def seconds_remaining(self, now: float) -> int:
        return math.ceil(self.remaining_ms(now) / 1000.0)

    def expired(self, now: float) -> bool:
        return self._paused_at is None and now >= self.deadline


@dataclass(order=True)
class ScheduledEvent:
    """A callback due at a point in time. Ordered by due time, then creation."""
    due: float
    seq: int
    name: str = field(compare=False)
    callback: Callable[[], None] = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)


class Scheduler:
    """
    Deferred-event queue driven by the tick loop.

    Events never fire on their own: run_due() fires whatever has come due,
    fire_now() runs one early (skip), and cancel()/cancel_all() retire events
    so a stale timer cannot resurrect an old round.
    """

    def __init__(self) -> None:
        self._queue: List[ScheduledEvent] = []
        self._counter = itertools.count()

    def schedule(self, now: float, delay_ms: float, name: str, callback: Callable[[], None]) -> ScheduledEvent:
        event = ScheduledEvent(due=now + delay_ms, seq=next(self._counter), name=name, callback=callback)
        heapq.heappush(self._queue, event)
        return event

    def cancel(self, event: ScheduledEvent) -> None:
        event.cancelled = True

    def cancel_all(self) -> int:
        """Cancel every pending event. Returns how many were pending."""
        count = len(self.pending())
        for event in self._queue:
            event.cancelled = True
        self._queue = []
        return count

    def pending(self) -> List[ScheduledEvent]:
        return sorted(e for e in self._queue if not e.cancelled)

    def next_event(self) -> Optional[ScheduledEvent]:
        live = self.pending()
        return live[0] if live else None

    def fire_now(self, event: ScheduledEvent) -> bool:
        """Run a pending event immediately. Returns False if it already ran or was cancelled."""
        if event.cancelled:
            return False
        event.cancelled = True
        event.callback()
        return True

    def run_due(self, now: float) -> int:
        """Fire every event due at or before now, in due order. Returns the count fired."""
        fired = 0
        while self._queue and self._queue[0].due <= now:
            event = heapq.heappop(self._queue)
            if event.cancelled:
                continue
            event.cancelled = True
            event.callback()
            fired += 1
        return fired
