from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol


@dataclass
class TimerHandle:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle: ...


@dataclass
class TimerQueue:
    """Cooperative scheduler for deferred callbacks.

    Nothing runs on its own: the host moves time forward with `advance`
    (the frame loop passes its frame time, tests pass whatever they need).
    Callbacks due at the same instant fire in the order they were scheduled.
    """

    now: float = 0.0
    _heap: list[tuple[float, int, TimerHandle]] = field(default_factory=list)
    _seq: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(due=self.now + max(0.0, delay_ms), callback=callback)
        heapq.heappush(self._heap, (handle.due, next(self._seq), handle))
        return handle

    def advance(self, elapsed_ms: float) -> int:
        """Move the clock forward and run everything that came due. Returns the number fired."""
        target = self.now + max(0.0, elapsed_ms)
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, handle = heapq.heappop(self._heap)
            self.now = max(self.now, due)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if h.active)
