"""Host-side tick source.

The engine never decays its own timers. A host subscribes Timers to a Clock
and ticks it at its own cadence, conventionally 60 times per second.
"""

from __future__ import annotations

from typing import List

from chip8.interfaces.clock import ClockSubscriber, IClock


class Clock(IClock):
    """Counts ticks and forwards each batch to every subscriber's tick(cycles)."""

    def __init__(self):
        self._cycle_count = 0
        self._subscribers: List[ClockSubscriber] = []

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def subscribers(self) -> tuple[ClockSubscriber, ...]:
        return tuple(self._subscribers)

    def subscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def tick(self, cycles: int = 1) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        if cycles == 0:
            return

        self._cycle_count += cycles
        for subscriber in list(self._subscribers):
            subscriber.tick(cycles)

    def reset(self) -> None:
        self._cycle_count = 0
