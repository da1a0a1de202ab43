"""Delay and sound countdown timers."""

from __future__ import annotations

from chip8.utils.consts import wrap_byte


class Timers:
    """Two independent 8-bit countdown values.

    The CPU only reads and writes them. Decay is driven by the host through
    tick(), conventionally at 60 Hz, e.g. by subscribing to a Clock.
    """

    def __init__(self):
        self._delay = 0
        self._sound = 0

    @property
    def delay(self) -> int:
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay = wrap_byte(value)

    @property
    def sound(self) -> int:
        return self._sound

    @sound.setter
    def sound(self, value: int) -> None:
        self._sound = wrap_byte(value)

    @property
    def sound_active(self) -> bool:
        return self._sound > 0

    def tick(self, cycles: int = 1) -> None:
        """Decrement both timers by cycles, stopping at zero."""
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        self._delay = max(0, self._delay - cycles)
        self._sound = max(0, self._sound - cycles)

    def reset(self) -> None:
        self._delay = 0
        self._sound = 0
