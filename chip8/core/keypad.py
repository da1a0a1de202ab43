"""Sixteen-key hexadecimal input pad."""

from __future__ import annotations

from typing import Optional

from chip8.utils.consts import ConstUtils


class Keypad:
    """Key states 0x0..0xF. Written by the host, read by the CPU."""

    def __init__(self):
        self._keys = [False] * ConstUtils.KEY_COUNT

    def _check(self, key: int) -> None:
        if not 0 <= key < ConstUtils.KEY_COUNT:
            raise ValueError(f"Invalid key {key}; must be 0-15")

    def set_key(self, key: int, pressed: bool) -> None:
        self._check(key)
        self._keys[key] = bool(pressed)

    def press(self, key: int) -> None:
        self.set_key(key, True)

    def release(self, key: int) -> None:
        self.set_key(key, False)

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self._keys[key]

    def first_pressed(self) -> Optional[int]:
        """Lowest-numbered key currently held, or None."""
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    @property
    def states(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def clear(self) -> None:
        self._keys = [False] * ConstUtils.KEY_COUNT

    reset = clear
