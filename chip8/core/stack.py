"""Fixed-depth return address stack."""

from __future__ import annotations

from chip8.core.exceptions import StackOverflowError, StackUnderflowError
from chip8.utils.consts import ConstUtils


class CallStack:
    """Return address stack with an explicit pointer.

    push() writes the slot at the pointer, then increments it. pop()
    decrements, then reads. The pointer therefore counts occupied slots and
    ranges over [0, depth].
    """

    def __init__(self, depth: int):
        if depth <= 0:
            raise ValueError("Stack depth must be positive")
        self._slots = [0] * depth
        self.pointer = 0

    @property
    def depth(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self.pointer

    def push(self, address: int) -> None:
        if self.pointer >= self.depth:
            raise StackOverflowError(self.pointer, self.depth)
        self._slots[self.pointer] = address & ConstUtils.MASK_16_BITS
        self.pointer += 1

    def pop(self) -> int:
        if self.pointer == 0:
            raise StackUnderflowError(self.pointer, self.depth)
        self.pointer -= 1
        return self._slots[self.pointer]

    def peek(self) -> int:
        if self.pointer == 0:
            raise StackUnderflowError(self.pointer, self.depth)
        return self._slots[self.pointer - 1]

    def entries(self) -> list[int]:
        """Occupied slots, bottom first."""
        return list(self._slots[:self.pointer])

    def reset(self) -> None:
        self._slots = [0] * self.depth
        self.pointer = 0
