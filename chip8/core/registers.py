"""Register file: V0..VF, the index register I and the program counter."""

from __future__ import annotations

from chip8.utils.consts import ConstUtils, wrap_byte


class RegisterFile:
    """Sixteen 8-bit general registers plus 16-bit I and PC.

    VF is the implicit flag register. Handlers that define a flag effect
    overwrite it through set_flag() on every execution.
    """

    def __init__(self, program_start: int):
        self._program_start = program_start
        self.v = bytearray(ConstUtils.REGISTER_COUNT)
        self.i = 0
        self.pc = program_start

    def __getitem__(self, index: int) -> int:
        return self.v[index]

    def __setitem__(self, index: int, value: int) -> None:
        self.v[index] = wrap_byte(value)

    @property
    def vf(self) -> int:
        return self.v[ConstUtils.FLAG_REGISTER]

    def set_flag(self, value: bool | int) -> None:
        self.v[ConstUtils.FLAG_REGISTER] = 1 if value else 0

    def set_index(self, value: int) -> None:
        self.i = value & ConstUtils.MASK_16_BITS

    def advance(self, instructions: int = 1) -> None:
        """Move the program counter forward by whole instructions."""
        self.pc = (self.pc + instructions * ConstUtils.INSTRUCTION_WIDTH) & ConstUtils.MASK_16_BITS

    def reset(self) -> None:
        self.v[:] = bytes(ConstUtils.REGISTER_COUNT)
        self.i = 0
        self.pc = self._program_start
