"""Flat RAM model.

Memory is a single byte array. The low region holds the font table, the
program area starts at a fixed offset. Every access is bounds checked;
addresses never wrap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chip8.core.exceptions import (
    MemoryBoundsError,
    MemoryPermissionError,
    ProgramLoadError,
)
from chip8.interfaces.memory import BaseMemory
from chip8.utils.consts import FONT_SET, ConstUtils, wrap_byte

if TYPE_CHECKING:
    from chip8.utils.config_loader import MemoryConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddressRange:
    """An immutable address range."""
    base: int
    size: int

    def contains(self, address: int) -> bool:
        return self.base <= address < self.base + self.size

    def contains_range(self, address: int, size: int) -> bool:
        end = self.base + self.size
        if size == 0:
            return self.base <= address <= end
        return self.contains(address) and address + size <= end

    def overlaps(self, address: int, size: int) -> bool:
        return address < self.base + self.size and self.base < address + size

    def __str__(self) -> str:
        return f"0x{self.base:04X}-0x{self.base + self.size:04X}"


class Memory(BaseMemory):
    """Byte-addressable RAM with a write-protected font table."""

    def __init__(self, mem_config: MemoryConfig):
        super().__init__(mem_config)
        self.range = AddressRange(0, mem_config.size)
        self.font = AddressRange(mem_config.font_base, len(FONT_SET))
        self.program = AddressRange(
            mem_config.program_start, mem_config.program_capacity
        )
        self._data = bytearray(mem_config.size)
        self._load_font()

    @property
    def size(self) -> int:
        return self.range.size

    def _load_font(self) -> None:
        base = self.font.base
        self._data[base:base + len(FONT_SET)] = FONT_SET

    def _check(self, address: int, size: int) -> None:
        if not self.range.contains_range(address, size):
            raise MemoryBoundsError(address, size, "RAM")

    def read_byte(self, address: int) -> int:
        self._check(address, 1)
        return self._data[address]

    def write_byte(self, address: int, value: int) -> None:
        self._check(address, 1)
        if self.font.contains(address):
            raise MemoryPermissionError(address, "write")
        self._data[address] = wrap_byte(value)

    def read_word(self, address: int) -> int:
        """Read two bytes, high byte first."""
        self._check(address, ConstUtils.INSTRUCTION_WIDTH)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, size: int) -> bytes:
        """Read a contiguous block of RAM."""
        self._check(address, size)
        return bytes(self._data[address:address + size])

    def write_block(self, address: int, data: bytes) -> None:
        """Write a contiguous block of RAM; the whole block is checked first."""
        self._check(address, len(data))
        if data and self.font.overlaps(address, len(data)):
            raise MemoryPermissionError(address, "write")
        self._data[address:address + len(data)] = data

    def load_program(self, data: bytes) -> None:
        """Copy a program image verbatim into the program area.

        Oversized images are rejected before any byte is written. Bytes of the
        program area not covered by the image are zeroed.
        """
        capacity = self.program.size
        if len(data) > capacity:
            raise ProgramLoadError(len(data), capacity)

        start = self.program.base
        self._data[start:start + capacity] = bytes(capacity)
        self._data[start:start + len(data)] = data
        logger.info(f"Loaded {len(data)} byte program at 0x{start:04X}")

    def reset(self) -> None:
        """Zero out all RAM and rewrite the font table."""
        self._data[:] = bytes(len(self._data))
        self._load_font()

    def reset_keep_program(self) -> None:
        """Zero everything outside the program area and rewrite the font table."""
        program = bytes(self._data[self.program.base:])
        self.reset()
        self._data[self.program.base:] = program
