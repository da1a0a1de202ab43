"""Abstract memory interface for the virtual machine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chip8.utils.config_loader import MemoryConfig


class BaseMemory(ABC):
    """Abstract interface for the flat byte-addressable store.

    Responsibilities:
    - Hold the font table and the loaded program
    - Handle byte and instruction-word access with bounds checking
    - Pure storage - does NOT interpret instructions
    """

    memory_config: MemoryConfig | None = None

    def __init__(self, mem_config: MemoryConfig):
        self.memory_config = mem_config

    @abstractmethod
    def read_byte(self, address: int) -> int:
        """Read one byte.

        Args:
            address: Memory address to read

        Returns:
            Unsigned byte value
        """

        raise NotImplementedError

    @abstractmethod
    def write_byte(self, address: int, value: int) -> None:
        """Write one byte.

        Args:
            address: Memory address to write
            value: Value to store (truncated to 8 bits)
        """
        raise NotImplementedError

    @abstractmethod
    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit instruction word at address, address+1."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Reset memory to power-on state.

        Zeroes everything and rewrites the font table.
        """
        raise NotImplementedError
