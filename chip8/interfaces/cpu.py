"""CPU interface for machine integration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Mapping


class ICPU(ABC):
    """CPU abstraction used by the machine and host shells."""

    @abstractmethod
    def step(self) -> object:
        """Fetch, decode and execute a single instruction."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset CPU state."""
        ...

    @abstractmethod
    def get_snapshot(self) -> "CpuSnapshot":
        """Return a debug snapshot of CPU registers and flags."""
        ...

    def tick(self, cycles: int = 1) -> None:
        """Advance CPU by the given number of cycles (default: step cycles)."""
        for _ in range(cycles):
            self.step()


@dataclass(frozen=True)
class RegisterValue:
    """Single register value for UI/debug panels."""

    name: str
    value: int
    group: str = "general"


@dataclass(frozen=True)
class CpuSnapshot:
    """Snapshot of CPU state for UI/debug panels."""

    registers: Iterable[RegisterValue]
    flags: Mapping[str, bool]

    def value_of(self, name: str) -> int:
        """Look up a register value by name (e.g. 'V3', 'PC')."""
        for reg in self.registers:
            if reg.name == name:
                return reg.value
        raise KeyError(name)
