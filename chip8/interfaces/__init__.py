"""Interface abstractions for the virtual machine.

Defines behavioral contracts that implementations must satisfy:
- ICPU: fetch/decode/execute engine
- BaseMemory: flat byte store
- IClock, ClockSubscriber: host-side tick source
"""

from chip8.interfaces.clock import ClockSubscriber, IClock
from chip8.interfaces.cpu import ICPU, CpuSnapshot, RegisterValue
from chip8.interfaces.memory import BaseMemory

__all__ = [
    "ICPU",
    "CpuSnapshot",
    "RegisterValue",
    "BaseMemory",
    "IClock",
    "ClockSubscriber",
]
