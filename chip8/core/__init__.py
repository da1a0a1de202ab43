"""Core modules for the virtual machine.

- exceptions: error taxonomy
- memory: flat RAM with font table and program area
- registers, stack: CPU-owned state
- display, timers, keypad: devices shared with the host
- decoder: instruction word -> Instruction
- cpu: fetch-decode-execute engine
- machine: everything wired together
- clock: host-side tick source
"""

from chip8.core.exceptions import (
    Chip8Error,
    ConfigurationError,
    MemoryAlignmentError,
    MemoryBoundsError,
    MemoryException,
    MemoryPermissionError,
    ProgramLoadError,
    StackError,
    StackOverflowError,
    StackUnderflowError,
    UnknownOpcodeError,
)
from chip8.core.memory import AddressRange, Memory
from chip8.core.registers import RegisterFile
from chip8.core.stack import CallStack
from chip8.core.display import Display
from chip8.core.timers import Timers
from chip8.core.keypad import Keypad
from chip8.core.decoder import Instruction, InstructionKind, decode, disassemble, nibble
from chip8.core.cpu import Chip8CPU
from chip8.core.clock import Clock
from chip8.core.machine import Machine

__all__ = [
    # Errors
    "Chip8Error",
    "ConfigurationError",
    "MemoryException",
    "MemoryAlignmentError",
    "MemoryBoundsError",
    "MemoryPermissionError",
    "ProgramLoadError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
    # State blocks
    "AddressRange",
    "Memory",
    "RegisterFile",
    "CallStack",
    "Display",
    "Timers",
    "Keypad",
    # Decode / execute
    "Instruction",
    "InstructionKind",
    "decode",
    "disassemble",
    "nibble",
    "Chip8CPU",
    # Host helpers
    "Clock",
    "Machine",
]
