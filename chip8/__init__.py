"""Virtual 8-bit machine emulator.

This package provides the fetch-decode-execute engine for a classic 8-bit
virtual CPU: 4 KiB of memory, sixteen 8-bit registers, an index register,
a call stack, two countdown timers, a 64x32 monochrome display and a
16-key pad.

Getting started:
    from chip8 import Machine

    machine = Machine()
    machine.load_program(open("game.ch8", "rb").read())
    while True:
        machine.step()
        machine.tick_timers()  # host cadence, e.g. once per 60 Hz frame
"""

# Core abstractions
from chip8.core.machine import Machine
from chip8.core.cpu import Chip8CPU
from chip8.core.clock import Clock
from chip8.core.decoder import Instruction, InstructionKind, decode, disassemble
from chip8.core.exceptions import (
    Chip8Error,
    MemoryBoundsError,
    ProgramLoadError,
    StackOverflowError,
    StackUnderflowError,
    UnknownOpcodeError,
)
from chip8.utils.config_loader import MachineConfig, load_config

__all__ = [
    # Machine
    "Machine",
    "Chip8CPU",
    "Clock",
    "MachineConfig",
    "load_config",
    # Decoding
    "Instruction",
    "InstructionKind",
    "decode",
    "disassemble",
    # Errors
    "Chip8Error",
    "MemoryBoundsError",
    "ProgramLoadError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
]
