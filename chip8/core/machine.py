"""The complete virtual machine.

A Machine owns every state block (memory, registers, stack, display,
timers, keypad) plus the CPU, and exposes the host-facing API: program
loading, stepping, display export and keypad input.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional, Union

from chip8.core.clock import Clock
from chip8.core.cpu import Chip8CPU
from chip8.core.decoder import Instruction
from chip8.core.display import Display
from chip8.core.keypad import Keypad
from chip8.core.memory import Memory
from chip8.core.registers import RegisterFile
from chip8.core.stack import CallStack
from chip8.core.timers import Timers
from chip8.utils.config_loader import MachineConfig, get_config

logger = logging.getLogger(__name__)


class Machine:
    """Reference 8-bit virtual machine.

    Architecture:
    - Memory holds the font table and the program image
    - CPU owns registers and the call stack and masters memory
    - Display, timers and keypad are shared between the CPU and the host
    - timer_clock is a host-side Clock with the timers subscribed; the
      CPU never ticks it
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config if config is not None else get_config()

        self.memory = Memory(self.config.memory)
        self.display = Display(self.config.display.width, self.config.display.height)
        self.timers = Timers()
        self.keypad = Keypad()
        self.cpu = Chip8CPU(
            memory=self.memory,
            display=self.display,
            timers=self.timers,
            keypad=self.keypad,
            cpu_config=self.config.cpu,
            stack_depth=self.config.stack.depth,
            rng=rng,
        )

        self.timer_clock = Clock()
        self.timer_clock.subscribe(self.timers)

    @property
    def registers(self) -> RegisterFile:
        return self.cpu.registers

    @property
    def stack(self) -> CallStack:
        return self.cpu.stack

    def load_program(self, data: bytes) -> None:
        """Copy a program image into memory at the program start address."""
        self.memory.load_program(bytes(data))

    def load_program_file(self, path: Union[str, Path]) -> None:
        self.load_program(Path(path).read_bytes())

    def step(self) -> Instruction:
        """Execute one instruction. Errors propagate as Chip8Error subclasses."""
        return self.cpu.step()

    def run(self, steps: int) -> None:
        """Execute a fixed number of steps."""
        if steps < 0:
            raise ValueError("steps must be >= 0")
        self.cpu.tick(steps)

    def tick_timers(self, cycles: int = 1) -> None:
        """Host hook: decay the delay and sound timers."""
        self.timer_clock.tick(cycles)

    def reset(self, clear_program: bool = False) -> None:
        """Return to power-on state.

        The loaded program survives unless clear_program is set.
        """
        if clear_program:
            self.memory.reset()
        else:
            self.memory.reset_keep_program()
        self.cpu.reset()
        self.display.reset()
        self.timers.reset()
        self.keypad.reset()
        self.timer_clock.reset()
        logger.info("Machine reset")

    # Host-facing views ----------------------------------------------------

    @property
    def needs_redraw(self) -> bool:
        return self.display.dirty

    def export_display(self) -> tuple[tuple[bool, ...], ...]:
        return self.display.export()

    def press_key(self, key: int) -> None:
        self.keypad.press(key)

    def release_key(self, key: int) -> None:
        self.keypad.release(key)
