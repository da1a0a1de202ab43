"""Fetch-decode-execute engine.

The CPU owns the register file and the call stack and drives memory,
display, timers and keypad through their public methods. Each handler
belongs to exactly one of two groups:

- sequential handlers leave the program counter alone; the dispatcher
  advances it by one instruction afterwards
- control handlers (jumps, calls, returns, skips, key wait) assign the
  program counter themselves and are never advanced by the dispatcher
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, Optional

from overrides import override  # type: ignore

from chip8.core.decoder import Instruction, InstructionKind, decode
from chip8.core.exceptions import Chip8Error, MemoryAlignmentError, UnknownOpcodeError
from chip8.core.registers import RegisterFile
from chip8.core.stack import CallStack
from chip8.interfaces.cpu import ICPU, CpuSnapshot, RegisterValue
from chip8.utils.consts import ConstUtils

if TYPE_CHECKING:
    from chip8.core.display import Display
    from chip8.core.keypad import Keypad
    from chip8.core.memory import Memory
    from chip8.core.timers import Timers
    from chip8.utils.config_loader import CpuConfig

logger = logging.getLogger(__name__)

Handler = Callable[[Instruction], None]


class Chip8CPU(ICPU):
    """Interpreter for the 35 two-byte instructions of the machine.

    The CPU does NOT decay timers or poll input devices. Those are the
    host's responsibility between step() calls.
    """

    def __init__(
        self,
        memory: "Memory",
        display: "Display",
        timers: "Timers",
        keypad: "Keypad",
        cpu_config: "CpuConfig",
        stack_depth: int = 16,
        rng: Optional[random.Random] = None,
    ):
        self.memory = memory
        self.display = display
        self.timers = timers
        self.keypad = keypad
        self.config = cpu_config
        self.registers = RegisterFile(memory.program.base)
        self.stack = CallStack(stack_depth)
        self.rng = rng if rng is not None else random.Random(cpu_config.rng_seed)
        self.waiting_for_key = False

        self._sequential: dict[InstructionKind, Handler] = {
            InstructionKind.CLS: self._op_cls,
            InstructionKind.SYS: self._op_sys,
            InstructionKind.LD_VX_KK: self._op_ld_vx_kk,
            InstructionKind.ADD_VX_KK: self._op_add_vx_kk,
            InstructionKind.LD_VX_VY: self._op_ld_vx_vy,
            InstructionKind.OR: self._op_or,
            InstructionKind.AND: self._op_and,
            InstructionKind.XOR: self._op_xor,
            InstructionKind.ADD_VX_VY: self._op_add_vx_vy,
            InstructionKind.SUB: self._op_sub,
            InstructionKind.SHR: self._op_shr,
            InstructionKind.SUBN: self._op_subn,
            InstructionKind.SHL: self._op_shl,
            InstructionKind.RND: self._op_rnd,
            InstructionKind.DRW: self._op_drw,
            InstructionKind.LD_VX_DT: self._op_ld_vx_dt,
            InstructionKind.LD_DT_VX: self._op_ld_dt_vx,
            InstructionKind.LD_ST_VX: self._op_ld_st_vx,
            InstructionKind.ADD_I_VX: self._op_add_i_vx,
            InstructionKind.LD_F_VX: self._op_ld_f_vx,
            InstructionKind.LD_B_VX: self._op_ld_b_vx,
            InstructionKind.LD_I_VX: self._op_ld_i_vx,
            InstructionKind.LD_VX_I: self._op_ld_vx_i,
        }
        self._control: dict[InstructionKind, Handler] = {
            InstructionKind.RET: self._op_ret,
            InstructionKind.JP: self._op_jp,
            InstructionKind.CALL: self._op_call,
            InstructionKind.SE_VX_KK: self._op_se_vx_kk,
            InstructionKind.SNE_VX_KK: self._op_sne_vx_kk,
            InstructionKind.SE_VX_VY: self._op_se_vx_vy,
            InstructionKind.SNE_VX_VY: self._op_sne_vx_vy,
            InstructionKind.LD_I: self._op_ld_i,
            InstructionKind.JP_V0: self._op_jp_v0,
            InstructionKind.SKP: self._op_skp,
            InstructionKind.SKNP: self._op_sknp,
            InstructionKind.LD_VX_K: self._op_ld_vx_k,
        }

    @property
    def pc(self) -> int:
        return self.registers.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.registers.pc = value & ConstUtils.MASK_16_BITS

    @override
    def reset(self) -> None:
        """Clear registers and stack and point PC at the program start."""
        self.registers.reset()
        self.stack.reset()
        self.waiting_for_key = False

    def fetch(self) -> int:
        """Read the instruction word at PC, high byte first."""
        pc = self.registers.pc
        if pc % ConstUtils.INSTRUCTION_WIDTH:
            raise MemoryAlignmentError(pc, ConstUtils.INSTRUCTION_WIDTH)
        return self.memory.read_word(pc)

    @override
    def step(self) -> Instruction:
        """Execute one CPU instruction."""
        pc = self.registers.pc
        try:
            raw = self.fetch()
        except Chip8Error as exc:
            logger.error(f"Instruction fetch failed at PC=0x{pc:04X}: {exc}")
            raise
        return self.execute(raw)

    def execute(self, raw: int) -> Instruction:
        """Decode and execute one instruction word without fetching it."""
        instruction = decode(raw)
        pc = self.registers.pc
        logger.debug(f"0x{pc:04X}: {instruction}")

        if instruction.is_unknown:
            self._unknown(instruction)
            return instruction

        try:
            handler = self._control.get(instruction.kind)
            if handler is not None:
                handler(instruction)
            else:
                self._sequential[instruction.kind](instruction)
                self.registers.advance()
        except Chip8Error as exc:
            logger.error(f"CPU execution error at PC=0x{pc:04X} ({instruction}): {exc}")
            raise
        return instruction

    def _unknown(self, instruction: Instruction) -> None:
        pc = self.registers.pc
        if self.config.unknown_opcode == "skip":
            logger.warning(f"Skipping unknown opcode 0x{instruction.raw:04X} at 0x{pc:04X}")
            self.registers.advance()
            return
        logger.error(f"Unknown opcode 0x{instruction.raw:04X} at 0x{pc:04X}")
        raise UnknownOpcodeError(instruction.raw, pc)

    @override
    def get_snapshot(self) -> CpuSnapshot:
        regs = [
            RegisterValue(f"V{idx:X}", value) for idx, value in enumerate(self.registers.v)
        ]
        regs += [
            RegisterValue("I", self.registers.i, "special"),
            RegisterValue("PC", self.registers.pc, "special"),
            RegisterValue("SP", self.stack.pointer, "special"),
            RegisterValue("DT", self.timers.delay, "timer"),
            RegisterValue("ST", self.timers.sound, "timer"),
        ]
        return CpuSnapshot(
            registers=regs,
            flags={
                "VF": bool(self.registers.vf),
                "waiting_for_key": self.waiting_for_key,
            },
        )

    # Control flow ----------------------------------------------------------

    def _op_ret(self, _ins: Instruction) -> None:
        address = self.stack.pop()
        if self.config.return_skips_call:
            address += ConstUtils.INSTRUCTION_WIDTH
        self.pc = address

    def _op_jp(self, ins: Instruction) -> None:
        self.pc = ins.nnn

    def _op_call(self, ins: Instruction) -> None:
        self.stack.push(self.registers.pc)
        self.pc = ins.nnn

    def _skip_if(self, condition: bool) -> None:
        self.registers.advance(2 if condition else 1)

    def _op_se_vx_kk(self, ins: Instruction) -> None:
        self._skip_if(self.registers[ins.x] == ins.kk)

    def _op_sne_vx_kk(self, ins: Instruction) -> None:
        self._skip_if(self.registers[ins.x] != ins.kk)

    def _op_se_vx_vy(self, ins: Instruction) -> None:
        self._skip_if(self.registers[ins.x] == self.registers[ins.y])

    def _op_sne_vx_vy(self, ins: Instruction) -> None:
        self._skip_if(self.registers[ins.x] != self.registers[ins.y])

    def _op_ld_i(self, ins: Instruction) -> None:
        self.registers.set_index(ins.nnn)
        self.registers.advance()

    def _op_jp_v0(self, ins: Instruction) -> None:
        self.pc = ins.nnn + self.registers[0]

    # Registers and arithmetic ---------------------------------------------

    def _op_sys(self, ins: Instruction) -> None:
        logger.debug(f"Ignoring machine code routine call 0x{ins.nnn:03X}")

    def _op_ld_vx_kk(self, ins: Instruction) -> None:
        self.registers[ins.x] = ins.kk

    def _op_add_vx_kk(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.registers[ins.x] + ins.kk

    def _op_ld_vx_vy(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.registers[ins.y]

    def _op_or(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.registers[ins.x] | self.registers[ins.y]

    def _op_and(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.registers[ins.x] & self.registers[ins.y]

    def _op_xor(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.registers[ins.x] ^ self.registers[ins.y]

    # The flag is written after the result so VF holds the flag even when x == F.

    def _op_add_vx_vy(self, ins: Instruction) -> None:
        total = self.registers[ins.x] + self.registers[ins.y]
        self.registers[ins.x] = total
        self.registers.set_flag(total > ConstUtils.MASK_8_BITS)

    def _subtract(self, target: int, minuend: int, subtrahend: int) -> None:
        no_borrow = minuend >= subtrahend
        self.registers[target] = minuend - subtrahend
        self.registers.set_flag(no_borrow)

    def _op_sub(self, ins: Instruction) -> None:
        self._subtract(ins.x, self.registers[ins.x], self.registers[ins.y])

    def _op_subn(self, ins: Instruction) -> None:
        self._subtract(ins.x, self.registers[ins.y], self.registers[ins.x])

    def _op_shr(self, ins: Instruction) -> None:
        value = self.registers[ins.x]
        self.registers[ins.x] = value >> 1
        self.registers.set_flag(value & 0x01)

    def _op_shl(self, ins: Instruction) -> None:
        value = self.registers[ins.x]
        self.registers[ins.x] = value << 1
        self.registers.set_flag(value & 0x80)

    def _op_rnd(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.rng.randrange(256) & ins.kk

    # Display ---------------------------------------------------------------

    def _op_cls(self, _ins: Instruction) -> None:
        self.display.clear()

    def _op_drw(self, ins: Instruction) -> None:
        rows = self.memory.read_block(self.registers.i, ins.n)
        x = self.registers[ins.x] % self.display.width
        y = self.registers[ins.y] % self.display.height
        collision = self.display.draw_sprite(x, y, rows)
        self.registers.set_flag(collision)

    # Timers and keypad -----------------------------------------------------

    def _key_in(self, register: int) -> int:
        return self.registers[register] & ConstUtils.MASK_4_BITS

    def _op_skp(self, ins: Instruction) -> None:
        self._skip_if(self.keypad.is_pressed(self._key_in(ins.x)))

    def _op_sknp(self, ins: Instruction) -> None:
        self._skip_if(not self.keypad.is_pressed(self._key_in(ins.x)))

    def _op_ld_vx_dt(self, ins: Instruction) -> None:
        self.registers[ins.x] = self.timers.delay

    def _op_ld_vx_k(self, ins: Instruction) -> None:
        # One poll per step; PC stays put until a key is held.
        key = self.keypad.first_pressed()
        if key is None:
            self.waiting_for_key = True
            return
        self.waiting_for_key = False
        self.registers[ins.x] = key
        self.registers.advance()

    def _op_ld_dt_vx(self, ins: Instruction) -> None:
        self.timers.delay = self.registers[ins.x]

    def _op_ld_st_vx(self, ins: Instruction) -> None:
        self.timers.sound = self.registers[ins.x]

    # Index register and memory transfer -------------------------------------

    def _op_add_i_vx(self, ins: Instruction) -> None:
        self.registers.set_index(self.registers.i + self.registers[ins.x])

    def _op_ld_f_vx(self, ins: Instruction) -> None:
        glyph = self._key_in(ins.x)
        self.registers.set_index(
            self.memory.font.base + glyph * ConstUtils.FONT_GLYPH_SIZE
        )

    def _op_ld_b_vx(self, ins: Instruction) -> None:
        value = self.registers[ins.x]
        digits = bytes([value // 100, (value // 10) % 10, value % 10])
        self.memory.write_block(self.registers.i, digits)

    def _op_ld_i_vx(self, ins: Instruction) -> None:
        self.memory.write_block(self.registers.i, bytes(self.registers.v[:ins.x + 1]))

    def _op_ld_vx_i(self, ins: Instruction) -> None:
        data = self.memory.read_block(self.registers.i, ins.x + 1)
        for idx, value in enumerate(data):
            self.registers[idx] = value
