"""Instruction decoding.

decode() turns any 16-bit word into an Instruction: an InstructionKind tag
plus the operand fields every instruction format uses. Decoding is total;
words that match no instruction get InstructionKind.UNKNOWN so the CPU
can report them.

Operand naming follows the usual assembler notation for this machine:

    nnn  lowest 12 bits (address)
    kk   lowest 8 bits (immediate byte)
    n    lowest 4 bits
    x    second nibble (register index)
    y    third nibble (register index)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from chip8.utils.consts import ConstUtils


class InstructionKind(Enum):
    CLS = "CLS"
    RET = "RET"
    SYS = "SYS"
    JP = "JP"
    CALL = "CALL"
    SE_VX_KK = "SE_VX_KK"
    SNE_VX_KK = "SNE_VX_KK"
    SE_VX_VY = "SE_VX_VY"
    LD_VX_KK = "LD_VX_KK"
    ADD_VX_KK = "ADD_VX_KK"
    LD_VX_VY = "LD_VX_VY"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_VX_VY = "ADD_VX_VY"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_VX_VY = "SNE_VX_VY"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I_VX = "ADD_I_VX"
    LD_F_VX = "LD_F_VX"
    LD_B_VX = "LD_B_VX"
    LD_I_VX = "LD_I_VX"
    LD_VX_I = "LD_VX_I"
    UNKNOWN = "UNKNOWN"


# Families whose meaning is fully determined by the top nibble
_BY_FAMILY = {
    0x1: InstructionKind.JP,
    0x2: InstructionKind.CALL,
    0x3: InstructionKind.SE_VX_KK,
    0x4: InstructionKind.SNE_VX_KK,
    0x6: InstructionKind.LD_VX_KK,
    0x7: InstructionKind.ADD_VX_KK,
    0xA: InstructionKind.LD_I,
    0xB: InstructionKind.JP_V0,
    0xC: InstructionKind.RND,
    0xD: InstructionKind.DRW,
}

# 0x8xyN register-register family, keyed by N
_ALU = {
    0x0: InstructionKind.LD_VX_VY,
    0x1: InstructionKind.OR,
    0x2: InstructionKind.AND,
    0x3: InstructionKind.XOR,
    0x4: InstructionKind.ADD_VX_VY,
    0x5: InstructionKind.SUB,
    0x6: InstructionKind.SHR,
    0x7: InstructionKind.SUBN,
    0xE: InstructionKind.SHL,
}

# 0xExkk keypad family, keyed by kk
_KEYS = {
    0x9E: InstructionKind.SKP,
    0xA1: InstructionKind.SKNP,
}

# 0xFxkk timer/index family, keyed by kk
_MISC = {
    0x07: InstructionKind.LD_VX_DT,
    0x0A: InstructionKind.LD_VX_K,
    0x15: InstructionKind.LD_DT_VX,
    0x18: InstructionKind.LD_ST_VX,
    0x1E: InstructionKind.ADD_I_VX,
    0x29: InstructionKind.LD_F_VX,
    0x33: InstructionKind.LD_B_VX,
    0x55: InstructionKind.LD_I_VX,
    0x65: InstructionKind.LD_VX_I,
}

# Assembler-style operand layout per kind, used by __str__
_FORMATS = {
    InstructionKind.CLS: "CLS",
    InstructionKind.RET: "RET",
    InstructionKind.SYS: "SYS {nnn:03X}",
    InstructionKind.JP: "JP {nnn:03X}",
    InstructionKind.CALL: "CALL {nnn:03X}",
    InstructionKind.SE_VX_KK: "SE V{x:X}, {kk:02X}",
    InstructionKind.SNE_VX_KK: "SNE V{x:X}, {kk:02X}",
    InstructionKind.SE_VX_VY: "SE V{x:X}, V{y:X}",
    InstructionKind.LD_VX_KK: "LD V{x:X}, {kk:02X}",
    InstructionKind.ADD_VX_KK: "ADD V{x:X}, {kk:02X}",
    InstructionKind.LD_VX_VY: "LD V{x:X}, V{y:X}",
    InstructionKind.OR: "OR V{x:X}, V{y:X}",
    InstructionKind.AND: "AND V{x:X}, V{y:X}",
    InstructionKind.XOR: "XOR V{x:X}, V{y:X}",
    InstructionKind.ADD_VX_VY: "ADD V{x:X}, V{y:X}",
    InstructionKind.SUB: "SUB V{x:X}, V{y:X}",
    InstructionKind.SHR: "SHR V{x:X}",
    InstructionKind.SUBN: "SUBN V{x:X}, V{y:X}",
    InstructionKind.SHL: "SHL V{x:X}",
    InstructionKind.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    InstructionKind.LD_I: "LD I, {nnn:03X}",
    InstructionKind.JP_V0: "JP V0, {nnn:03X}",
    InstructionKind.RND: "RND V{x:X}, {kk:02X}",
    InstructionKind.DRW: "DRW V{x:X}, V{y:X}, {n:X}",
    InstructionKind.SKP: "SKP V{x:X}",
    InstructionKind.SKNP: "SKNP V{x:X}",
    InstructionKind.LD_VX_DT: "LD V{x:X}, DT",
    InstructionKind.LD_VX_K: "LD V{x:X}, K",
    InstructionKind.LD_DT_VX: "LD DT, V{x:X}",
    InstructionKind.LD_ST_VX: "LD ST, V{x:X}",
    InstructionKind.ADD_I_VX: "ADD I, V{x:X}",
    InstructionKind.LD_F_VX: "LD F, V{x:X}",
    InstructionKind.LD_B_VX: "LD B, V{x:X}",
    InstructionKind.LD_I_VX: "LD [I], V{x:X}",
    InstructionKind.LD_VX_I: "LD V{x:X}, [I]",
    InstructionKind.UNKNOWN: "DW {raw:04X}",
}


def nibble(raw: int, position: int) -> int:
    """Return the 4-bit slice at position 1 (most significant) through 4.

    Any other position yields 0.
    """
    if not 1 <= position <= 4:
        return 0
    shift = (4 - position) * 4
    return (raw >> shift) & ConstUtils.MASK_4_BITS


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word."""

    raw: int
    kind: InstructionKind
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    @property
    def family(self) -> int:
        """Top nibble."""
        return nibble(self.raw, 1)

    @property
    def is_unknown(self) -> bool:
        return self.kind is InstructionKind.UNKNOWN

    def __str__(self) -> str:
        return _FORMATS[self.kind].format(
            raw=self.raw, x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn
        )


def _classify(raw: int) -> InstructionKind:
    family = nibble(raw, 1)
    low = raw & ConstUtils.MASK_8_BITS
    n = nibble(raw, 4)

    if family in _BY_FAMILY:
        return _BY_FAMILY[family]
    if family == 0x0:
        if raw == 0x00E0:
            return InstructionKind.CLS
        if raw == 0x00EE:
            return InstructionKind.RET
        return InstructionKind.SYS
    if family == 0x5:
        return InstructionKind.SE_VX_VY if n == 0 else InstructionKind.UNKNOWN
    if family == 0x9:
        return InstructionKind.SNE_VX_VY if n == 0 else InstructionKind.UNKNOWN
    if family == 0x8:
        return _ALU.get(n, InstructionKind.UNKNOWN)
    if family == 0xE:
        return _KEYS.get(low, InstructionKind.UNKNOWN)
    return _MISC.get(low, InstructionKind.UNKNOWN)


def decode(raw: int) -> Instruction:
    """Decode a 16-bit instruction word. Never fails."""
    raw &= ConstUtils.MASK_16_BITS
    return Instruction(
        raw=raw,
        kind=_classify(raw),
        x=nibble(raw, 2),
        y=nibble(raw, 3),
        n=nibble(raw, 4),
        kk=raw & ConstUtils.MASK_8_BITS,
        nnn=raw & ConstUtils.MASK_12_BITS,
    )


def disassemble(data: bytes, start: int = 0) -> Iterator[tuple[int, Instruction]]:
    """Yield (address, instruction) for each whole word of a program image.

    A trailing odd byte is ignored.
    """
    width = ConstUtils.INSTRUCTION_WIDTH
    for offset in range(0, len(data) - 1, width):
        raw = (data[offset] << 8) | data[offset + 1]
        yield start + offset, decode(raw)
