"""Font lookup, BCD conversion and bulk register transfer."""

import pytest

from chip8.core.exceptions import MemoryBoundsError, MemoryPermissionError
from chip8.utils.consts import FONT_SET


def test_font_address(machine):
    machine.registers[3] = 0xB
    machine.cpu.execute(0xF329)
    assert machine.registers.i == 0xB * 5
    assert machine.memory.read_block(machine.registers.i, 5) == bytes(
        [0xE0, 0x90, 0xE0, 0x90, 0xE0]
    )


def test_bcd(machine):
    machine.registers[6] = 254
    machine.registers.set_index(0x400)
    machine.cpu.execute(0xF633)
    assert machine.memory.read_block(0x400, 3) == bytes([2, 5, 4])
    assert machine.registers.i == 0x400


def test_store_and_load_registers(machine):
    for idx in range(5):
        machine.registers[idx] = 0x10 + idx
    machine.registers.set_index(0x500)
    machine.cpu.execute(0xF455)
    assert machine.memory.read_block(0x500, 6) == bytes([0x10, 0x11, 0x12, 0x13, 0x14, 0x00])
    assert machine.registers.i == 0x500

    machine.cpu.reset()
    machine.registers.set_index(0x500)
    machine.cpu.execute(0xF265)
    assert list(machine.registers.v[:4]) == [0x10, 0x11, 0x12, 0x00]


def test_store_into_font_table_is_rejected(machine):
    machine.registers.set_index(0x10)
    with pytest.raises(MemoryPermissionError):
        machine.cpu.execute(0xF233)
    assert machine.memory.read_block(0, len(FONT_SET)) == FONT_SET


def test_load_past_memory_end(machine):
    machine.registers.set_index(0xFFE)
    with pytest.raises(MemoryBoundsError):
        machine.cpu.execute(0xF365)
