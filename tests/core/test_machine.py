"""Machine facade: initialization, program loading, stepping, reset and host views."""

import random

import pytest

from chip8.core.exceptions import ProgramLoadError
from chip8.core.machine import Machine
from chip8.utils.config_loader import DisplayConfig, MachineConfig, MemoryConfig
from chip8.utils.consts import FONT_SET


def test_initial_state(machine):
    assert machine.memory.read_block(0, 80) == FONT_SET
    assert machine.cpu.pc == 0x200
    assert machine.registers.i == 0
    assert list(machine.registers.v) == [0] * 16
    assert machine.stack.pointer == 0
    assert (machine.timers.delay, machine.timers.sound) == (0, 0)
    assert machine.keypad.first_pressed() is None
    assert not machine.needs_redraw


def test_default_config_is_bundled_one():
    assert Machine().config == MachineConfig()


def test_custom_layout():
    cfg = MachineConfig(
        memory=MemoryConfig(size=0x800, program_start=0x100),
        display=DisplayConfig(width=128, height=64),
    )
    machine = Machine(cfg)
    assert machine.cpu.pc == 0x100
    assert len(machine.export_display()) == 64
    with pytest.raises(ProgramLoadError):
        machine.load_program(bytes(0x701))


def test_load_program_file(machine, tmp_path):
    rom = tmp_path / "prog.ch8"
    rom.write_bytes(bytes([0x62, 0x05, 0x72, 0x10]))
    machine.load_program_file(rom)
    machine.run(2)
    assert machine.registers[2] == 0x15


def test_run_rejects_negative(machine):
    with pytest.raises(ValueError):
        machine.run(-1)


def test_tick_timers(machine):
    machine.timers.delay = 5
    machine.timers.sound = 1
    machine.tick_timers(2)
    assert machine.timers.delay == 3
    assert machine.timers.sound == 0
    assert machine.timer_clock.cycle_count == 2


def test_reset_keeps_program(machine, load_words):
    load_words(0x6205, 0x00E0)
    machine.run(2)
    machine.press_key(3)
    machine.reset()

    assert machine.cpu.pc == 0x200
    assert machine.registers[2] == 0
    assert not machine.needs_redraw
    assert machine.keypad.first_pressed() is None
    assert machine.memory.read_word(0x200) == 0x6205


def test_reset_clear_program(machine, load_words):
    load_words(0x6205)
    machine.reset(clear_program=True)
    assert machine.memory.read_word(0x200) == 0


def test_countdown_program(load_words, machine):
    """Set the delay timer, then spin until it reads zero."""
    load_words(
        0x6003,  # LD V0, 03
        0xF015,  # LD DT, V0
        0xF107,  # LD V1, DT
        0x3100,  # SE V1, 00
        0x1204,  # JP 204
        0x6201,  # LD V2, 01
    )
    for _ in range(40):
        machine.step()
        if machine.cpu.pc == 0x20A:
            break
        if machine.cpu.pc == 0x204:
            machine.tick_timers()
    assert machine.cpu.pc == 0x20A
    assert machine.timers.delay == 0
    machine.step()
    assert machine.registers[2] == 1


def test_seeded_rng_injection():
    a = Machine(MachineConfig(), rng=random.Random(7))
    b = Machine(MachineConfig(), rng=random.Random(7))
    a.cpu.execute(0xC3FF)
    b.cpu.execute(0xC3FF)
    assert a.registers[3] == b.registers[3]
