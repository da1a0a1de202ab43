"""
Pytest configuration and shared fixtures for the chip8 test suite.
"""

import random
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure project root is on PYTHONPATH so 'chip8' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chip8.core.machine import Machine  # noqa: E402
from chip8.utils.config_loader import CpuConfig, MachineConfig  # noqa: E402


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


MEMORY_CFG = {"size": 4096, "program_start": 0x200, "font_base": 0x000}
DISPLAY_CFG = {"width": 64, "height": 32}
STACK_CFG = {"depth": 16}
CPU_CFG = {"unknown_opcode": "raise", "rng_seed": 1234, "return_skips_call": False}


@pytest.fixture
def machine_config_dict():
    """Complete machine configuration matching the bundled defaults."""
    return {
        "memory": dict(MEMORY_CFG),
        "display": dict(DISPLAY_CFG),
        "stack": dict(STACK_CFG),
        "cpu": dict(CPU_CFG),
    }


@pytest.fixture
def machine():
    """Machine with default layout and a seeded random source."""
    return Machine(MachineConfig(), rng=random.Random(1234))


@pytest.fixture
def skipping_machine():
    """Machine that steps over unknown opcodes instead of raising."""
    return Machine(MachineConfig(cpu=CpuConfig(unknown_opcode="skip")))


@pytest.fixture
def cpu(machine):
    return machine.cpu


@pytest.fixture
def load_words(machine):
    """Load big-endian instruction words at the program start."""

    def _load(*words: int) -> None:
        data = b"".join(w.to_bytes(2, "big") for w in words)
        machine.load_program(data)

    return _load


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
