"""Helpers for loading and validating machine configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional
import threading

import yaml  # type: ignore[import-untyped]

from chip8.core.exceptions import ConfigurationError
from chip8.utils.consts import (
    DEFAULT_DISPLAY_HEIGHT,
    DEFAULT_DISPLAY_WIDTH,
    DEFAULT_FONT_BASE,
    DEFAULT_MEMORY_SIZE,
    DEFAULT_PROGRAM_START,
    DEFAULT_STACK_DEPTH,
    FONT_SET,
    ConstUtils,
)

UnknownOpcodePolicy = Literal["raise", "skip"]
_UNKNOWN_OPCODE_POLICIES = ("raise", "skip")


@dataclass(frozen=True)
class MemoryConfig:
    size: int = DEFAULT_MEMORY_SIZE
    program_start: int = DEFAULT_PROGRAM_START
    font_base: int = DEFAULT_FONT_BASE

    @property
    def program_capacity(self) -> int:
        return self.size - self.program_start


@dataclass(frozen=True)
class DisplayConfig:
    width: int = DEFAULT_DISPLAY_WIDTH
    height: int = DEFAULT_DISPLAY_HEIGHT


@dataclass(frozen=True)
class StackConfig:
    depth: int = DEFAULT_STACK_DEPTH


@dataclass(frozen=True)
class CpuConfig:
    unknown_opcode: UnknownOpcodePolicy = "raise"
    rng_seed: Optional[int] = None
    return_skips_call: bool = False


@dataclass(frozen=True)
class MachineConfig:
    memory: MemoryConfig = MemoryConfig()
    display: DisplayConfig = DisplayConfig()
    stack: StackConfig = StackConfig()
    cpu: CpuConfig = CpuConfig()


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, MachineConfig] = {}
_CACHE_LOCK = threading.RLock()
_DEFAULT_KEY = "default"


def _get_config_path(path: Optional[str] = None) -> str:
    if path is None:
        # Bundled config lives next to the package: chip8/config.yaml
        base = Path(__file__).parent.parent / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a mapping")
    return raw


def _int_fields(section_name: str, section: dict[str, Any]) -> dict[str, int]:
    for key, value in section.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(
                f"{section_name}.{key}", f"expected an integer, got {value!r}"
            )
    return dict(section)


def _build_cpu_cfg(cpu_raw: dict[str, Any]) -> CpuConfig:
    """Convert the cpu section to CpuConfig with defaults."""
    seed = cpu_raw.get("rng_seed")
    if seed is not None:
        _int_fields("cpu", {"rng_seed": seed})

    skips = cpu_raw.get("return_skips_call", False)
    if not isinstance(skips, bool):
        raise ConfigurationError(
            "cpu.return_skips_call", f"expected true or false, got {skips!r}"
        )

    return CpuConfig(
        unknown_opcode=cpu_raw.get("unknown_opcode", "raise"),
        rng_seed=seed,
        return_skips_call=skips,
    )


def config_from_dict(raw: dict[str, Any]) -> MachineConfig:
    """Build and validate a MachineConfig from an already-parsed mapping.

    Missing sections fall back to the defaults of the reference machine
    (4 KiB RAM, program at 0x200, 64x32 display, 16-deep stack).
    """
    try:
        cfg = MachineConfig(
            memory=MemoryConfig(**_int_fields("memory", raw.get("memory") or {})),
            display=DisplayConfig(**_int_fields("display", raw.get("display") or {})),
            stack=StackConfig(**_int_fields("stack", raw.get("stack") or {})),
            cpu=_build_cpu_cfg(raw.get("cpu") or {}),
        )
    except TypeError as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc
    except (ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config value: {exc}") from exc

    _validate_memory_config(cfg.memory)
    _validate_machine_config(cfg)
    return cfg


def _validate_memory_config(mem: MemoryConfig) -> None:
    """Basic sanity checks for memory layout to fail fast on bad configs."""
    if mem.size <= 0:
        raise ConfigurationError("memory.size", "memory size must be positive")
    if mem.size - 1 > ConstUtils.MASK_16_BITS:
        raise ConfigurationError("memory.size", "memory must be 16-bit addressable")

    if mem.font_base < 0 or mem.font_base + len(FONT_SET) > mem.size:
        raise ConfigurationError("memory.font_base", "font table does not fit in memory")

    if mem.program_start % ConstUtils.INSTRUCTION_WIDTH:
        raise ConfigurationError("memory.program_start", "program start must be even")
    if not mem.font_base + len(FONT_SET) <= mem.program_start < mem.size:
        raise ConfigurationError(
            "memory.program_start",
            "program area must start after the font table and inside memory",
        )


def _validate_machine_config(cfg: MachineConfig) -> None:
    if cfg.display.width <= 0 or cfg.display.height <= 0:
        raise ConfigurationError("display", "display dimensions must be positive")

    if cfg.stack.depth <= 0:
        raise ConfigurationError("stack.depth", "stack depth must be positive")

    if cfg.cpu.unknown_opcode not in _UNKNOWN_OPCODE_POLICIES:
        raise ConfigurationError(
            "cpu.unknown_opcode",
            f"must be one of {', '.join(_UNKNOWN_OPCODE_POLICIES)}",
        )


def load_config(path: Optional[str] = None) -> MachineConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Optional path to YAML config. If None, load bundled chip8/config.yaml.

    Returns:
        MachineConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(path=path))
    raw = _load_yaml_file(p)

    return config_from_dict(raw=raw)


def get_config() -> MachineConfig:
    """Return the bundled default config, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    with _CACHE_LOCK:
        if _DEFAULT_KEY not in _LOADER_CACHE:
            _LOADER_CACHE[_DEFAULT_KEY] = load_config()
        return _LOADER_CACHE[_DEFAULT_KEY]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    Useful for testing. Subsequent calls to get_config() reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
