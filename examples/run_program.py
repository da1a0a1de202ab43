import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Ensure local repo package is used even if another "chip8" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chip8 import Chip8Error, Machine, MachineConfig, load_config
from chip8.utils.config_loader import get_config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a program image headless.")
    parser.add_argument("program", help="Path to the program image")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional machine config YAML (defaults to the bundled one)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=60,
        help="Number of frames to run",
    )
    parser.add_argument(
        "--steps-per-frame",
        type=int,
        default=10,
        help="Instructions executed between timer ticks",
    )
    parser.add_argument(
        "--key",
        type=lambda s: int(s, 16),
        action="append",
        default=[],
        help="Hex key to hold down for the whole run (repeatable)",
    )
    parser.add_argument(
        "--return-skips-call",
        action="store_true",
        help=(
            "Resume after the CALL on return (cpu.return_skips_call). "
            "Needed by programs that use subroutines; without it RET lands "
            "back on the CALL and the subroutine is re-entered forever"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Trace instructions")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> MachineConfig:
    config = load_config(args.config) if args.config else get_config()
    if args.return_skips_call:
        config = replace(config, cpu=replace(config.cpu, return_skips_call=True))
    return config


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    machine = Machine(build_config(args))
    machine.load_program_file(args.program)
    for key in args.key:
        machine.press_key(key)

    try:
        for _ in range(args.frames):
            machine.run(args.steps_per_frame)
            machine.tick_timers()
    except Chip8Error as exc:
        print(f"Halted: {exc} {exc.details}", file=sys.stderr)
        return 1

    if machine.needs_redraw:
        print(machine.display.to_text())
        machine.display.acknowledge()
    return 0


if __name__ == "__main__":
    sys.exit(main())
