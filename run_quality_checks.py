#!/usr/bin/env python
"""Local quality checks and tests runner.

Runs formatting, import ordering, lint, type, dead code, complexity and test
checks over the chip8 package, with optional auto-fixes for formatting and
import ordering.

Usage:
    python run_quality_checks.py                    # Run all checks (no fixes)
    python run_quality_checks.py --fix              # Run all checks + auto fixes
    python run_quality_checks.py --skip lint tests  # Skip some checks
"""

import argparse
import subprocess
import sys

PACKAGE_DIR = "chip8"
TESTS_DIR = "tests"
DIRS_TO_CHECK = [PACKAGE_DIR, TESTS_DIR]


def build_checks(fix: bool) -> list[tuple[str, str, list[str]]]:
    """Return (key, title, command) for every check, in run order."""
    black = ["black", *DIRS_TO_CHECK] if fix else ["black", "--check", *DIRS_TO_CHECK]
    isort = ["isort", *DIRS_TO_CHECK] if fix else ["isort", "--check-only", *DIRS_TO_CHECK]
    return [
        ("formatting", "Black formatting", black),
        ("imports", "isort import ordering", isort),
        ("lint", "Pylint", ["pylint", PACKAGE_DIR]),
        ("type", "Mypy", ["mypy", PACKAGE_DIR]),
        ("deadcode", "Vulture", ["vulture", PACKAGE_DIR, "examples"]),
        ("complexity", "Radon cyclomatic complexity", ["radon", "cc", PACKAGE_DIR, "-a"]),
        (
            "tests",
            "Pytest + coverage",
            ["pytest", f"--cov={PACKAGE_DIR}", "--cov-report=term-missing", TESTS_DIR],
        ),
    ]


class CheckRunner:
    """Runs quality checks and collects pass/fail results."""

    def __init__(self, fix: bool = False, verbose: bool = False, skip_checks=None):
        self.fix = fix
        self.verbose = verbose
        self.skip_checks = set(skip_checks or [])
        self.failed_checks: list[str] = []
        self.passed_checks: list[str] = []

    def run_command(self, cmd: list[str], name: str) -> bool:
        print(f"\n{'=' * 70}\n> {name}\n{'=' * 70}")
        try:
            result = subprocess.run(
                cmd,
                check=False,
                capture_output=not self.verbose,
                text=True,
            )
        except FileNotFoundError as e:
            print(f"[FAIL] {e}")
            print("       Install the tools with: pip install -e .[dev,test]")
            self.failed_checks.append(name)
            return False

        if result.returncode == 0:
            print(f"[PASS] {name}")
            self.passed_checks.append(name)
            return True

        if not self.verbose:
            print(result.stdout)
            print(result.stderr)
        print(f"[FAIL] {name}")
        self.failed_checks.append(name)
        return False

    def print_summary(self) -> None:
        print(f"\n{'=' * 70}\nSUMMARY\n{'=' * 70}")
        for check in self.passed_checks:
            print(f"  passed: {check}")
        for check in self.failed_checks:
            print(f"  failed: {check}")
        if not self.failed_checks:
            print("\nAll checks passed!")

    def run_all(self) -> int:
        for key, name, cmd in build_checks(self.fix):
            if key in self.skip_checks:
                print(f"Skipping {name}")
                continue
            self.run_command(cmd, name)

        self.print_summary()
        return 1 if self.failed_checks else 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Run local quality checks and tests with optional auto-fixes",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Automatically fix formatting and import ordering",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Stream tool output")
    parser.add_argument(
        "--skip",
        nargs="+",
        default=[],
        help="Skip checks (formatting, imports, lint, type, deadcode, complexity, tests)",
    )
    args = parser.parse_args()

    return CheckRunner(fix=args.fix, verbose=args.verbose, skip_checks=args.skip).run_all()


if __name__ == "__main__":
    sys.exit(main())
