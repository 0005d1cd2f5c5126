#!/usr/bin/env python3
"""
Run the sprite pipeline test suite through pytest.

Unit tests cover the pixel stages; integration tests write real files through
the pipelines and the CLI.
"""

import sys
import subprocess
from pathlib import Path

SCRIPTS_DIR = Path(__file__).resolve().parent
TEST_DIR = SCRIPTS_DIR / "sprite_pipeline" / "tests"
INTEGRATION_MODULES = ("test_pipeline.py", "test_cli_integration.py")


def build_command(test_type: str, verbose: bool, coverage: bool) -> list:
    cmd = [sys.executable, "-m", "pytest"]
    if verbose:
        cmd.append("-v")
    if coverage:
        cmd += ["--cov=sprite_pipeline", "--cov-report=term-missing"]

    if test_type == "integration":
        cmd += [str(TEST_DIR / name) for name in INTEGRATION_MODULES]
    else:
        cmd.append(str(TEST_DIR))
        if test_type == "unit":
            cmd += ["--ignore=" + str(TEST_DIR / name) for name in INTEGRATION_MODULES]
    return cmd


def run_tests(test_type: str = "all", verbose: bool = False, coverage: bool = False) -> int:
    cmd = build_command(test_type, verbose, coverage)
    print(" ".join(cmd))
    try:
        return subprocess.run(cmd, cwd=SCRIPTS_DIR).returncode
    except OSError as e:
        print(f"Could not start pytest: {e}")
        return 1


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run sprite pipeline tests")
    parser.add_argument("--type", choices=["all", "unit", "integration"], default="all")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--coverage", action="store_true", help="Report coverage with pytest-cov")
    args = parser.parse_args()

    sys.exit(run_tests(args.type, args.verbose, args.coverage))
