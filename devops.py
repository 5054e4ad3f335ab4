"""Development tasks for sunshine.

Usage: python devops.py <task>
Tasks: fmt, lint, test, clean

Ruff reads its settings from [tool.ruff] and pytest from
[tool.pytest.ini_options] in pyproject.toml. Install both with
``pip install -e .[dev]``.
"""

import shutil
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent

# Generated directories removed by `clean`, relative to the project root
ARTIFACT_DIRS = (".pytest_cache", ".ruff_cache", "build", "dist")


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of commands in the project root, exiting on first failure."""
    for cmd in commands:
        print(f"$ {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, cwd=ROOT)  # nosec: B603
        except FileNotFoundError:
            print(f"Command not found: {cmd[0]} (install the dev extra)", file=sys.stderr)
            sys.exit(127)
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format the codebase and apply safe lint fixes."""
    _run([["ruff", "format", "."], ["ruff", "check", "--fix", "."]])


def lint() -> None:
    """Check formatting and lint rules without changing files."""
    _run([["ruff", "format", "--check", "."], ["ruff", "check", "."]])


def test() -> None:
    """Run the unit tests."""
    _run([[sys.executable, "-m", "pytest", "-q"]])


def clean() -> None:
    """Remove caches, bytecode and build output."""
    for cache in ROOT.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
    for name in ARTIFACT_DIRS:
        shutil.rmtree(ROOT / name, ignore_errors=True)
    for egg_info in ROOT.glob("app/*.egg-info"):
        shutil.rmtree(egg_info, ignore_errors=True)
    print("Removed caches and build artifacts.")


TASKS = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(f"Usage: python devops.py <{'|'.join(TASKS)}>", file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
