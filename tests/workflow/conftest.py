from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def repo_root() -> Path:
    # tests/workflow/ -> tests -> repo_root
    return Path(__file__).resolve().parents[2]


@pytest.fixture(scope="session")
def venv_python(repo_root: Path) -> str:
    # Prefer the project's virtualenv; fall back to the running interpreter
    win_path = repo_root / ".venv" / "Scripts" / "python.exe"
    posix_path = repo_root / ".venv" / "bin" / "python"
    if win_path.exists():
        return str(win_path)
    if posix_path.exists():
        return str(posix_path)
    return sys.executable


def run_cli(args: list[str], cwd: Path, env: dict | None = None) -> subprocess.CompletedProcess:
    # Execute a command without invoking a shell to avoid quoting issues
    merged_env = dict(os.environ)
    # Scripts import shopdb from the repo root
    py_path = merged_env.get("PYTHONPATH", "")
    if str(cwd) not in (py_path.split(os.pathsep) if py_path else []):
        merged_env["PYTHONPATH"] = py_path + (os.pathsep if py_path else "") + str(cwd)
    # Keep an outer SHOPDB_DB_URL from leaking into the scripts' defaults
    merged_env.pop("SHOPDB_DB_URL", None)
    merged_env.pop("SHOPDB_DB_CONFIG", None)
    if env:
        merged_env.update(env)
    return subprocess.run(args, cwd=str(cwd), capture_output=True, text=True, env=merged_env)


@pytest.fixture
def cli(repo_root: Path, venv_python: str):
    def _runner(script: str, *argv: str, env: dict | None = None) -> subprocess.CompletedProcess:
        return run_cli([venv_python, str(repo_root / script), *argv], repo_root, env=env)
    return _runner
