from __future__ import annotations

from pathlib import Path


def repo_root() -> Path:
    """
    Find the repository root by walking upward until we find pyproject.toml.
    This is robust regardless of where tests live.
    """
    start = Path(__file__).resolve()
    for p in [start] + list(start.parents):
        if (p / "pyproject.toml").exists():
            return p
    raise RuntimeError("repo_root(): could not find pyproject.toml walking upward")


def sample_assets_dir() -> Path:
    """
    Committed sample data for tests and users.
    """
    return repo_root() / "tests" / "sample_assets"
