"""
Project metadata helpers for log enrichment (service name, version).

Version lookup prefers the installed distribution (importlib.metadata) and falls back
to the nearest pyproject.toml, so both installed and source-tree runs label logs.
"""

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def get_pyproject_value(key: str, start: str | Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Return a dot-separated `key` (e.g. "project.version") from the nearest pyproject.toml,
    or `default` if the file is missing, unreadable, or lacks the key.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=max_up)
    if pyproject is None or not key:
        return default

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    cur: Any = data
    for part in key.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return default
    return cur


def get_project_name(start: Path | str | None = None, max_up: int = 5, default: str | None = None) -> str | None:
    return get_pyproject_value("project.name", start=start, max_up=max_up, default=default)


def get_project_version(
    start: Path | str | None = None,
    max_up: int = 5,
    default: str = "unknown",
    distribution: str = "users-api",
) -> str:
    try:
        return importlib_metadata.version(distribution)
    except importlib_metadata.PackageNotFoundError:
        pass
    value = get_pyproject_value("project.version", start=start, max_up=max_up, default=None)
    return value if value is not None else default


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
