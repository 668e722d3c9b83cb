"""
Layered .env loading.

RUNWAY_* settings (and anything a toolchain reads from the environment) may
live in .env files:

- ``$XDG_CONFIG_HOME/runway/.env`` for the user
- ``.env`` and ``.env.local`` in the project directory

Precedence: process environment > project files > user files. A value that
was already exported in the shell is never replaced.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

PROJECT_ENV_FILES = (".env", ".env.local")


def user_env_files() -> list[Path]:
    xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return [Path(xdg_home) / "runway" / ".env"]


def project_env_files(project_dir: Path) -> list[Path]:
    return [project_dir / name for name in PROJECT_ENV_FILES]


def read_env_file(path: Path) -> dict[str, str]:
    """Variables defined in path; keys without a value are dropped."""
    if not path.is_file():
        return {}
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def _apply(paths: Iterable[Path], replaceable: set[str]) -> set[str]:
    applied: set[str] = set()
    for path in paths:
        values = read_env_file(Path(path))
        for key, value in values.items():
            if key in os.environ and key not in replaceable:
                continue
            os.environ[key] = value
            applied.add(key)
        if values:
            logger.debug("Loaded %d variables from %s", len(values), path)
    return applied


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> None:
    """
    Load user, then project .env files into os.environ.

    Args:
        project_dir: Directory holding the project files (defaults to cwd)
        user_env_paths: User files, overriding the XDG default
        project_env_paths: Project files, overriding .env and .env.local
    """
    if user_env_paths is None:
        user_env_paths = user_env_files()
    if project_env_paths is None:
        project_env_paths = project_env_files(project_dir or Path.cwd())

    from_user = _apply(user_env_paths, replaceable=set())
    _apply(project_env_paths, replaceable=from_user)
