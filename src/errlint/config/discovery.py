"""Config file discovery and loading.

Walk-up finder locates ``errlint.toml``, or a ``pyproject.toml`` that has a
``[tool.errlint]`` table, similar to how git finds .git/.
Supports ERRLINT_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "errlint.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "ERRLINT_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return isinstance(data.get("tool", {}).get("errlint"), dict)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for errlint configuration.

    In each directory ``errlint.toml`` wins over ``pyproject.toml``.
    Returns the path to the config file, or None if not found.
    Checks ERRLINT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config_data(path: Path) -> dict[str, Any]:
    """Return the errlint table of *path*.

    ``pyproject.toml`` contributes its ``[tool.errlint]`` table; any other
    file is errlint configuration from the top level.
    Raises ``tomllib.TOMLDecodeError`` on invalid TOML.
    """
    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        section = data.get("tool", {}).get("errlint", {})
        return section if isinstance(section, dict) else {}
    return data

