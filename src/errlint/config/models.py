"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``errlint.toml`` (or
``[tool.errlint]`` in ``pyproject.toml``) only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

from errlint.marker import MARKER_NAME

# --- errlint.toml sections ---


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    include: tuple[str, ...] = ("*.py",)
    exclude: tuple[str, ...] = ()
    marker_names: tuple[str, ...] = (MARKER_NAME,)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True

