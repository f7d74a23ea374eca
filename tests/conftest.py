"""Shared pytest fixtures and test helpers for errlint tests."""

from __future__ import annotations

import importlib
import sys
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from errlint.config.settings import ErrlintSettings

GOOD_ENUM = '''\
from enum import Enum

from errlint import valid_error_code


@valid_error_code()
class ErrorCode(Enum):
    SUCCESS = (0, "ok")
    PARAM_ERROR = (11220001, "Parameter error")
    NOT_FOUND = (11220002, "Not found")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
'''

BAD_ENUM = '''\
from enum import Enum

from errlint import valid_error_code


@valid_error_code()
class BadCode(Enum):
    OK = (0, "ok")
    A = (11220001, "x")
    B = (11220001, "y")
    C = (9912345, "bad")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
'''


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as cwd, with env overrides cleared.

    An ``errlint.toml`` is created so config discovery stops here instead
    of walking up into unrelated directories.
    """
    for name in ("ERRLINT_CONFIG", "ERRLINT_QUIET", "ERRLINT_JSON_OUTPUT", "ERRLINT_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "errlint.toml").write_text("")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_source(project_root: Path) -> Callable[[str, str], Path]:
    """Write a dedented Python file under the project root."""

    def _write(relative: str, text: str) -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text))
        return path

    return _write


@pytest.fixture
def settings(project_root: Path) -> ErrlintSettings:
    return ErrlintSettings.from_cli(project_root=project_root)


@pytest.fixture
def importable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[str, str], str]]:
    """Write a module into an import root and return its name.

    Module names are made unique per test and purged from ``sys.modules``
    afterwards so runtime scans never see a stale import.
    """
    root = tmp_path / "importable"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    created: list[str] = []

    def _write(name: str, text: str) -> str:
        module_name = f"{name}_{abs(hash(str(tmp_path))) % 10**8}"
        (root / f"{module_name}.py").write_text(textwrap.dedent(text))
        importlib.invalidate_caches()
        created.append(module_name)
        return module_name

    yield _write
    for module_name in created:
        sys.modules.pop(module_name, None)
