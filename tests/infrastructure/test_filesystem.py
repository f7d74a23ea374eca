"""Tests for Python source discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from errlint.infrastructure.filesystem import find_python_files


def _touch(root: Path, *relative: str) -> None:
    for rel in relative:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")


class TestFindPythonFiles:
    def test_walks_directories_sorted(self, tmp_path: Path) -> None:
        _touch(tmp_path, "b.py", "a.py", "pkg/c.py", "notes.txt")
        found = find_python_files([tmp_path])
        assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a.py", "b.py", "pkg/c.py"]

    def test_skips_tool_directories(self, tmp_path: Path) -> None:
        _touch(tmp_path, "a.py", ".venv/lib/x.py", "__pycache__/y.py", "dist/z.py", "x.egg-info/w.py")
        assert find_python_files([tmp_path]) == [tmp_path / "a.py"]

    def test_exclude_globs(self, tmp_path: Path) -> None:
        _touch(tmp_path, "a.py", "tests/test_a.py")
        found = find_python_files([tmp_path], exclude=("*/tests/*",))
        assert found == [tmp_path / "a.py"]

    def test_explicit_file_ignores_include(self, tmp_path: Path) -> None:
        _touch(tmp_path, "codes.pyi")
        path = tmp_path / "codes.pyi"
        assert find_python_files([path]) == [path]

    def test_explicit_file_honours_exclude(self, tmp_path: Path) -> None:
        _touch(tmp_path, "a.py")
        assert find_python_files([tmp_path / "a.py"], exclude=("a.py",)) == []

    def test_deduplicates(self, tmp_path: Path) -> None:
        _touch(tmp_path, "a.py")
        assert find_python_files([tmp_path, tmp_path / "a.py"]) == [tmp_path / "a.py"]

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_python_files([tmp_path / "missing"])
