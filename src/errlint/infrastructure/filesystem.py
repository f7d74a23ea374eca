"""Python source discovery.

Expands the paths given on the command line into a sorted, de-duplicated
list of ``.py`` files, honouring include/exclude globs from ``[scan]``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from fnmatch import fnmatch
from pathlib import Path

# Directories never worth descending into.
_SKIP_DIRS = frozenset(
    {".git", ".hg", ".svn", ".venv", "venv", ".tox", ".nox", "__pycache__", "build", "dist"}
)


def _matches(path: Path, patterns: Iterable[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch(posix, pattern) or fnmatch(path.name, pattern) for pattern in patterns)


def _walk(root: Path) -> Iterable[Path]:
    for child in sorted(root.iterdir()):
        if child.is_dir():
            if child.name in _SKIP_DIRS or child.name.endswith(".egg-info"):
                continue
            yield from _walk(child)
        elif child.is_file():
            yield child


def find_python_files(
    paths: Sequence[Path],
    *,
    include: Sequence[str] = ("*.py",),
    exclude: Sequence[str] = (),
) -> list[Path]:
    """Return every matching file under *paths*.

    Explicitly named files are kept even if they do not match *include*,
    but *exclude* always applies.
    """
    found: dict[Path, None] = {}
    for path in paths:
        if path.is_file():
            if not _matches(path, exclude):
                found[path] = None
            continue
        if not path.is_dir():
            msg = f"Path does not exist: {path}"
            raise FileNotFoundError(msg)
        for candidate in _walk(path):
            if _matches(candidate, include) and not _matches(candidate, exclude):
                found[candidate] = None
    return sorted(found)
