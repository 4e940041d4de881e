"""Local folder inputs: browser-style relative paths and directory walks."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List

from ..models import PLACEHOLDER_ISSUES_LINK, PLACEHOLDER_NAME, FileEntry, RepositoryInfo

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".next",
    ".idea",
    ".vscode",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


def entries_from_paths(paths: Iterable[str]) -> List[FileEntry]:
    """Map relative paths to entries; names without a dot are treated as directories."""
    entries: List[FileEntry] = []
    for raw in paths:
        path = _normalise(raw)
        if not path:
            continue
        name = path.rsplit("/", 1)[-1]
        kind = "file" if "." in name else "dir"
        entries.append(FileEntry(name=name, path=path, kind=kind))
    return entries


def repository_from_paths(paths: Iterable[str]) -> RepositoryInfo:
    """Take the project name from the top-level folder of the first path."""
    for raw in paths:
        path = _normalise(raw)
        if path:
            return RepositoryInfo(
                name=path.split("/", 1)[0] or PLACEHOLDER_NAME,
                description=None,
                issues_link=PLACEHOLDER_ISSUES_LINK,
            )
    return RepositoryInfo()


def scan_directory(root: Path) -> Iterator[str]:
    """Yield ``<folder>/<relative path>`` for every file below ``root``."""
    root = root.expanduser().resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    prefix = root.name
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        rel_dir = Path(current).relative_to(root).as_posix()
        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES:
                continue
            if rel_dir == ".":
                yield f"{prefix}/{filename}"
            else:
                yield f"{prefix}/{rel_dir}/{filename}"


def _normalise(path: str) -> str:
    return path.replace("\\", "/").strip().strip("/")


__all__ = ["entries_from_paths", "repository_from_paths", "scan_directory"]
