"""File-name heuristics that derive a technology profile."""

from __future__ import annotations

from typing import Iterable

from ..models import FileEntry, TechnologyProfile

_PYTHON_MANIFESTS = {"requirements.txt"}
_TYPESCRIPT_SUFFIXES = (".ts", ".tsx")
# Plain .js files count as React as well; kept broad on purpose.
_REACT_SUFFIXES = (".jsx", ".tsx", ".js")


def classify(entries: Iterable[FileEntry]) -> TechnologyProfile:
    """Scan entries once and return the technology flags they imply."""
    flags = {
        "node": False,
        "python": False,
        "typescript": False,
        "react": False,
        "next": False,
        "docker": False,
        "sql": False,
    }
    seen_any = False

    for entry in entries:
        seen_any = True
        name = entry.name
        if name == "package.json":
            flags["node"] = True
        if name in _PYTHON_MANIFESTS or name.endswith(".py"):
            flags["python"] = True
        if name.endswith(_TYPESCRIPT_SUFFIXES):
            flags["typescript"] = True
        if name.endswith(_REACT_SUFFIXES) or "react" in name:
            flags["react"] = True
        if name.startswith("next.config."):
            flags["next"] = True
        if name.startswith("Dockerfile"):
            flags["docker"] = True
        if name.endswith(".sql"):
            flags["sql"] = True

    return TechnologyProfile(empty=not seen_any, **flags)


__all__ = ["classify"]
