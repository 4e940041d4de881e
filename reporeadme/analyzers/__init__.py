"""Technology profiling and command inference over file listings."""

from __future__ import annotations

from .commands import GENERIC_COMMANDS, NODE_COMMANDS, PYTHON_COMMANDS, infer_commands
from .profile import classify

__all__ = [
    "GENERIC_COMMANDS",
    "NODE_COMMANDS",
    "PYTHON_COMMANDS",
    "classify",
    "infer_commands",
]
