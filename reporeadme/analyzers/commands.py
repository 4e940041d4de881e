"""Install/run/test command inference from a technology profile."""

from __future__ import annotations

from ..models import PLACEHOLDER_COMMAND, CommandSet, TechnologyProfile

NODE_COMMANDS = CommandSet(install="npm install", run="npm start", test="npm test")
PYTHON_COMMANDS = CommandSet(
    install="pip install -r requirements.txt",
    run="python app.py",
    test="pytest",
)
GENERIC_COMMANDS = CommandSet(
    install=PLACEHOLDER_COMMAND,
    run=PLACEHOLDER_COMMAND,
    test=PLACEHOLDER_COMMAND,
)


def infer_commands(profile: TechnologyProfile) -> CommandSet:
    """Return the command set for a profile; Node wins over Python."""
    if profile.node:
        return NODE_COMMANDS
    if profile.python:
        return PYTHON_COMMANDS
    return GENERIC_COMMANDS


__all__ = ["GENERIC_COMMANDS", "NODE_COMMANDS", "PYTHON_COMMANDS", "infer_commands"]
