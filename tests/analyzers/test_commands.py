"""Tests for install/run/test command inference."""

from __future__ import annotations

from reporeadme.analyzers import (
    GENERIC_COMMANDS,
    NODE_COMMANDS,
    PYTHON_COMMANDS,
    classify,
    infer_commands,
)
from reporeadme.models import PLACEHOLDER_COMMAND, TechnologyProfile
from tests._fixtures.fakes import entries


def test_node_commands() -> None:
    commands = infer_commands(TechnologyProfile(node=True))

    assert commands == NODE_COMMANDS
    assert (commands.install, commands.run, commands.test) == ("npm install", "npm start", "npm test")


def test_python_commands() -> None:
    commands = infer_commands(TechnologyProfile(python=True))

    assert commands == PYTHON_COMMANDS
    assert commands.install == "pip install -r requirements.txt"
    assert commands.run == "python app.py"
    assert commands.test == "pytest"


def test_node_takes_precedence_over_python() -> None:
    profile = classify(entries("requirements.txt", "package.json"))

    assert infer_commands(profile) == NODE_COMMANDS


def test_empty_listing_gets_placeholder_commands() -> None:
    commands = infer_commands(classify([]))

    assert commands == GENERIC_COMMANDS
    assert {commands.install, commands.run, commands.test} == {PLACEHOLDER_COMMAND}


def test_other_technologies_do_not_pick_commands() -> None:
    profile = TechnologyProfile(typescript=True, react=True, docker=True, sql=True)

    assert infer_commands(profile) == GENERIC_COMMANDS
