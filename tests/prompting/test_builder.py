"""Tests for the README field prompts."""

from __future__ import annotations

import json

from reporeadme.analyzers import classify
from reporeadme.models import TechnologyProfile
from reporeadme.prompting import PromptBuilder
from tests._fixtures.fakes import entries


def test_features_prompt_mentions_name_and_technologies() -> None:
    profile = classify(entries("package.json", "src/index.ts"))

    slot = PromptBuilder().features("widget", profile)

    assert slot.name == "features"
    assert slot.label == "Generating features..."
    assert '"widget"' in slot.prompt
    assert "Node.js, TypeScript" in slot.prompt
    assert "Markdown list" in slot.prompt


def test_tech_stack_prompt_embeds_profile_json() -> None:
    profile = TechnologyProfile(python=True, docker=True)

    slot = PromptBuilder().tech_stack("api", profile)

    expected = json.dumps(profile.as_dict(), sort_keys=True)
    assert expected in slot.prompt
    assert '"python": true' in slot.prompt
    assert "3-5 key technologies" in slot.prompt


def test_empty_profile_reads_as_unknown() -> None:
    slot = PromptBuilder().features("project-name", classify([]))

    assert "inferred tech stack: unknown" in slot.prompt


def test_description_prompt_samples_file_paths_only() -> None:
    listing = entries("src/", *[f"src/module_{index}.py" for index in range(40)])

    slot = PromptBuilder().description("tool", classify(listing), listing)

    assert slot.name == "description"
    assert "- src/module_0.py" in slot.prompt
    assert "- src/module_24.py" in slot.prompt
    assert "- src/module_25.py" not in slot.prompt
    assert "- src\n" not in slot.prompt


def test_description_prompt_without_files() -> None:
    slot = PromptBuilder().description("tool", classify([]), [])

    assert "Some of its files" not in slot.prompt
    assert slot.prompt.endswith("Return plain prose without a heading.")
