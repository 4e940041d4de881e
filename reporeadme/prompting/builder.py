"""Builds the prompts for the generated README fields."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..models import FileEntry, TechnologyProfile

_SAMPLE_PATH_LIMIT = 25


@dataclass(frozen=True)
class PromptSlot:
    """One free-text field of the README and the prompt that fills it."""

    name: str
    label: str
    prompt: str


class PromptBuilder:
    """Assembles slot prompts from the project name and technology profile."""

    def features(self, project_name: str, profile: TechnologyProfile) -> PromptSlot:
        prompt = (
            "Generate a brief, Markdown-formatted list of 3 key features for a project "
            f'with the name "{project_name}" and inferred tech stack: '
            f"{self._technologies(profile)}. Format as a Markdown list."
        )
        return PromptSlot(name="features", label="Generating features...", prompt=prompt)

    def tech_stack(self, project_name: str, profile: TechnologyProfile) -> PromptSlot:
        analysis = json.dumps(profile.as_dict(), sort_keys=True)
        prompt = (
            "Generate a brief, Markdown-formatted list of 3-5 key technologies for a "
            f'project named "{project_name}" with the following file analysis: {analysis}. '
            "Format as a Markdown list."
        )
        return PromptSlot(name="tech_stack", label="Generating tech stack...", prompt=prompt)

    def description(
        self,
        project_name: str,
        profile: TechnologyProfile,
        entries: Sequence[FileEntry],
    ) -> PromptSlot:
        lines: List[str] = [
            f'Write a short description (one or two sentences) of a software project named "{project_name}".',
            f"Inferred tech stack: {self._technologies(profile)}.",
        ]
        sample = self._sample_paths(entries)
        if sample:
            lines.append("Some of its files:")
            lines.extend(f"- {path}" for path in sample)
        lines.append("Return plain prose without a heading.")
        return PromptSlot(
            name="description",
            label="Generating description...",
            prompt="\n".join(lines),
        )

    @staticmethod
    def _technologies(profile: TechnologyProfile) -> str:
        detected = profile.detected()
        return ", ".join(detected) if detected else "unknown"

    @staticmethod
    def _sample_paths(entries: Iterable[FileEntry]) -> List[str]:
        sample: List[str] = []
        for entry in entries:
            if entry.kind != "file":
                continue
            sample.append(entry.path)
            if len(sample) >= _SAMPLE_PATH_LIMIT:
                break
        return sample


__all__ = ["PromptBuilder", "PromptSlot"]
