"""Prompt builders for the generated README fields."""

from __future__ import annotations

from .builder import PromptBuilder, PromptSlot

__all__ = ["PromptBuilder", "PromptSlot"]
