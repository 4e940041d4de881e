"""Completion endpoint client."""

from .generator import CompletionRequest, CompletionResult, TextGenerator

__all__ = ["CompletionRequest", "CompletionResult", "TextGenerator"]
