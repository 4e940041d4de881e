"""Templated README generation from GitHub repositories or uploaded folders."""

__version__ = "0.1.0"
