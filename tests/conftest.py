from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder

_API_KEY_ENV = ("REPOREADME_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY")


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project folder builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep credentials and endpoint overrides from the host out of tests."""
    for key in (
        *_API_KEY_ENV,
        "REPOREADME_MODEL",
        "GEMINI_MODEL",
        "REPOREADME_BASE_URL",
        "REPOREADME_GITHUB_API_BASE",
        "GITHUB_API_URL",
    ):
        monkeypatch.delenv(key, raising=False)
