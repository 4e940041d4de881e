"""Turns a repository URL or a list of uploaded paths into file entries."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List

from ..errors import RemoteFetchFailure
from ..logging import get_logger
from ..models import FileEntry, RepositoryInfo
from .github import GitHubClient, parse_repository_url
from .local import entries_from_paths, repository_from_paths, scan_directory


@dataclass
class ResolvedInput:
    """File entries plus best-effort repository identity."""

    repository: RepositoryInfo
    entries: List[FileEntry] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)


class InputResolver:
    """Resolves either input mode into a ``ResolvedInput``."""

    def __init__(self, client: GitHubClient | None = None, *, branch: str = "HEAD") -> None:
        self.client = client or GitHubClient()
        self.branch = branch or "HEAD"
        self.logger = get_logger("resolver")

    def resolve_url(self, url: str) -> ResolvedInput:
        """Fetch metadata and tree concurrently; each failure falls back to placeholders.

        Raises ``InvalidRepositoryURL`` when ``url`` is not a GitHub repository URL.
        """
        owner, repo = parse_repository_url(url)
        self.logger.info("Fetching %s/%s from GitHub", owner, repo)

        with ThreadPoolExecutor(max_workers=2) as pool:
            info_future = pool.submit(self.client.fetch_repository, owner, repo)
            tree_future = pool.submit(self.client.fetch_tree, owner, repo, self.branch)

        messages: List[str] = []
        try:
            repository = info_future.result()
        except RemoteFetchFailure as exc:
            self.logger.warning("Repository metadata unavailable: %s", exc)
            messages.append(f"Could not fetch repository details ({exc}); using placeholders.")
            repository = RepositoryInfo()

        try:
            entries = tree_future.result()
        except RemoteFetchFailure as exc:
            self.logger.warning("Repository tree unavailable: %s", exc)
            messages.append(f"Could not fetch repository files ({exc}); continuing without them.")
            entries = []

        self.logger.debug("Resolved %d entries for %s/%s", len(entries), owner, repo)
        return ResolvedInput(repository=repository, entries=entries, messages=messages)

    def resolve_paths(self, paths: Iterable[str]) -> ResolvedInput:
        """Build entries from browser-style relative paths of an uploaded folder."""
        path_list = list(paths)
        entries = entries_from_paths(path_list)
        repository = repository_from_paths(path_list)
        self.logger.debug("Resolved %d uploaded entries", len(entries))
        return ResolvedInput(repository=repository, entries=entries)


__all__ = [
    "GitHubClient",
    "InputResolver",
    "ResolvedInput",
    "parse_repository_url",
    "scan_directory",
]
