"""GitHub REST client for repository metadata and recursive tree listings."""

from __future__ import annotations

import http.client
import json
import os
import re
from typing import Any, List, Optional, Sequence, Tuple
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlparse
from urllib.request import Request, urlopen

from ..errors import InvalidRepositoryURL, RemoteFetchFailure
from ..logging import get_logger
from ..models import FileEntry, RepositoryInfo

_GITHUB_HOSTS = {"github.com", "www.github.com"}
_SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

logger = get_logger("resolver.github")


def parse_repository_url(url: str) -> Tuple[str, str]:
    """Return ``(owner, repo)`` for a ``https://github.com/<owner>/<repo>`` URL."""
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"}:
        raise InvalidRepositoryURL(f"Not an HTTP(S) URL: {url!r}")
    host = (parsed.hostname or "").lower()
    if host not in _GITHUB_HOSTS:
        raise InvalidRepositoryURL(f"Not a github.com URL: {url!r}")

    segments = [part for part in parsed.path.split("/") if part]
    if len(segments) < 2:
        raise InvalidRepositoryURL(f"Expected github.com/<owner>/<repo>, got {url!r}")

    owner, repo = segments[0], segments[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not (_SEGMENT_PATTERN.match(owner) and _SEGMENT_PATTERN.match(repo)):
        raise InvalidRepositoryURL(f"Invalid owner or repository name in {url!r}")
    return owner, repo


class GitHubClient:
    """Reads public repository data from the GitHub REST API."""

    DEFAULT_API_BASE = "https://api.github.com"
    ENV_API_BASE_KEYS = ("REPOREADME_GITHUB_API_BASE", "GITHUB_API_URL")
    USER_AGENT = "reporeadme"

    def __init__(
        self,
        api_base: str | None = None,
        *,
        request_timeout: Optional[float] = 15.0,
    ) -> None:
        self.api_base = self._resolve_api_base(api_base)
        self.request_timeout = request_timeout

    def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """Fetch repository name and description."""
        payload = self._get_json(f"{self.api_base}/repos/{owner}/{repo}")
        if not isinstance(payload, dict):
            raise RemoteFetchFailure("Repository response is not a JSON object")

        name = payload.get("name")
        if not isinstance(name, str) or not name:
            raise RemoteFetchFailure("Repository response is missing field 'name'")
        description = payload.get("description")
        if description is not None and not isinstance(description, str):
            raise RemoteFetchFailure("Repository field 'description' has the wrong type")

        html_url = payload.get("html_url")
        if not isinstance(html_url, str) or not html_url:
            html_url = f"https://github.com/{owner}/{repo}"
        html_url = html_url.rstrip("/")

        return RepositoryInfo(
            name=name,
            description=description or None,
            issues_link=f"{html_url}/issues",
            url=html_url,
        )

    def fetch_tree(self, owner: str, repo: str, branch: str = "HEAD") -> List[FileEntry]:
        """Fetch the recursive file tree of ``branch`` as a flat entry list."""
        ref = quote(branch, safe="")
        payload = self._get_json(
            f"{self.api_base}/repos/{owner}/{repo}/git/trees/{ref}?recursive=1"
        )
        if not isinstance(payload, dict):
            raise RemoteFetchFailure("Tree response is not a JSON object")
        tree = payload.get("tree")
        if not isinstance(tree, list):
            raise RemoteFetchFailure("Tree response is missing field 'tree'")
        if payload.get("truncated"):
            logger.warning("GitHub truncated the tree listing for %s/%s", owner, repo)

        entries: List[FileEntry] = []
        for index, item in enumerate(tree):
            if not isinstance(item, dict):
                raise RemoteFetchFailure(f"Tree entry {index} is not a JSON object")
            path = item.get("path")
            if not isinstance(path, str) or not path:
                raise RemoteFetchFailure(f"Tree entry {index} is missing field 'path'")
            kind = "dir" if item.get("type") in {"tree", "commit"} else "file"
            entries.append(FileEntry(name=path.rsplit("/", 1)[-1], path=path, kind=kind))
        return entries

    def _get_json(self, url: str) -> Any:
        request = Request(
            url,
            headers={
                "Accept": "application/vnd.github+json",
                "User-Agent": self.USER_AGENT,
            },
            method="GET",
        )
        logger.debug("GET %s", url)
        try:
            with urlopen(request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            raise RemoteFetchFailure(f"GitHub request failed with status {exc.code}: {url}") from exc
        except URLError as exc:
            raise RemoteFetchFailure(f"GitHub request failed: {exc.reason}") from exc
        except (OSError, http.client.HTTPException) as exc:
            # Timeouts, resets and truncated bodies surface unwrapped from getresponse()/read().
            raise RemoteFetchFailure(f"GitHub request failed: {exc!r}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RemoteFetchFailure("GitHub returned invalid JSON") from exc

    def _resolve_api_base(self, api_base: str | None) -> str:
        if api_base:
            return api_base.rstrip("/")
        env_value = _first_env_value(self.ENV_API_BASE_KEYS)
        if env_value:
            return env_value.rstrip("/")
        return self.DEFAULT_API_BASE


def _first_env_value(keys: Sequence[str]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


__all__ = ["GitHubClient", "parse_repository_url"]
