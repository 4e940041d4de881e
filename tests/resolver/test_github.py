"""Tests for the GitHub REST client and URL parsing."""

from __future__ import annotations

import http.client
import io
import json
from urllib.error import HTTPError, URLError

import pytest

from reporeadme.errors import InvalidRepositoryURL, RemoteFetchFailure
from reporeadme.models import FileEntry
from reporeadme.resolver.github import GitHubClient, parse_repository_url


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/acme/widget",
        "https://github.com/acme/widget/",
        "https://github.com/acme/widget.git",
        "http://www.github.com/acme/widget",
        "https://github.com/acme/widget/tree/main/src",
        "  https://GitHub.com/acme/widget  ",
    ],
)
def test_parse_repository_url_accepts_github_urls(url: str) -> None:
    assert parse_repository_url(url) == ("acme", "widget")


@pytest.mark.parametrize(
    "url",
    [
        "",
        "acme/widget",
        "github.com/acme/widget",
        "ftp://github.com/acme/widget",
        "https://gitlab.com/acme/widget",
        "https://github.com/acme",
        "https://github.com/acme/wid get",
    ],
)
def test_parse_repository_url_rejects_other_inputs(url: str) -> None:
    with pytest.raises(InvalidRepositoryURL):
        parse_repository_url(url)


class _FakeResponse:
    def __init__(self, raw: bytes) -> None:
        self._raw = raw

    def read(self) -> bytes:
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def _serve(monkeypatch: pytest.MonkeyPatch, payload, captured: list | None = None) -> None:
    def fake_urlopen(request, timeout=None):
        if captured is not None:
            captured.append(
                {
                    "url": request.full_url,
                    "headers": {k.lower(): v for k, v in request.header_items()},
                    "timeout": timeout,
                }
            )
        if isinstance(payload, Exception):
            raise payload
        raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
        return _FakeResponse(raw)

    monkeypatch.setattr("reporeadme.resolver.github.urlopen", fake_urlopen)


def test_fetch_repository_reads_name_and_description(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list = []
    _serve(
        monkeypatch,
        {
            "name": "widget",
            "description": "Widgets for everyone",
            "html_url": "https://github.com/acme/widget",
        },
        captured,
    )

    info = GitHubClient(request_timeout=5.0).fetch_repository("acme", "widget")

    assert info.name == "widget"
    assert info.description == "Widgets for everyone"
    assert info.issues_link == "https://github.com/acme/widget/issues"
    assert info.url == "https://github.com/acme/widget"
    assert captured[0]["url"] == "https://api.github.com/repos/acme/widget"
    assert captured[0]["headers"]["accept"] == "application/vnd.github+json"
    assert captured[0]["timeout"] == 5.0


def test_fetch_repository_allows_null_description(monkeypatch: pytest.MonkeyPatch) -> None:
    _serve(monkeypatch, {"name": "widget", "description": None})

    info = GitHubClient().fetch_repository("acme", "widget")

    assert info.description is None
    assert info.issues_link == "https://github.com/acme/widget/issues"


@pytest.mark.parametrize(
    ("payload", "detail"),
    [
        ({"description": "x"}, "'name'"),
        ({"name": 7}, "'name'"),
        ({"name": "widget", "description": 3}, "'description'"),
        ([], "JSON object"),
        (b"<html>", "invalid JSON"),
    ],
)
def test_fetch_repository_rejects_bad_shapes(
    monkeypatch: pytest.MonkeyPatch, payload, detail: str
) -> None:
    _serve(monkeypatch, payload)

    with pytest.raises(RemoteFetchFailure, match=detail):
        GitHubClient().fetch_repository("acme", "widget")


def test_fetch_repository_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _serve(
        monkeypatch,
        HTTPError("https://api.github.com/repos/acme/widget", 404, "Not Found", None, io.BytesIO(b"")),
    )

    with pytest.raises(RemoteFetchFailure, match="404"):
        GitHubClient().fetch_repository("acme", "widget")


def test_fetch_repository_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _serve(monkeypatch, URLError("offline"))

    with pytest.raises(RemoteFetchFailure, match="offline"):
        GitHubClient().fetch_repository("acme", "widget")


@pytest.mark.parametrize(
    "error",
    [TimeoutError("timed out"), ConnectionResetError("reset"), http.client.RemoteDisconnected("closed")],
)
def test_fetch_tree_socket_errors_are_fetch_failures(
    monkeypatch: pytest.MonkeyPatch, error: Exception
) -> None:
    _serve(monkeypatch, error)

    with pytest.raises(RemoteFetchFailure):
        GitHubClient().fetch_tree("acme", "widget")


def test_truncated_body_is_fetch_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    class _TruncatedResponse(_FakeResponse):
        def read(self) -> bytes:
            raise http.client.IncompleteRead(self._raw)

    monkeypatch.setattr(
        "reporeadme.resolver.github.urlopen",
        lambda request, timeout=None: _TruncatedResponse(b'{"name"'),
    )

    with pytest.raises(RemoteFetchFailure, match="IncompleteRead"):
        GitHubClient().fetch_repository("acme", "widget")


def test_fetch_tree_maps_entries(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list = []
    _serve(
        monkeypatch,
        {
            "tree": [
                {"path": "package.json", "type": "blob"},
                {"path": "src", "type": "tree"},
                {"path": "src/index.ts", "type": "blob"},
                {"path": "vendor/lib", "type": "commit"},
            ]
        },
        captured,
    )

    entries = GitHubClient("https://ghe.example/api/v3/").fetch_tree("acme", "widget")

    assert entries == [
        FileEntry(name="package.json", path="package.json", kind="file"),
        FileEntry(name="src", path="src", kind="dir"),
        FileEntry(name="index.ts", path="src/index.ts", kind="file"),
        FileEntry(name="lib", path="vendor/lib", kind="dir"),
    ]
    assert captured[0]["url"] == (
        "https://ghe.example/api/v3/repos/acme/widget/git/trees/HEAD?recursive=1"
    )


def test_fetch_tree_quotes_branch(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list = []
    _serve(monkeypatch, {"tree": []}, captured)

    GitHubClient().fetch_tree("acme", "widget", "feature/x")

    assert captured[0]["url"].endswith("/git/trees/feature%2Fx?recursive=1")


@pytest.mark.parametrize(
    ("payload", "detail"),
    [
        ({"message": "Not Found"}, "'tree'"),
        ({"tree": [{"type": "blob"}]}, "'path'"),
        ({"tree": ["package.json"]}, "JSON object"),
    ],
)
def test_fetch_tree_rejects_bad_shapes(
    monkeypatch: pytest.MonkeyPatch, payload, detail: str
) -> None:
    _serve(monkeypatch, payload)

    with pytest.raises(RemoteFetchFailure, match=detail):
        GitHubClient().fetch_tree("acme", "widget")


def test_api_base_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPOREADME_GITHUB_API_BASE", "http://localhost:9000/")

    assert GitHubClient().api_base == "http://localhost:9000"
