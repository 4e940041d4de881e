"""Exception taxonomy for README generation."""

from __future__ import annotations


class ReadmeError(RuntimeError):
    """Base class for failures raised by reporeadme components."""


class InvalidRepositoryURL(ReadmeError):
    """Raised when a repository URL does not match github.com/<owner>/<repo>."""


class RemoteFetchFailure(ReadmeError):
    """Raised when GitHub metadata or tree data cannot be fetched or decoded."""


class GenerationFailure(ReadmeError):
    """Raised when the completion endpoint fails to produce text."""


class RateLimited(GenerationFailure):
    """Raised when the completion endpoint keeps answering 429 after all retries."""


class MalformedResponse(GenerationFailure):
    """Raised when a completion response lacks the expected candidate text."""


class MissingCredential(ReadmeError):
    """Raised when no API key is configured for the completion endpoint."""


class GenerationInProgress(ReadmeError):
    """Raised when a generation is requested while another one is running."""


__all__ = [
    "GenerationFailure",
    "GenerationInProgress",
    "InvalidRepositoryURL",
    "MalformedResponse",
    "MissingCredential",
    "RateLimited",
    "ReadmeError",
    "RemoteFetchFailure",
]
