"""Client for the Gemini ``generateContent`` completion endpoint."""

from __future__ import annotations

import http.client
import json
import os
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import GenerationFailure, MalformedResponse, MissingCredential, RateLimited, ReadmeError
from ..logging import get_logger

DEFAULT_SYSTEM_INSTRUCTION = (
    "You write sections of README files for software projects. "
    "Answer with Markdown only, without preamble, headings or closing remarks."
)

logger = get_logger("llm")


@dataclass
class CompletionRequest:
    """A single prompt sent to the completion endpoint."""

    prompt: str
    system: Optional[str]
    model: str
    base_url: str
    api_key: str
    request_timeout: Optional[float]


@dataclass
class CompletionResult:
    """Text of the first candidate, or the error that prevented it."""

    text: Optional[str] = None
    error: Optional[ReadmeError] = None
    attempts: int = 0
    delays: List[float] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


Transport = Callable[[CompletionRequest], Tuple[int, bytes]]


class TextGenerator:
    """Sends prompts to the completion endpoint, retrying only on HTTP 429."""

    DEFAULT_MODEL = "gemini-2.5-flash"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MAX_RETRIES = 5
    DEFAULT_BASE_DELAY = 1.0
    ENV_API_KEY_KEYS = ("REPOREADME_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY")
    ENV_MODEL_KEYS = ("REPOREADME_MODEL", "GEMINI_MODEL")
    ENV_BASE_URL_KEYS = ("REPOREADME_BASE_URL",)

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        base_url: str | None = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        request_timeout: Optional[float] = 60.0,
        system_instruction: str | None = DEFAULT_SYSTEM_INSTRUCTION,
        transport: Transport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_key = self._resolve_api_key(api_key)
        self.model = model or _first_env_value(self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL
        self.base_url = (
            base_url or _first_env_value(self.ENV_BASE_URL_KEYS) or self.DEFAULT_BASE_URL
        ).rstrip("/")
        self.max_retries = self.DEFAULT_MAX_RETRIES if max_retries is None else max(0, max_retries)
        self.base_delay = self.DEFAULT_BASE_DELAY if base_delay is None else max(0.0, base_delay)
        self.request_timeout = request_timeout
        self.system_instruction = system_instruction
        self._transport = transport or self._http_transport
        self._sleep = sleep

    def complete(
        self,
        prompt: str,
        *,
        label: str = "text",
        on_attempt: Callable[[int], None] | None = None,
    ) -> CompletionResult:
        """Return the first candidate text for ``prompt``; failures are reported, not raised."""
        request = CompletionRequest(
            prompt=prompt,
            system=self.system_instruction,
            model=self.model,
            base_url=self.base_url,
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        result = CompletionResult()
        delay = self.base_delay

        while True:
            result.attempts += 1
            if on_attempt is not None:
                on_attempt(result.attempts)
            try:
                status, raw = self._transport(request)
            except (OSError, http.client.HTTPException) as exc:
                # URLError and socket timeouts are OSError; truncated bodies are HTTPException.
                reason = exc.reason if isinstance(exc, URLError) else exc
                logger.error("Completion request for %s failed: %s", label, reason)
                result.error = GenerationFailure(f"Completion request failed: {reason}")
                return result

            if status == 429:
                if len(result.delays) >= self.max_retries:
                    logger.error("Rate limit persisted for %s after %d attempts", label, result.attempts)
                    result.error = RateLimited(
                        f"Rate limited after {result.attempts} attempts"
                    )
                    return result
                logger.warning("Rate limit exceeded for %s; retrying in %.1fs", label, delay)
                self._sleep(delay)
                result.delays.append(delay)
                delay *= 2
                continue

            if not 200 <= status < 300:
                logger.error("Completion request for %s failed with status %d", label, status)
                result.error = GenerationFailure(f"Completion request failed with status {status}")
                return result

            try:
                result.text = self._extract_text(raw)
            except MalformedResponse as exc:
                logger.error("Malformed completion response for %s: %s", label, exc)
                result.error = exc
            return result

    @staticmethod
    def build_payload(request: CompletionRequest) -> dict[str, object]:
        payload: dict[str, object] = {
            "contents": [{"parts": [{"text": request.prompt}]}],
        }
        if request.system:
            payload["system_instruction"] = {"parts": [{"text": request.system}]}
        return payload

    @staticmethod
    def _http_transport(request: CompletionRequest) -> Tuple[int, bytes]:
        endpoint = f"{request.base_url}/models/{request.model}:generateContent"
        data = json.dumps(TextGenerator.build_payload(request)).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": request.api_key,
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")
        try:
            with urlopen(http_request, timeout=request.request_timeout) as response:  # type: ignore[arg-type]
                return response.status, response.read()
        except HTTPError as exc:
            return exc.code, b""

    @staticmethod
    def _extract_text(raw: bytes) -> str:
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedResponse("response body is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedResponse("response body is not a JSON object")

        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise MalformedResponse("missing field 'candidates'")
        first = candidates[0]
        content = first.get("content") if isinstance(first, dict) else None
        if not isinstance(content, dict):
            raise MalformedResponse("missing field 'candidates[0].content'")
        parts = content.get("parts")
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            raise MalformedResponse("missing field 'candidates[0].content.parts'")
        text = parts[0].get("text")
        if not isinstance(text, str):
            raise MalformedResponse("field 'candidates[0].content.parts[0].text' is not a string")
        if not text.strip():
            raise MalformedResponse("candidate text is empty")
        return text.strip()

    def _resolve_api_key(self, api_key: str | None) -> str:
        value = api_key or _first_env_value(self.ENV_API_KEY_KEYS)
        if not value:
            keys = ", ".join(self.ENV_API_KEY_KEYS)
            raise MissingCredential(
                f"No API key configured for the completion endpoint. Set one of: {keys}."
            )
        return value


def _first_env_value(keys: Sequence[str]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


__all__ = ["CompletionRequest", "CompletionResult", "TextGenerator"]
