"""Pipeline orchestration for README generation runs."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional

from .analyzers import classify, infer_commands
from .config import ReadmeGenConfig
from .errors import GenerationFailure, GenerationInProgress, ReadmeError
from .llm.generator import TextGenerator
from .logging import get_logger
from .models import (
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
)
from .prompting.builder import PromptBuilder, PromptSlot
from .resolver import GitHubClient, InputResolver, ResolvedInput
from .template import render_file_tree, render_readme

StatusCallback = Callable[[GenerationStatus], None]

STEP_RESOLVE = 1
STEP_ANALYZE = 2
STEP_FEATURES = 3
STEP_TECH_STACK = 4
STEP_DESCRIPTION = 5
STEP_RENDER = 6

UNEXPECTED_ERROR_KIND = "UnexpectedError"


class ReadmeGenerator:
    """Runs resolve, classify, generate and render for one input at a time."""

    def __init__(
        self,
        resolver: InputResolver | None = None,
        generator: TextGenerator | None = None,
        *,
        generator_factory: Callable[[], TextGenerator] = TextGenerator,
        prompt_builder: PromptBuilder | None = None,
        on_status: StatusCallback | None = None,
    ) -> None:
        self.resolver = resolver or InputResolver()
        self._generator = generator
        self._generator_factory = generator_factory
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.on_status = on_status
        self.logger = get_logger("orchestrator")
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls, config: ReadmeGenConfig, *, on_status: StatusCallback | None = None
    ) -> "ReadmeGenerator":
        """Build a generator wired to the GitHub and completion settings in ``config``."""
        github = config.github
        client = GitHubClient(
            github.api_base,
            request_timeout=github.request_timeout or 15.0,
        )
        resolver = InputResolver(client, branch=github.branch or "HEAD")
        settings = config.generator

        def _factory() -> TextGenerator:
            return TextGenerator(
                settings.api_key,
                model=settings.model,
                base_url=settings.base_url,
                max_retries=settings.max_retries,
                base_delay=settings.base_delay,
                request_timeout=settings.request_timeout or 60.0,
            )

        return cls(resolver, generator_factory=_factory, on_status=on_status)

    def generate_from_url(self, url: str) -> GenerationResult:
        """Generate a README for a public GitHub repository URL."""
        return self._run(lambda: self.resolver.resolve_url(url), "Fetching data from GitHub...")

    def generate_from_paths(self, paths: Iterable[str]) -> GenerationResult:
        """Generate a README from the relative paths of an uploaded folder."""
        path_list = list(paths)
        return self._run(lambda: self.resolver.resolve_paths(path_list), "Reading uploaded files...")

    def _run(self, resolve: Callable[[], ResolvedInput], resolve_label: str) -> GenerationResult:
        statuses: List[GenerationStatus] = []

        def emit(step: int, message: str, *, error: bool = False) -> None:
            status = GenerationStatus(step=step, message=message, error=error)
            statuses.append(status)
            if self.on_status is not None:
                self.on_status(status)

        if not self._lock.acquire(blocking=False):
            message = str(GenerationInProgress("A README generation is already in progress."))
            self.logger.warning(message)
            emit(STEP_RESOLVE, message, error=True)
            return GenerationResult(
                readme=None,
                statuses=statuses,
                error=message,
                error_kind=GenerationInProgress.__name__,
            )

        step = STEP_RESOLVE
        request: Optional[GenerationRequest] = None
        try:
            generator = self._resolve_generator()

            emit(STEP_RESOLVE, resolve_label)
            resolved = resolve()
            for message in resolved.messages:
                emit(STEP_RESOLVE, message)

            step = STEP_ANALYZE
            emit(STEP_ANALYZE, "Analyzing files...")
            request = GenerationRequest(repository=resolved.repository, entries=resolved.entries)
            request.profile = classify(request.entries)
            request.commands = infer_commands(request.profile)
            request.file_tree = render_file_tree(request.entries)
            self.logger.debug(
                "Profile for %s: %s", request.repository.name, request.profile.detected() or "none"
            )

            name = request.repository.name
            step = STEP_FEATURES
            request.features = self._complete(
                generator, self.prompt_builder.features(name, request.profile), step, emit
            )
            step = STEP_TECH_STACK
            request.tech_stack = self._complete(
                generator, self.prompt_builder.tech_stack(name, request.profile), step, emit
            )
            if request.repository.description:
                request.description = request.repository.description
            else:
                step = STEP_DESCRIPTION
                request.description = self._complete(
                    generator,
                    self.prompt_builder.description(name, request.profile, request.entries),
                    step,
                    emit,
                )

            step = STEP_RENDER
            emit(STEP_RENDER, "Rendering README...")
            readme = render_readme(
                project_name=name,
                description=request.description,
                features=request.features,
                structure=request.file_tree,
                tech_stack=request.tech_stack,
                commands=request.commands,
                issues_link=request.repository.issues_link,
                clone_url=request.repository.url,
            )
        except ReadmeError as exc:
            message = str(exc)
            self.logger.error("README generation failed: %s", message)
            emit(step, message, error=True)
            return GenerationResult(
                readme=None,
                statuses=statuses,
                error=message,
                error_kind=type(exc).__name__,
                request=request,
            )
        except Exception as exc:
            self._log_exception("Unexpected error during README generation", exc)
            message = "An unexpected error occurred. Please check the URL or folder and try again."
            emit(step, message, error=True)
            return GenerationResult(
                readme=None,
                statuses=statuses,
                error=message,
                error_kind=UNEXPECTED_ERROR_KIND,
                request=request,
            )
        finally:
            self._lock.release()

        self.logger.info("README generated for %s", request.repository.name)
        emit(STEP_RENDER, "README generated.")
        return GenerationResult(readme=readme, statuses=statuses, request=request)

    def _complete(
        self,
        generator: TextGenerator,
        slot: PromptSlot,
        step: int,
        emit: Callable[..., None],
    ) -> str:
        def on_attempt(attempt: int) -> None:
            if attempt == 1:
                emit(step, slot.label)
            else:
                emit(step, f"{slot.label} (attempt {attempt})")

        result = generator.complete(slot.prompt, label=slot.name, on_attempt=on_attempt)
        if result.text is None or result.error is not None:
            error = result.error or GenerationFailure("no text returned")
            readable = slot.name.replace("_", " ")
            raise type(error)(f"Failed to generate {readable}: {error}") from error
        return result.text

    def _resolve_generator(self) -> TextGenerator:
        if self._generator is None:
            self._generator = self._generator_factory()
        return self._generator

    def _log_exception(self, message: str, exc: Exception) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.exception("%s: %s", message, exc)
        else:
            self.logger.error("%s: %s", message, exc)


__all__ = ["UNEXPECTED_ERROR_KIND", "ReadmeGenerator", "StatusCallback"]
