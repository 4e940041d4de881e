"""Tests for logger configuration and status reporting."""

from __future__ import annotations

import io

from reporeadme.logging import configure_logging, get_logger, log_status, status_logger
from reporeadme.models import GenerationStatus


def test_statuses_are_prefixed_with_step() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)

    log_status(get_logger("test"), GenerationStatus(step=2, message="Analyzing files..."))

    assert stream.getvalue() == "[reporeadme] INFO [2] Analyzing files...\n"


def test_error_statuses_log_at_error_level() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)
    report = status_logger(get_logger("test"))

    report(GenerationStatus(step=3, message="Failed to generate features: boom", error=True))

    assert stream.getvalue() == "[reporeadme] ERROR [3] Failed to generate features: boom\n"


def test_plain_records_have_no_step_prefix() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)

    get_logger("test").warning("Rate limit exceeded")

    assert stream.getvalue() == "[reporeadme] WARNING Rate limit exceeded\n"


def test_debug_records_follow_verbosity() -> None:
    quiet = io.StringIO()
    configure_logging(stream=quiet)
    get_logger("test").debug("hidden")

    loud = io.StringIO()
    configure_logging(verbose=True, stream=loud)
    get_logger("test").debug("shown")

    assert quiet.getvalue() == ""
    assert loud.getvalue() == "[reporeadme] DEBUG shown\n"


def test_reconfiguring_replaces_handlers() -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(stream=first)
    logger = configure_logging(stream=second)

    get_logger("test").info("once")

    assert len(logger.handlers) == 1
    assert first.getvalue() == ""
    assert second.getvalue() == "[reporeadme] INFO once\n"
