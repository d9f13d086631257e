"""GitHub Actions workflow commands.

Inside a runner (``GITHUB_ACTIONS=true``) grouped sections, warnings and
failures are emitted as ``::command::`` lines on stdout so the runner can fold
and annotate them. Everywhere else they degrade to structured log events.
"""

import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from ghpages.config import in_actions
from ghpages.utils.logging import get_logger

logger = get_logger(__name__)


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _issue(command: str, message: str = "", stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    stream.write(f"::{command}::{_escape(message)}\n")
    stream.flush()


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything logged inside the block under ``title``."""
    if in_actions():
        _issue("group", title)
    else:
        logger.info("group.started", title=title)
    try:
        yield
    finally:
        if in_actions():
            _issue("endgroup")


def warning(message: str) -> None:
    if in_actions():
        _issue("warning", message)
    else:
        logger.warning(message)


def set_failed(message: str) -> None:
    """Report a fatal error. The caller is responsible for the exit code."""
    if in_actions():
        _issue("error", message)
    else:
        logger.error(message)


def add_mask(secret: str) -> None:
    """Ask the runner to redact ``secret`` from every later log line."""
    if secret and in_actions():
        _issue("add-mask", secret)
