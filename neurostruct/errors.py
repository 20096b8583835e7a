"""Error type and checking helper shared by the package."""

from __future__ import annotations

import logging

_log = logging.getLogger(__name__)


class NsolError(RuntimeError):
    """Raised when a structural operation cannot be carried out."""


def check(condition: object, message: str) -> None:
    """Log ``message`` as an error and raise :class:`NsolError` unless ``condition`` holds."""
    if not condition:
        _log.error(message)
        raise NsolError(message)