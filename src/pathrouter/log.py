"""Logging collaborator.

The pipeline reports unmapped failures through a single ``error(tag, error)``
call. ``LoggingLog`` is the default and forwards to the stdlib logger.
"""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger("pathrouter.server")


@runtime_checkable
class Log(Protocol):
    """Fire-and-forget error sink."""

    def error(self, tag: str, error: BaseException) -> None: ...


class LoggingLog:
    """``Log`` backed by a :mod:`logging` logger.

    The traceback of *error* is attached to the record.
    """

    __slots__ = ("_logger",)

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def error(self, tag: str, error: BaseException) -> None:
        self._logger.error(
            "%s %s: %s",
            tag,
            type(error).__name__,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
