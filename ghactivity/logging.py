"""femtologging helpers shared by the fetch workflow and the CLI.

Messages are formatted with percent-style interpolation before they reach
femtologging, so every record carries its final text.

Example:
>>> from ghactivity.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Fetching events for %s", "octocat")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger

DEFAULT_LOG_LEVEL = "WARNING"


class LogLevel(enum.StrEnum):
    """Log levels accepted by ``--log-level`` and ``GHACTIVITY_LOG_LEVEL``."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(
    level: str | None, *, default: str = DEFAULT_LOG_LEVEL
) -> tuple[str, bool]:
    """Normalize a raw level string.

    Parameters
    ----------
    level : str | None
        Raw level from the command line or environment.
    default : str, optional
        Level used when ``level`` is missing or unknown.

    Returns
    -------
    tuple[str, bool]
        The level to configure and whether the input was rejected. A missing
        value is not treated as invalid.

    """
    if level is None or not level.strip():
        return (default, False)

    normalized = level.strip().upper()
    if normalized in LogLevel.__members__:
        return (normalized, False)
    return (default, True)


def configure_logging(level: str | None) -> tuple[str, bool]:
    """Install the femtologging root handler at the normalized level."""
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=True)
    return (normalized, invalid)


class _SupportsLog(typ.Protocol):
    """Anything with femtologging's ``log`` signature."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: str,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an INFO message, interpolating ``args`` into ``template``.

    Parameters
    ----------
    logger : _SupportsLog
        femtologging logger, or any object with the same ``log`` method.
    template : str
        Percent-style message; used verbatim when ``args`` is empty.
    *args : object
        Values substituted into ``template``.
    exc_info : object | None, optional
        Exception or ``sys.exc_info()`` triple attached to the record.

    Returns
    -------
    None

    """
    _emit(logger, "INFO", template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a WARNING message, interpolating ``args`` into ``template``.

    Parameters
    ----------
    logger : _SupportsLog
        femtologging logger, or any object with the same ``log`` method.
    template : str
        Percent-style message; used verbatim when ``args`` is empty.
    *args : object
        Values substituted into ``template``.
    exc_info : object | None, optional
        Exception or ``sys.exc_info()`` triple attached to the record.

    Returns
    -------
    None

    """
    _emit(logger, "WARNING", template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an ERROR message, interpolating ``args`` into ``template``.

    Parameters
    ----------
    logger : _SupportsLog
        femtologging logger, or any object with the same ``log`` method.
    template : str
        Percent-style message; used verbatim when ``args`` is empty.
    *args : object
        Values substituted into ``template``.
    exc_info : object | None, optional
        Exception or ``sys.exc_info()`` triple attached to the record.

    Returns
    -------
    None

    """
    _emit(logger, "ERROR", template, args, exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Log ``message`` at ERROR with ``exc`` attached.

    Parameters
    ----------
    logger : _SupportsLog
        Logger receiving the record.
    message : str
        Final message text; it is not interpolated.
    exc : BaseException
        Exception passed through as ``exc_info`` so the traceback is kept.

    Returns
    -------
    None

    """
    _emit(logger, "ERROR", message, (), exc)


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
