"""femtologging wiring shared by every Hookboard module.

Modules create a logger with :func:`get_logger` and emit through the
``log_*`` helpers, which interpolate percent-style arguments before handing
the finished message to femtologging. Decoder warnings, snapshot events and
CLI diagnostics therefore share one formatting path.

Example:
>>> from hookboard.logging import get_logger, log_warning
>>> logger = get_logger(__name__)
>>> log_warning(logger, "Skipped %d webhook documents", 2)

"""

from __future__ import annotations

import enum
import os
import typing as typ

from femtologging import basicConfig, get_logger

LOG_LEVEL_ENV_VAR = "HOOKBOARD_LOG_LEVEL"


class LogLevel(enum.StrEnum):
    """Level names femtologging understands."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_FALLBACK_LEVEL = LogLevel.INFO


class _SupportsLog(typ.Protocol):
    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Map a raw level name onto :class:`LogLevel`.

    Returns the canonical upper-case name and whether the fallback was used.
    Missing, blank and unrecognised names all fall back to ``INFO``.
    """
    candidate = (level or "").strip().upper()
    if candidate in LogLevel.__members__:
        return (candidate, False)
    return (_FALLBACK_LEVEL.value, True)


def configure_logging(
    level: str | None = None, *, force: bool = False
) -> tuple[str, bool]:
    """Install femtologging's root handler at the requested level.

    Parameters
    ----------
    level : str | None, optional
        Level name. ``None`` reads ``HOOKBOARD_LOG_LEVEL`` instead.
    force : bool, optional
        Replace an existing handler configuration.

    Returns
    -------
    tuple[str, bool]
        The level actually configured and whether it was a fallback.

    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR)
    resolved, fell_back = normalize_log_level(level)
    basicConfig(level=resolved, force=force)
    return (resolved, fell_back)


def format_log_message(template: str, *args: object) -> str:
    """Apply percent interpolation only when arguments are given."""
    if not args:
        return template
    return template % args


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None = None,
) -> None:
    message = format_log_message(template, *args)
    logger.log(level.value, message, exc_info=exc_info, stack_info=False)


def log_debug(logger: _SupportsLog, template: str, *args: object) -> None:
    """Emit a DEBUG message."""
    _emit(logger, LogLevel.DEBUG, template, args)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an INFO message.

    Parameters
    ----------
    logger : _SupportsLog
        Destination logger.
    template : str
        Percent-style message template.
    *args : object
        Values interpolated into ``template``.
    exc_info : object | None, optional
        Exception attached to the record.

    """
    _emit(logger, LogLevel.INFO, template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit a WARNING message."""
    _emit(logger, LogLevel.WARNING, template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an ERROR message."""
    _emit(logger, LogLevel.ERROR, template, args, exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Emit ``message`` at ERROR with ``exc`` attached."""
    _emit(logger, LogLevel.ERROR, message, (), exc)


__all__ = [
    "LOG_LEVEL_ENV_VAR",
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
