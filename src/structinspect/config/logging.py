# topmark:header:start
#
#   project      : StructInspect
#   file         : logging.py
#   file_relpath : src/structinspect/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect logging with a TRACE level.

This module extends the standard logging module with a custom TRACE level, a
logger class exposing ``trace()``, and a chalk-colored formatter used by the CLI.

StructInspect is a library first: importing it never installs handlers and
never changes the logger class of the host application. Only loggers created
through [`get_logger`][structinspect.config.logging.get_logger] use
`StructInspectLogger`; handlers are installed by
[`setup_logging`][structinspect.config.logging.setup_logging] (the CLI calls it).
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from structinspect.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5

ROOT_LOGGER_NAME: Final[str] = "structinspect"


class StructInspectLogger(logging.Logger):
    """Logger class with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

# Serializes the temporary logger-class swap in get_logger()
_logger_class_lock = threading.Lock()


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"

LOG_LEVELS: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


def parse_log_level(raw: str | None) -> int | None:
    """Parse a level name (``"TRACE"``, ``"debug"``) or a numeric string (``"10"``).

    Args:
        raw (str | None): The raw level token.

    Returns:
        int | None: The logging level, or ``None`` when unset or unrecognized.
    """
    if not raw:
        return None
    v = raw.strip().upper()
    if v.isdigit():
        return int(v)
    return LOG_LEVELS.get(v)


def resolve_env_log_level() -> int | None:
    """Return a logging level from environment or None if unset.

    Honors ``STRUCTINSPECT_LOG_LEVEL`` (e.g., "TRACE", "DEBUG", "INFO", numeric "10").
    """
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR))


def setup_logging(level: int | None = None) -> None:
    """Configure the ``structinspect`` logger with a level and colored stderr output.

    If ``level`` is None, the environment is consulted via
    [`resolve_env_log_level`][structinspect.config.logging.resolve_env_log_level].
    Default is CRITICAL when unspecified.

    Args:
        level (int | None): Logging level to apply.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    pkg_logger: StructInspectLogger = get_logger(ROOT_LOGGER_NAME)
    pkg_logger.setLevel(level)

    # Remove existing handlers to prevent duplicate log messages on re-configuration
    for handler in pkg_logger.handlers[:]:
        pkg_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    pkg_logger.addHandler(handler)

    # Do not duplicate records into the host application's root handlers
    pkg_logger.propagate = False


def get_logger(name: str) -> StructInspectLogger:
    """Retrieve a StructInspectLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        StructInspectLogger: A StructInspectLogger instance.
    """
    with _logger_class_lock:
        previous: type[logging.Logger] = logging.getLoggerClass()
        logging.setLoggerClass(StructInspectLogger)
        try:
            logger = logging.getLogger(name)
        finally:
            logging.setLoggerClass(previous)
    return cast("StructInspectLogger", logger)
