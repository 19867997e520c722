"""Pluggable logger used for diagnostic output."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

_log = logging.getLogger("accessmodel")


def _sprint(args: tuple[Any, ...]) -> str:
    """Join operands, spacing them where neither side is a string."""
    parts: list[str] = []
    for i, arg in enumerate(args):
        if i > 0 and not isinstance(arg, str) and not isinstance(args[i - 1], str):
            parts.append(" ")
        parts.append(str(arg))
    return "".join(parts)


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return " ".join([fmt, *(str(arg) for arg in args)])


class Logger(ABC):
    """Interface for loggers that can be switched on and off."""

    @abstractmethod
    def enable_log(self, enable: bool) -> None:
        """Turn message output on or off."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Return whether messages are output."""

    @abstractmethod
    def print(self, *args: Any) -> None:
        """Log the operands joined into one message."""

    @abstractmethod
    def printf(self, fmt: str, *args: Any) -> None:
        """Log a message built from a format string."""


class DefaultLogger(Logger):
    """Logger writing to the standard ``logging`` module; off by default."""

    def __init__(self) -> None:
        self._enabled = False

    def enable_log(self, enable: bool) -> None:
        self._enabled = enable

    def is_enabled(self) -> bool:
        return self._enabled

    def print(self, *args: Any) -> None:
        if self._enabled:
            _log.info("%s", _sprint(args))

    def printf(self, fmt: str, *args: Any) -> None:
        if self._enabled:
            _log.info("%s", _sprintf(fmt, args))


class _LoggerSlot:
    """Holds the logger currently used by the package."""

    def __init__(self, logger: Logger) -> None:
        self.logger = logger


_slot = _LoggerSlot(DefaultLogger())


def set_logger(logger: Logger) -> None:
    """Replace the logger used by the package."""
    if not isinstance(logger, Logger):
        raise TypeError(f"expected a Logger, got {type(logger).__name__}")
    _slot.logger = logger


def get_logger() -> Logger:
    """Return the logger used by the package."""
    return _slot.logger


def log_print(*args: Any) -> None:
    """Log the operands through the current logger."""
    _slot.logger.print(*args)


def log_printf(fmt: str, *args: Any) -> None:
    """Log a formatted message through the current logger."""
    _slot.logger.printf(fmt, *args)