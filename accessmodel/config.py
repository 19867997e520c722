"""INI-style configuration files with sections and multi-line values."""

from __future__ import annotations

import re
import threading
from pathlib import Path
from typing import Iterable

DEFAULT_SECTION = "default"
COMMENT_PREFIXES = ("#", ";")
MULTI_LINE_SEPARATOR = "\\"

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


class ConfigError(ValueError):
    """Raised when configuration text cannot be parsed or a value converted."""


class Config:
    """Section-keyed options read from configuration text.

    Keys are addressed as ``"section::option"``, or just ``"option"`` for
    the default section.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[str, dict[str, str]] = {}

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Parse the configuration file at *path*."""
        config = cls()
        with config._lock:
            text = Path(path).read_text(encoding="utf-8")
            config._parse(text.splitlines())
        return config

    @classmethod
    def from_text(cls, text: str) -> "Config":
        """Parse configuration held in a string."""
        config = cls()
        config._parse(text.splitlines())
        return config

    def add_config(self, section: str, option: str, value: str) -> bool:
        """Store a value; return True if the option was not set before."""
        section = section or DEFAULT_SECTION
        with self._lock:
            options = self._data.setdefault(section, {})
            is_new = option not in options
            options[option] = value
        return is_new

    def _parse(self, lines: Iterable[str]) -> None:
        section = ""
        buffer: list[str] = []
        can_write = False
        line_num = 0

        for raw in lines:
            if can_write:
                self._write(section, line_num, buffer)
                can_write = False
            line_num += 1
            line = raw.strip()

            if not line or line.startswith(COMMENT_PREFIXES):
                can_write = True
                continue
            if line.startswith("[") and line.endswith("]"):
                if buffer:
                    self._write(section, line_num, buffer)
                    can_write = False
                section = line[1:-1]
                continue
            if line.endswith(MULTI_LINE_SEPARATOR):
                buffer.append(line[:-1].strip())
            else:
                buffer.append(line)
                can_write = True

        if can_write:
            self._write(section, line_num, buffer)
        line_num += 1
        if buffer:
            self._write(section, line_num, buffer)

    def _write(self, section: str, line_num: int, buffer: list[str]) -> None:
        content = "".join(buffer)
        if not content:
            return
        parts = content.split("=", 1)
        if len(parts) != 2:
            raise ConfigError(
                f"parse the content error : line {line_num} , {parts[0]} = ? "
            )
        self.add_config(section, parts[0].strip(), parts[1].strip())
        buffer.clear()

    @staticmethod
    def _split_key(key: str) -> tuple[str, str]:
        parts = key.lower().split("::")
        if len(parts) >= 2:
            return parts[0], parts[1]
        return "", parts[0]

    def get(self, key: str) -> str:
        """Return the value for *key*, or an empty string if it is unset."""
        section, option = self._split_key(key)
        section = section or DEFAULT_SECTION
        with self._lock:
            return self._data.get(section, {}).get(option, "")

    def get_strings(self, key: str) -> list[str]:
        """Return the value for *key* split on commas; empty if unset."""
        value = self.get(key)
        if not value:
            return []
        return value.split(",")

    def get_bool(self, key: str) -> bool:
        """Return the value for *key* read as a boolean."""
        value = self.get(key)
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
        raise ConfigError(f"invalid boolean value {value!r} for key {key!r}")

    def get_int(self, key: str) -> int:
        """Return the value for *key* read as a decimal integer."""
        value = self.get(key)
        if not _INT_RE.fullmatch(value):
            raise ConfigError(f"invalid integer value {value!r} for key {key!r}")
        return int(value)

    def get_float(self, key: str) -> float:
        """Return the value for *key* read as a floating point number."""
        value = self.get(key)
        if not _FLOAT_RE.fullmatch(value):
            raise ConfigError(f"invalid float value {value!r} for key {key!r}")
        return float(value)

    def set(self, key: str, value: str) -> None:
        """Set *key* (``section::option`` or ``option``) to *value*."""
        if not key:
            raise ConfigError("key is empty")
        section, option = self._split_key(key)
        self.add_config(section, option, value)