"""Policy storage in comma-separated text files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence

from .model import Model
from .persist import Adapter, FilteredAdapter, load_policy_line

EMPTY_PATH_MESSAGE = "invalid file path, file path cannot be empty"
NOT_IMPLEMENTED_MESSAGE = "not implemented"


class PolicyFileError(ValueError):
    """Raised when a policy file cannot be used as requested."""


class FileAdapter(Adapter):
    """Loads policy rules from a text file and saves them back to it.

    Each line holds one rule: ``ptype, field, field, ...``.
    """

    def __init__(self, file_path: str | Path = "") -> None:
        self.file_path = str(file_path) if file_path else ""

    def _check_path(self) -> None:
        if not self.file_path:
            raise PolicyFileError(EMPTY_PATH_MESSAGE)

    def _unsupported(self, operation: str, sec: str, ptype: str) -> NotImplementedError:
        """Build the error for an auto-save operation a file cannot do."""
        error = NotImplementedError(NOT_IMPLEMENTED_MESSAGE)
        error.operation = operation  # type: ignore[attr-defined]
        error.section = sec  # type: ignore[attr-defined]
        error.ptype = ptype  # type: ignore[attr-defined]
        error.file_path = self.file_path  # type: ignore[attr-defined]
        return error

    def _read_lines(
        self, model: Model, handler: Callable[[str, Model], None],
        keep: Callable[[str], bool] = lambda line: True,
    ) -> None:
        with open(self.file_path, encoding="utf-8") as policy_file:
            for raw in policy_file:
                line = raw.strip()
                if keep(line):
                    handler(line, model)

    def load_policy(self, model: Model) -> None:
        """Load every rule in the file into *model*."""
        self._check_path()
        self._read_lines(model, load_policy_line)

    def save_policy(self, model: Model) -> None:
        """Write all policy and grouping rules of *model* to the file."""
        self._check_path()
        lines = [
            f"{ptype}, " + ", ".join(rule)
            for sec in ("p", "g")
            for ptype, assertion in model.get(sec, {}).items()
            for rule in assertion.policy
        ]
        Path(self.file_path).write_text("\n".join(lines), encoding="utf-8")

    def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Single-rule saving is not supported; save the whole policy instead."""
        raise self._unsupported("add_policy", sec, ptype)

    def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Single-rule removal is not supported; save the whole policy instead."""
        raise self._unsupported("remove_policy", sec, ptype)

    def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> None:
        """Filtered removal is not supported; save the whole policy instead."""
        raise self._unsupported("remove_filtered_policy", sec, ptype)


@dataclass
class Filter:
    """Field values a line must have to be loaded.

    Empty strings match anything; ``p`` applies to ``p`` lines and ``g`` to
    ``g`` lines.
    """

    p: list[str] = field(default_factory=list)
    g: list[str] = field(default_factory=list)


def _filter_words(fields: list[str], wanted: Sequence[str]) -> bool:
    if len(fields) < len(wanted) + 1:
        return True
    return any(
        value and value.strip() != fields[offset + 1].strip()
        for offset, value in enumerate(wanted)
    )


def _skip_line(line: str, policy_filter: Filter | None) -> bool:
    """Return True if *line* should not be loaded under *policy_filter*."""
    if policy_filter is None:
        return False
    fields = line.split(",")
    kind = fields[0].strip()
    if kind == "p":
        wanted: Sequence[str] = policy_filter.p
    elif kind == "g":
        wanted = policy_filter.g
    else:
        wanted = ()
    return _filter_words(fields, wanted)


class FilteredFileAdapter(FileAdapter, FilteredAdapter):
    """File adapter that can also load a filtered subset of the rules."""

    def __init__(self, file_path: str | Path = "") -> None:
        super().__init__(file_path)
        self._filtered = True

    def load_policy(self, model: Model) -> None:
        """Load every rule, marking the policy as unfiltered."""
        self._filtered = False
        super().load_policy(model)

    def load_filtered_policy(self, model: Model, filter: Any) -> None:
        """Load only the rules matching *filter*; ``None`` loads everything."""
        if filter is None:
            self.load_policy(model)
            return
        self._check_path()
        if not isinstance(filter, Filter):
            raise PolicyFileError("invalid filter type")
        self._read_lines(
            model, load_policy_line, lambda line: not _skip_line(line, filter)
        )
        self._filtered = True

    def is_filtered(self) -> bool:
        """Return whether the loaded policy was filtered."""
        return self._filtered

    def save_policy(self, model: Model) -> None:
        """Save the policy; refused while only a filtered part is loaded."""
        if self._filtered:
            raise PolicyFileError("cannot save a filtered policy")
        super().save_policy(model)