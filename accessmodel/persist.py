"""Storage interfaces for policies and change notification."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence

from .model import Model


def load_policy_line(line: str, model: Model) -> None:
    """Add one ``ptype, field, ...`` text line to *model* as a rule.

    Empty lines and lines starting with ``#`` are ignored.
    """
    if line == "" or line.startswith("#"):
        return

    tokens = [token.strip() for token in line.split(",")]
    key = tokens[0]
    sec = key[:1]
    model[sec][key].policy.append(tokens[1:])


class Adapter(ABC):
    """Storage for policy rules."""

    @abstractmethod
    def load_policy(self, model: Model) -> None:
        """Load all policy rules from storage into *model*."""

    @abstractmethod
    def save_policy(self, model: Model) -> None:
        """Save all policy rules of *model* to storage."""

    @abstractmethod
    def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Add one rule to storage."""

    @abstractmethod
    def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Remove one rule from storage."""

    @abstractmethod
    def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> None:
        """Remove the rules matching a field filter from storage."""


class FilteredAdapter(Adapter):
    """Storage that can load a filtered subset of the policy."""

    @abstractmethod
    def load_filtered_policy(self, model: Model, filter: Any) -> None:
        """Load only the rules that match *filter*."""

    @abstractmethod
    def is_filtered(self) -> bool:
        """Return whether the loaded policy was filtered."""


class Watcher(ABC):
    """Notifies other instances that the stored policy changed."""

    @abstractmethod
    def set_update_callback(self, callback: Callable[[str], Any]) -> None:
        """Set the function called when another instance changed the policy."""

    @abstractmethod
    def update(self) -> None:
        """Tell other instances to reload their policy."""

    @abstractmethod
    def close(self) -> None:
        """Stop watching; the callback is no longer called."""