"""Access control models: assertions grouped by section, and their policies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from .config import Config
from .logger import log_print, log_printf

SECTION_NAMES = {
    "r": "request_definition",
    "p": "policy_definition",
    "g": "role_definition",
    "e": "policy_effect",
    "m": "matchers",
}

_LOAD_ORDER = ("r", "p", "e", "m", "g")
_ATTRIBUTE_ACCESS = re.compile(r"(?<![\w.])([rp][0-9]*)\.")


class RoleDefinitionError(ValueError):
    """Raised when a role definition or its grouping rules are malformed."""


def _escape_assertion(text: str) -> str:
    """Turn ``r.sub``-style attribute access into ``r_sub`` identifiers."""
    return _ATTRIBUTE_ACCESS.sub(r"\1_", text)


def _remove_comments(text: str) -> str:
    head, sep, _ = text.partition("#")
    return head.strip() if sep else text


def _key_suffix(index: int) -> str:
    return "" if index == 1 else str(index)


@dataclass
class Assertion:
    """One definition in a model section, e.g. ``r = sub, obj, act``."""

    key: str
    value: str
    tokens: list[str] = field(default_factory=list)
    policy: list[list[str]] = field(default_factory=list)
    rm: Any = None

    def build_role_links(self, rm: Any) -> None:
        """Register every grouping rule of this assertion with *rm*."""
        self.rm = rm
        count = self.value.count("_")
        for rule in self.policy:
            if count < 2:
                raise RoleDefinitionError(
                    'the number of "_" in role definition should be at least 2'
                )
            if len(rule) < count:
                raise RoleDefinitionError(
                    "grouping policy elements do not meet role definition"
                )
            if count <= 4:
                rm.add_link(*rule[:count])

        log_print("Role links for: " + self.key)
        rm.print_roles()


class Model(dict):
    """A whole access control model: section name to key to assertion."""

    @classmethod
    def from_file(cls, path: str | Path) -> "Model":
        """Create a model from a CONF file; an empty path gives an empty model."""
        model = cls()
        if path == "" or path is None:
            return model
        model.load_model(path)
        return model

    @classmethod
    def from_text(cls, text: str) -> "Model":
        """Create a model from CONF text."""
        model = cls()
        model.load_model_from_text(text)
        return model

    def add_def(self, sec: str, key: str, value: str) -> bool:
        """Add an assertion; return False if *value* is empty."""
        if value == "":
            return False

        assertion = Assertion(key=key, value=value)
        if sec in ("r", "p"):
            assertion.tokens = [f"{key}_{token}" for token in value.split(", ")]
        else:
            assertion.value = _remove_comments(_escape_assertion(value))

        self.setdefault(sec, {})[key] = assertion
        return True

    def _load_section(self, config: Config, sec: str) -> None:
        index = 1
        while True:
            key = sec + _key_suffix(index)
            value = config.get(f"{SECTION_NAMES[sec]}::{key}")
            if not self.add_def(sec, key, value):
                break
            index += 1

    def _load_config(self, config: Config) -> None:
        for sec in _LOAD_ORDER:
            self._load_section(config, sec)

    def load_model(self, path: str | Path) -> None:
        """Load the definitions from a CONF file."""
        self._load_config(Config.from_file(path))

    def load_model_from_text(self, text: str) -> None:
        """Load the definitions from CONF text."""
        self._load_config(Config.from_text(text))

    def print_model(self) -> None:
        """Write every definition to the log."""
        log_print("Model:")
        for sec, assertions in self.items():
            for key, assertion in assertions.items():
                log_printf("%s.%s: %s", sec, key, assertion.value)

    def build_role_links(self, rm: Any) -> None:
        """Register all grouping rules with the role manager *rm*."""
        for assertion in self.get("g", {}).values():
            assertion.build_role_links(rm)

    def print_policy(self) -> None:
        """Write the policy and grouping rules to the log."""
        log_print("Policy:")
        for sec in ("p", "g"):
            for key, assertion in self.get(sec, {}).items():
                log_print(key, ": ", assertion.value, ": ", assertion.policy)

    def clear_policy(self) -> None:
        """Drop all policy and grouping rules."""
        for sec in ("p", "g"):
            for assertion in self.get(sec, {}).values():
                assertion.policy = []

    def get_policy(self, sec: str, ptype: str) -> list[list[str]]:
        """Return all rules of a policy."""
        return list(self[sec][ptype].policy)

    @staticmethod
    def _matches(rule: Sequence[str], field_index: int, field_values: Sequence[str]) -> bool:
        return all(
            value == "" or rule[field_index + offset] == value
            for offset, value in enumerate(field_values)
        )

    def get_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> list[list[str]]:
        """Return the rules whose fields from *field_index* on match.

        An empty string among the field values matches anything.
        """
        return [
            rule
            for rule in self[sec][ptype].policy
            if self._matches(rule, field_index, field_values)
        ]

    def has_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Return whether *rule* is in the policy."""
        wanted = list(rule)
        return any(existing == wanted for existing in self[sec][ptype].policy)

    def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Add *rule*; return False if it was already there."""
        if self.has_policy(sec, ptype, rule):
            return False
        self[sec][ptype].policy.append(list(rule))
        return True

    def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Remove *rule*; return False if it was not there."""
        policy = self[sec][ptype].policy
        wanted = list(rule)
        for position, existing in enumerate(policy):
            if existing == wanted:
                del policy[position]
                return True
        return False

    def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> bool:
        """Remove the rules matching the field filter; return whether any went."""
        assertion = self[sec][ptype]
        kept = [
            rule
            for rule in assertion.policy
            if not self._matches(rule, field_index, field_values)
        ]
        removed = len(kept) != len(assertion.policy)
        assertion.policy = kept
        return removed

    def get_values_for_field_in_policy(
        self, sec: str, ptype: str, field_index: int
    ) -> list[str]:
        """Return the distinct values of one field, in order of first use."""
        return list(
            dict.fromkeys(rule[field_index] for rule in self[sec][ptype].policy)
        )