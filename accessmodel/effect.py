"""Policy effects and how matching results merge into one decision."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Sequence

ALLOW_OVERRIDE = "some(where (p_eft == allow))"
DENY_OVERRIDE = "!some(where (p_eft == deny))"
ALLOW_AND_DENY = "some(where (p_eft == allow)) && !some(where (p_eft == deny))"
PRIORITY = "priority(p_eft) || deny"


class Effect(enum.IntEnum):
    """The effect a single policy rule has on a request."""

    ALLOW = 0
    INDETERMINATE = 1
    DENY = 2


class UnsupportedEffectError(ValueError):
    """Raised for a policy effect expression the effector does not know."""

    def __init__(self, message: str = "unsupported effect") -> None:
        super().__init__(message)


class Effector(ABC):
    """Merges per-rule effects into a single allow/deny decision."""

    @abstractmethod
    def merge_effects(
        self, expr: str, effects: Sequence[Effect], results: Sequence[float]
    ) -> bool:
        """Return the decision for the rule *effects* under *expr*."""


class DefaultEffector(Effector):
    """Effector supporting the four built-in policy effect expressions."""

    def merge_effects(
        self, expr: str, effects: Sequence[Effect], results: Sequence[float]
    ) -> bool:
        if expr == ALLOW_OVERRIDE:
            return Effect.ALLOW in effects
        if expr == DENY_OVERRIDE:
            return Effect.DENY not in effects
        if expr == ALLOW_AND_DENY:
            result = False
            for eft in effects:
                if eft == Effect.ALLOW:
                    result = True
                elif eft == Effect.DENY:
                    return False
            return result
        if expr == PRIORITY:
            decided = next(
                (eft for eft in effects if eft != Effect.INDETERMINATE), None
            )
            return decided == Effect.ALLOW
        raise UnsupportedEffectError()