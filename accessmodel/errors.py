"""Errors reported by role managers."""


class RoleManagerError(Exception):
    """Base class for role manager errors."""

    default_message = "role manager error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NameNotFoundError(RoleManagerError):
    """A named user or role does not exist."""

    default_message = "error: name does not exist"


class DomainParameterError(RoleManagerError):
    """More than one domain was passed where one is allowed."""

    default_message = "error: domain should be 1 parameter"


class NamesNotFoundError(RoleManagerError):
    """One of the two names in a link does not exist."""

    default_message = "error: name1 or name2 does not exist"