"""
Schema Builder Errors
=====================

Exception hierarchy for the schema builder.

Configuration errors (invalid group, duplicate resolver, unknown guard) are
raised to the caller and abort the offending call. Guard failures are not
errors at generation time: a guard that returns False or raises GuardError
only excludes the fragment it protects.
"""

from typing import Any, Optional, Sequence, Tuple


class SchemaBuilderError(Exception):
    """Base class for all schema builder errors."""


class InvalidGroupError(SchemaBuilderError, ValueError):
    """A fragment was added under a group outside the closed set."""

    def __init__(self, group: Any):
        self.group = group
        super().__init__(f'Invalid group "{group}" specified')


class DuplicateResolverError(SchemaBuilderError):
    """A resolver name is already taken within its group."""

    def __init__(self, name: str, group: Optional[str] = None):
        self.name = name
        self.group = group
        where = f" in group '{group}'" if group else ""
        super().__init__(f"Type {name} already defined{where}")


class GuardNotFoundError(SchemaBuilderError, KeyError):
    """A guard reference names an id with no registered guard."""

    def __init__(self, guard_id: str):
        self.guard_id = guard_id
        super().__init__(guard_id)

    def __str__(self) -> str:
        return f"Guard ({self.guard_id}) not found"


class DuplicateGuardError(SchemaBuilderError):
    """A guard id was registered twice under the 'error' duplicate policy."""

    def __init__(self, guard_id: str):
        self.guard_id = guard_id
        super().__init__(f"Guard ({guard_id}) already registered")


class InvalidGuardError(SchemaBuilderError, TypeError):
    """A registered factory did not produce a usable guard."""


class GuardError(SchemaBuilderError):
    """
    Structured guard failure.

    Guards may raise this from ``validate`` to fail with detail instead of
    returning False. The evaluator catches it and records the failure; it
    never escapes a generation call.
    """

    def __init__(
        self,
        guard_id: str,
        extras: Sequence[str] = (),
        reason: Optional[str] = None,
    ):
        self.guard_id = guard_id
        self.extras: Tuple[str, ...] = tuple(extras)
        self.reason = reason
        message = f"Guard ({guard_id}) failed"
        if self.extras:
            message += f" with extras {list(self.extras)}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


__all__ = [
    "SchemaBuilderError",
    "InvalidGroupError",
    "DuplicateResolverError",
    "GuardNotFoundError",
    "DuplicateGuardError",
    "InvalidGuardError",
    "GuardError",
]
