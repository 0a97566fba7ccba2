"""
Guard Base Module
=================

Base classes and types for the schema builder guard system.

A guard is an authorization predicate identified by a stable string id. The
builder evaluates guards against a request context to decide whether a schema
fragment is included in the generated schema.

Guard references:
- "admin"                 -> guard "admin", no extras
- "role:admin,editor"     -> guard "role", extras ("admin", "editor")

References are parsed once, when a fragment is added, into GuardReference
records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple, Type, Union

from schema_builder.errors import GuardError


GUARD_EXTRAS_DELIMITER = ":"
GUARD_EXTRAS_SEPARATOR = ","


@dataclass(frozen=True)
class GuardReference:
    """A guard id plus the extra arguments passed to its predicate."""

    guard_id: str
    extras: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: Union[str, "GuardReference"]) -> "GuardReference":
        """Parse the "id:extra1,extra2" micro-format."""
        if isinstance(value, GuardReference):
            return value
        if not isinstance(value, str):
            raise TypeError(
                f"Guard reference must be a string or GuardReference, got {type(value).__name__}"
            )

        guard_id, delimiter, rest = value.partition(GUARD_EXTRAS_DELIMITER)
        guard_id = guard_id.strip()
        if not guard_id:
            raise ValueError(f"Guard reference '{value}' has no guard id")

        extras: Tuple[str, ...] = ()
        if delimiter:
            extras = tuple(
                extra.strip() for extra in rest.split(GUARD_EXTRAS_SEPARATOR) if extra.strip()
            )
        return cls(guard_id=guard_id, extras=extras)

    def __str__(self) -> str:
        if not self.extras:
            return self.guard_id
        return f"{self.guard_id}{GUARD_EXTRAS_DELIMITER}{GUARD_EXTRAS_SEPARATOR.join(self.extras)}"


GuardRefLike = Union[str, GuardReference]


def parse_guard_references(
    guards: Union[None, GuardRefLike, Iterable[GuardRefLike]],
) -> Tuple[GuardReference, ...]:
    """Normalize a guard list into GuardReference records, order preserved."""
    if guards is None:
        return ()
    if isinstance(guards, (str, GuardReference)):
        guards = [guards]
    return tuple(GuardReference.parse(guard) for guard in guards)


@dataclass(frozen=True)
class GuardOutcome:
    """
    Result of validating a guard list.

    Truthy when every guard passed. On failure it names the guard that
    stopped evaluation and the extras it was called with.
    """

    passed: bool
    evaluated: Tuple[str, ...] = ()
    guard_id: Optional[str] = None
    extras: Tuple[str, ...] = ()
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.passed

    @classmethod
    def success(cls, evaluated: Sequence[str] = ()) -> "GuardOutcome":
        return cls(passed=True, evaluated=tuple(evaluated))

    @classmethod
    def failure(
        cls,
        reference: GuardReference,
        evaluated: Sequence[str] = (),
        reason: Optional[str] = None,
    ) -> "GuardOutcome":
        return cls(
            passed=False,
            evaluated=tuple(evaluated),
            guard_id=reference.guard_id,
            extras=reference.extras,
            reason=reason,
        )

    @classmethod
    def from_error(cls, error: GuardError, evaluated: Sequence[str] = ()) -> "GuardOutcome":
        return cls(
            passed=False,
            evaluated=tuple(evaluated),
            guard_id=error.guard_id,
            extras=error.extras,
            reason=error.reason or str(error),
        )

    def format(self) -> str:
        """Format outcome for display."""
        if self.passed:
            return "passed"
        result = f"failed on {self.guard_id}"
        if self.extras:
            result += f" ({', '.join(self.extras)})"
        if self.reason:
            result += f": {self.reason}"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "passed": self.passed,
            "evaluated": list(self.evaluated),
            "guard_id": self.guard_id,
            "extras": list(self.extras),
            "reason": self.reason,
        }


class Guard(ABC):
    """
    Abstract base class for all guards.

    Subclasses set ``guard_id`` (or override ``id()``) and implement
    ``validate``. Guards are instantiated by the registry with no arguments.
    """

    guard_id: str = ""
    description: str = ""

    def id(self) -> str:
        """Stable identifier used to reference this guard."""
        if not self.guard_id:
            raise NotImplementedError(f"{type(self).__name__} does not declare a guard id")
        return self.guard_id

    @abstractmethod
    def validate(self, context: Any, extras: Tuple[str, ...] = ()) -> bool:
        """
        Decide whether the context satisfies this guard.

        Args:
            context: Request context, passed through unmodified
            extras: Extra arguments from the guard reference

        Returns:
            True to allow the fragment, False to exclude it. Raising
            GuardError also excludes it, with detail.
        """

    def fail(self, extras: Sequence[str] = (), reason: Optional[str] = None) -> GuardError:
        """Build a GuardError for this guard."""
        return GuardError(self.id(), extras, reason)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.guard_id or '?'}>"


GuardPredicate = Callable[[Any, Tuple[str, ...]], bool]


class CallableGuard(Guard):
    """
    Guard that delegates to a predicate function.

    Subclasses must store the predicate as a staticmethod.
    """

    predicate: Optional[GuardPredicate] = None

    def validate(self, context: Any, extras: Tuple[str, ...] = ()) -> bool:
        """Run the predicate."""
        if self.predicate is None:
            raise NotImplementedError(f"{type(self).__name__} has no predicate")
        return bool(self.predicate(context, extras))


def create_guard(
    guard_id: str,
    predicate: GuardPredicate,
    description: str = "",
) -> Type[CallableGuard]:
    """
    Factory function to create a guard class from a predicate.

    Args:
        guard_id: Guard id
        predicate: Callable taking (context, extras) and returning a bool
        description: Guard description

    Returns:
        A CallableGuard subclass, constructible with no arguments, ready to
        pass to ``register_guards``.
    """
    if not guard_id:
        raise ValueError("guard_id must be a non-empty string")

    class_name = "".join(part.title() for part in guard_id.replace("-", "_").split("_")) + "Guard"
    return type(
        class_name,
        (CallableGuard,),
        {
            "guard_id": guard_id,
            "description": description,
            "predicate": staticmethod(predicate),
        },
    )


# Type alias for anything register_guards accepts
GuardFactory = Callable[[], Guard]
