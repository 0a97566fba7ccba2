"""
Guard Registry
===============

Registry of guard instances keyed by guard id.

The registry:
- Instantiates registered guard factories and keys them by their own id()
- Keeps the raw factories in registration order for introspection
- Resolves guard references and evaluates them against a context

Usage:
    registry = GuardRegistry()
    registry.register([AdminGuard, RoleGuard])
    outcome = registry.validate_guards(parse_guard_references(["role:admin"]), context)
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from schema_builder.core.config import DuplicateGuardPolicy
from schema_builder.errors import (
    DuplicateGuardError,
    GuardError,
    GuardNotFoundError,
    InvalidGuardError,
)
from schema_builder.guards.base import Guard, GuardFactory, GuardOutcome, GuardReference

logger = logging.getLogger(__name__)


def determine_runnable_guards(
    references: Sequence[GuardReference],
    whitelist: Optional[Collection[str]],
) -> Tuple[GuardReference, ...]:
    """
    Narrow a guard list to the references whose id is whitelisted.

    Order is preserved. References outside the whitelist are treated as
    satisfied and never evaluated. A None whitelist keeps everything.
    """
    if whitelist is None:
        return tuple(references)
    allowed = whitelist if isinstance(whitelist, (set, frozenset)) else set(whitelist)
    return tuple(ref for ref in references if ref.guard_id in allowed)


class GuardRegistry:
    """Central registry for guards."""

    def __init__(self, duplicate_policy: DuplicateGuardPolicy = DuplicateGuardPolicy.OVERWRITE):
        self.duplicate_policy = DuplicateGuardPolicy(duplicate_policy)
        self._factories: List[GuardFactory] = []
        self._instances: Dict[str, Guard] = {}

    def register(self, guards: Union[GuardFactory, Iterable[GuardFactory]]) -> None:
        """
        Register one guard factory or any iterable of them.

        Each factory is called with no arguments and the instance is stored
        under its own id(). The first failing factory aborts the call; those
        registered before it stay registered.
        """
        if callable(guards) or not isinstance(guards, Iterable):
            factories = [guards]
        else:
            factories = list(guards)

        for factory in factories:
            instance = self._instantiate(factory)
            guard_id = instance.id()

            if guard_id in self._instances:
                if self.duplicate_policy == DuplicateGuardPolicy.ERROR:
                    raise DuplicateGuardError(guard_id)
                logger.warning(
                    "Guard %s registered twice; %r replaces %r",
                    guard_id,
                    instance,
                    self._instances[guard_id],
                )

            self._factories.append(factory)
            self._instances[guard_id] = instance
            logger.debug("Registered guard %s", guard_id)

    def _instantiate(self, factory: GuardFactory) -> Guard:
        """Call a factory and check the result quacks like a guard."""
        if not callable(factory):
            raise InvalidGuardError(f"Guard factory {factory!r} is not callable")

        instance = factory()
        if not callable(getattr(instance, "id", None)) or not callable(
            getattr(instance, "validate", None)
        ):
            raise InvalidGuardError(
                f"{factory!r} did not produce a guard with id() and validate()"
            )

        guard_id = instance.id()
        if not isinstance(guard_id, str) or not guard_id:
            raise InvalidGuardError(f"{factory!r} produced a guard with invalid id {guard_id!r}")
        return instance

    def get(self, guard_id: str) -> Guard:
        """Get a guard instance by id."""
        try:
            return self._instances[guard_id]
        except KeyError:
            raise GuardNotFoundError(guard_id) from None

    def has(self, guard_id: str) -> bool:
        """Check whether a guard id is registered."""
        return guard_id in self._instances

    def get_ids(self) -> List[str]:
        """Registered guard ids, in first-registration order."""
        return list(self._instances.keys())

    def get_factories(self) -> List[GuardFactory]:
        """Registered factories in registration order, duplicates included."""
        return list(self._factories)

    def get_instances(self) -> Dict[str, Guard]:
        """Snapshot of guard id -> instance."""
        return dict(self._instances)

    def unresolved(self, references: Iterable[GuardReference]) -> List[str]:
        """Ids referenced but not registered, in first-seen order."""
        missing: List[str] = []
        for ref in references:
            if ref.guard_id not in self._instances and ref.guard_id not in missing:
                missing.append(ref.guard_id)
        return missing

    def validate_guards(self, references: Sequence[GuardReference], context: Any) -> GuardOutcome:
        """
        Evaluate guards in order against a context.

        Stops at the first guard that returns False, raises GuardError or
        names an id that was never registered.
        """
        evaluated: List[str] = []

        for ref in references:
            guard = self._instances.get(ref.guard_id)
            if guard is None:
                logger.debug("Guard %s is not registered", ref)
                return GuardOutcome.failure(ref, evaluated, str(GuardNotFoundError(ref.guard_id)))
            evaluated.append(ref.guard_id)

            try:
                allowed = guard.validate(context, ref.extras)
            except GuardError as e:
                logger.debug("Guard %s raised: %s", ref, e)
                return GuardOutcome.from_error(e, evaluated)

            if not allowed:
                logger.debug("Guard %s rejected context", ref)
                return GuardOutcome.failure(ref, evaluated)

        return GuardOutcome.success(evaluated)

    def list_guards(self) -> List[Dict[str, Any]]:
        """List all guards with their details."""
        return [
            {
                "id": guard_id,
                "class": type(guard).__name__,
                "description": getattr(guard, "description", "") or "",
            }
            for guard_id, guard in self._instances.items()
        ]

    def __len__(self) -> int:
        return len(self._instances)

    def __contains__(self, guard_id: object) -> bool:
        return guard_id in self._instances


__all__ = [
    "GuardRegistry",
    "determine_runnable_guards",
]
