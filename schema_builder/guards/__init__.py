"""
Schema Builder Guards Package
=============================

Central export point for guard types and the guard registry.
"""

from schema_builder.guards.base import (
    CallableGuard,
    Guard,
    GuardFactory,
    GuardOutcome,
    GuardReference,
    create_guard,
    parse_guard_references,
)

from schema_builder.guards.registry import (
    GuardRegistry,
    determine_runnable_guards,
)

__all__ = [
    # Base classes
    "CallableGuard",
    "Guard",
    "GuardFactory",
    "GuardOutcome",
    "GuardReference",
    "create_guard",
    "parse_guard_references",
    # Registry
    "GuardRegistry",
    "determine_runnable_guards",
]
