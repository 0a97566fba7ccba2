"""
Fragment Models
===============

Data types for contributed schema fragments.

Groups:
- query / mutation / subscription: entrypoint fields, wrapped in a
  synthesized Query / Mutation / Subscription type on generation
- None: top-level types, emitted as-is
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from schema_builder.errors import InvalidGroupError
from schema_builder.guards.base import GuardReference


class Group(str, Enum):
    """Entrypoint categories, in generation order."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"

    @property
    def type_name(self) -> str:
        """Name of the synthesized wrapper type, e.g. "Query"."""
        return self.value.title()


ENTRYPOINT_QUERY = Group.QUERY.value
ENTRYPOINT_MUTATION = Group.MUTATION.value
ENTRYPOINT_SUBSCRIPTION = Group.SUBSCRIPTION.value

GroupLike = Union[None, str, Group]


def normalize_group(group: GroupLike) -> Optional[Group]:
    """Map a caller-supplied group onto the closed set, or raise InvalidGroupError."""
    if group is None or isinstance(group, Group):
        return group
    if isinstance(group, str):
        try:
            return Group(group)
        except ValueError:
            raise InvalidGroupError(group) from None
    raise InvalidGroupError(group)


class FragmentKind(str, Enum):
    """Kinds of contributed fragments."""

    TYPE_DEF = "type_def"
    RESOLVER = "resolver"


@dataclass(frozen=True)
class Fragment:
    """One contributed type definition or named resolver."""

    kind: FragmentKind
    definition: Any
    guards: Tuple[GuardReference, ...] = ()
    group: Optional[Group] = None
    name: Optional[str] = None

    @property
    def guard_ids(self) -> Tuple[str, ...]:
        return tuple(ref.guard_id for ref in self.guards)

    def describe(self) -> str:
        """Short human-readable label."""
        if self.name:
            return self.name
        text = " ".join(str(self.definition).split())
        return text if len(text) <= 40 else text[:37] + "..."
