"""
Fragment Store
==============

Append-only store of contributed type definitions and resolvers.

Type definitions are kept per group as an ordered list; duplicates are
allowed and all are emitted. Resolvers are kept per group as a name ->
fragment mapping; names are unique within a group.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from schema_builder.errors import DuplicateResolverError
from schema_builder.fragments.models import (
    Fragment,
    FragmentKind,
    Group,
    GroupLike,
    normalize_group,
)
from schema_builder.guards.base import GuardRefLike, parse_guard_references


GuardsArg = Union[None, GuardRefLike, Iterable[GuardRefLike]]


class FragmentStore:
    """Holds fragments by group."""

    def __init__(self) -> None:
        self._type_defs: Dict[Optional[Group], List[Fragment]] = {None: []}
        self._resolvers: Dict[Optional[Group], Dict[str, Fragment]] = {}

    # =========================================================================
    # Type definitions
    # =========================================================================

    def add_type_def(self, definition: str, guards: GuardsArg = (), group: GroupLike = None) -> Fragment:
        """Append a type definition to its group."""
        group = normalize_group(group)
        fragment = Fragment(
            kind=FragmentKind.TYPE_DEF,
            definition=definition,
            guards=parse_guard_references(guards),
            group=group,
        )
        self._type_defs.setdefault(group, []).append(fragment)
        return fragment

    def add_type_defs(self, items: Iterable[Union[str, Mapping[str, Any]]]) -> None:
        """
        Add several type definitions.

        Each item is a definition string or a mapping with ``definition`` and
        optional ``guards`` and ``group``.
        """
        for item in items:
            if isinstance(item, str):
                self.add_type_def(item)
            else:
                self.add_type_def(item["definition"], item.get("guards", ()), item.get("group"))

    # =========================================================================
    # Resolvers
    # =========================================================================

    def add_resolver(
        self,
        name: str,
        definition: Any,
        group: GroupLike = None,
        guards: GuardsArg = (),
    ) -> Fragment:
        """Add a named resolver; names must be unique within a group."""
        group = normalize_group(group)
        self._check_resolver_free(name, group)
        fragment = Fragment(
            kind=FragmentKind.RESOLVER,
            definition=definition,
            guards=parse_guard_references(guards),
            group=group,
            name=name,
        )
        self._resolvers.setdefault(group, {})[name] = fragment
        return fragment

    def add_resolvers(self, items: Mapping[str, Mapping[str, Any]]) -> None:
        """Add resolvers from a name -> {definition, group, guards} mapping."""
        for name, item in items.items():
            self.add_resolver(name, item["definition"], item.get("group"), item.get("guards", ()))

    def add_type_resolver(self, name: str, definition: Any, guards: GuardsArg = ()) -> Fragment:
        """Add a resolver for a top-level type."""
        return self.add_resolver(name, definition, None, guards)

    def add_type_resolvers(self, items: Mapping[str, Mapping[str, Any]]) -> None:
        """Add top-level type resolvers from a name -> {definition, guards} mapping."""
        for name, item in items.items():
            self.add_type_resolver(name, item["definition"], item.get("guards", ()))

    def _check_resolver_free(self, name: str, group: Optional[Group]) -> None:
        if name in self._resolvers.get(group, {}):
            raise DuplicateResolverError(name, group.value if group else None)

    # =========================================================================
    # Entrypoints
    # =========================================================================

    def add_entrypoint(
        self,
        name: str,
        group: GroupLike,
        type_def: str,
        resolver: Any,
        guards: GuardsArg = (),
    ) -> None:
        """Add a type definition and its resolver under one guard list."""
        group = normalize_group(group)
        # A name collision must not leave the type def behind
        self._check_resolver_free(name, group)
        references = parse_guard_references(guards)
        self.add_type_def(type_def, references, group)
        self.add_resolver(name, resolver, group, references)

    def add_type(self, name: str, type_def: str, resolver: Any, guards: GuardsArg = ()) -> None:
        """Add a top-level type definition and its resolver under one guard list."""
        self.add_entrypoint(name, None, type_def, resolver, guards)

    # =========================================================================
    # Read access
    # =========================================================================

    def type_defs(self, group: GroupLike = None) -> List[Fragment]:
        return list(self._type_defs.get(normalize_group(group), []))

    def resolvers(self, group: GroupLike = None) -> Dict[str, Fragment]:
        return dict(self._resolvers.get(normalize_group(group), {}))

    def has_type_defs(self, group: GroupLike = None) -> bool:
        return bool(self._type_defs.get(normalize_group(group)))

    def has_resolvers(self, group: GroupLike = None) -> bool:
        return bool(self._resolvers.get(normalize_group(group)))

    def get_resolver(self, name: str, group: GroupLike = None) -> Optional[Fragment]:
        """Get a resolver fragment by name."""
        return self._resolvers.get(normalize_group(group), {}).get(name)

    def iter_fragments(self) -> Iterator[Fragment]:
        """All fragments: type defs first, then resolvers, each in generation order."""
        for group in (None, *Group):
            yield from self._type_defs.get(group, [])
        for group in (None, *Group):
            yield from self._resolvers.get(group, {}).values()

    def get_statistics(self) -> Dict[str, int]:
        """Fragment counts, overall and per group."""
        stats = {
            "type_defs": sum(len(items) for items in self._type_defs.values()),
            "resolvers": sum(len(items) for items in self._resolvers.values()),
            "type_level_type_defs": len(self._type_defs.get(None, [])),
            "type_level_resolvers": len(self._resolvers.get(None, {})),
        }
        for group in Group:
            stats[f"{group.value}_type_defs"] = len(self._type_defs.get(group, []))
            stats[f"{group.value}_resolvers"] = len(self._resolvers.get(group, {}))
        return stats

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_fragments())
