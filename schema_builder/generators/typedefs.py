"""
Type Definition Generator
=========================

Composes the guard-filtered GraphQL type-definition document.

Output layout:
    <top-level type defs, verbatim>
    type Query {
      <query fields>
    }
    type Mutation { ... }
    type Subscription { ... }

A group with no surviving fields produces no wrapper.
"""

from __future__ import annotations

import logging
import textwrap
from typing import Any, Iterable, Iterator, List, Optional

from schema_builder.fragments.models import Fragment, Group
from schema_builder.fragments.store import FragmentStore
from schema_builder.generators.base import Generator
from schema_builder.guards.registry import GuardRegistry

logger = logging.getLogger(__name__)


class TypeDefsGenerator(Generator):
    """Generates the type-definition document."""

    def __init__(self, store: FragmentStore, registry: GuardRegistry, indent: str = "  "):
        super().__init__(store, registry)
        self.indent = indent

    def fragments(self) -> Iterator[Fragment]:
        yield from self.store.type_defs(None)
        for group in Group:
            yield from self.store.type_defs(group)

    def wrap(self, group: Group, definitions: List[str]) -> str:
        """Wrap entrypoint fields in their synthesized root type."""
        body = "\n".join(textwrap.indent(definition, self.indent) for definition in definitions)
        return f"type {group.type_name} {{\n{body}\n}}"

    def generate(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> str:
        allowed = self.resolve_whitelist(whitelist)
        parts: List[str] = [
            fragment.definition
            for fragment in self.store.type_defs(None)
            if self.is_included(fragment, context, allowed)
        ]

        for group in Group:
            if not self.store.has_type_defs(group):
                continue

            survivors = [
                fragment.definition
                for fragment in self.store.type_defs(group)
                if self.is_included(fragment, context, allowed)
            ]
            if not survivors:
                logger.debug("All %s fields filtered out; omitting %s", group.value, group.type_name)
                continue

            parts.append(self.wrap(group, survivors))

        logger.debug("Generated %d type def block(s)", len(parts))
        return "\n".join(parts)
