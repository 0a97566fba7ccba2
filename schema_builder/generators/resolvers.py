"""
Resolver Generator
==================

Composes the guard-filtered resolver map:

    {
        "<TypeName>": <resolver definition>,
        "Query": {"<name>": <resolver definition>, ...},
        "Mutation": {...},
        "Subscription": {...},
    }

A group with registered resolvers is always emitted, as an empty mapping if
every resolver in it was filtered out. A group with nothing registered is
absent.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, Optional

from schema_builder.fragments.models import Fragment, Group
from schema_builder.generators.base import Generator

logger = logging.getLogger(__name__)


class ResolversGenerator(Generator):
    """Generates the resolver map."""

    def fragments(self) -> Iterator[Fragment]:
        yield from self.store.resolvers(None).values()
        for group in Group:
            yield from self.store.resolvers(group).values()

    def generate(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        allowed = self.resolve_whitelist(whitelist)
        resolvers: Dict[str, Any] = {
            name: fragment.definition
            for name, fragment in self.store.resolvers(None).items()
            if self.is_included(fragment, context, allowed)
        }

        for group in Group:
            if not self.store.has_resolvers(group):
                continue

            resolvers[group.type_name] = {
                name: fragment.definition
                for name, fragment in self.store.resolvers(group).items()
                if self.is_included(fragment, context, allowed)
            }

        logger.debug("Generated resolvers for %s", ", ".join(resolvers) or "nothing")
        return resolvers
