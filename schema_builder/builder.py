"""
Schema Builder
==============

Composition object owning the guard registry, the fragment store and the
two generators.

Lifecycle:
1. Register guards
2. Contribute type defs, resolvers and entrypoints, tagged with guard ids
3. Per request, generate type defs and resolvers for that request's context

Registration must finish before generation starts. Generation never mutates
the builder, so concurrent generation calls against a populated builder are
safe.

Usage:
    builder = SchemaBuilder()
    builder.register_guards([AdminGuard])
    builder.add_type_def("type Foo { id: ID }", ["admin"])
    builder.add_entrypoint("foo", "query", "foo(id: ID): Foo", resolve_foo)

    type_defs = builder.generate_type_defs(context)
    resolvers = builder.generate_resolvers(context)
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from schema_builder.core.config import BuilderConfig, get_config
from schema_builder.fragments.models import (
    ENTRYPOINT_MUTATION,
    ENTRYPOINT_QUERY,
    ENTRYPOINT_SUBSCRIPTION,
    Fragment,
    GroupLike,
)
from schema_builder.fragments.store import FragmentStore, GuardsArg
from schema_builder.generators.report import GenerationReport
from schema_builder.generators.resolvers import ResolversGenerator
from schema_builder.generators.typedefs import TypeDefsGenerator
from schema_builder.guards.base import Guard, GuardFactory
from schema_builder.guards.registry import GuardRegistry

logger = logging.getLogger(__name__)


class SchemaBuilder:
    """Builds guard-filtered GraphQL type defs and resolvers."""

    ENTRYPOINT_QUERY = ENTRYPOINT_QUERY
    ENTRYPOINT_MUTATION = ENTRYPOINT_MUTATION
    ENTRYPOINT_SUBSCRIPTION = ENTRYPOINT_SUBSCRIPTION

    def __init__(self, config: Optional[BuilderConfig] = None):
        self.config = config or get_config()
        self.guards = GuardRegistry(duplicate_policy=self.config.duplicate_guards)
        self.store = FragmentStore()
        self.type_defs_generator = TypeDefsGenerator(self.store, self.guards, indent=self.config.indent)
        self.resolvers_generator = ResolversGenerator(self.store, self.guards)

    # =========================================================================
    # Guards
    # =========================================================================

    def register_guards(self, guards: Union[GuardFactory, Iterable[GuardFactory]]) -> None:
        """Register one guard factory or a sequence of them."""
        self.guards.register(guards)

    def get_guard_instance(self, guard_id: str) -> Guard:
        return self.guards.get(guard_id)

    def get_guard_instances(self) -> Dict[str, Guard]:
        return self.guards.get_instances()

    def get_guard_ids(self) -> List[str]:
        return self.guards.get_ids()

    def get_guards(self) -> List[GuardFactory]:
        """Registered guard factories, in registration order."""
        return self.guards.get_factories()

    def unresolved_guards(self) -> List[str]:
        """Guard ids referenced by fragments but never registered."""
        references = (ref for fragment in self.store.iter_fragments() for ref in fragment.guards)
        return self.guards.unresolved(references)

    # =========================================================================
    # Fragments
    # =========================================================================

    def add_type_def(self, type_def: str, guards: GuardsArg = (), group: GroupLike = None) -> Fragment:
        return self.store.add_type_def(type_def, guards, group)

    def add_type_defs(self, type_defs: Iterable[Union[str, Mapping[str, Any]]]) -> None:
        self.store.add_type_defs(type_defs)

    def add_resolver(
        self,
        name: str,
        resolver: Any,
        group: GroupLike = None,
        guards: GuardsArg = (),
    ) -> Fragment:
        return self.store.add_resolver(name, resolver, group, guards)

    def add_resolvers(self, resolvers: Mapping[str, Mapping[str, Any]]) -> None:
        self.store.add_resolvers(resolvers)

    def add_type_resolver(self, name: str, resolver: Any, guards: GuardsArg = ()) -> Fragment:
        return self.store.add_type_resolver(name, resolver, guards)

    def add_type_resolvers(self, resolvers: Mapping[str, Mapping[str, Any]]) -> None:
        self.store.add_type_resolvers(resolvers)

    def add_entrypoint(
        self,
        name: str,
        group: GroupLike,
        type_def: str,
        resolver: Any,
        guards: GuardsArg = (),
    ) -> None:
        self.store.add_entrypoint(name, group, type_def, resolver, guards)

    def add_type(self, name: str, type_def: str, resolver: Any, guards: GuardsArg = ()) -> None:
        self.store.add_type(name, type_def, resolver, guards)

    def get_resolver(self, name: str, group: GroupLike = None) -> Optional[Fragment]:
        return self.store.get_resolver(name, group)

    def get_statistics(self) -> Dict[str, int]:
        stats = self.store.get_statistics()
        stats["guards"] = len(self.guards)
        return stats

    # =========================================================================
    # Generation
    # =========================================================================

    def generate_type_defs(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> str:
        """
        Compose the type-definition document for a context.

        Args:
            context: Request context, handed to every guard unmodified
            whitelist: Guard ids to enforce. Defaults to every registered
                guard; ids outside it are treated as satisfied.

        Returns:
            The composed document, "" when nothing survives
        """
        return self.type_defs_generator.generate(context, whitelist)

    def generate_resolvers(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Compose the resolver map for a context. See generate_type_defs."""
        return self.resolvers_generator.generate(context, whitelist)

    def generate(
        self, context: Any, whitelist: Optional[Iterable[str]] = None
    ) -> Tuple[str, Dict[str, Any]]:
        """Compose both type defs and resolvers for a context."""
        if whitelist is not None:
            whitelist = list(whitelist)
        return self.generate_type_defs(context, whitelist), self.generate_resolvers(context, whitelist)

    def explain(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> GenerationReport:
        """Report why each fragment would be included or excluded for a context."""
        start = time.time()
        if whitelist is not None:
            whitelist = list(whitelist)

        decisions = list(self.type_defs_generator.iter_decisions(context, whitelist))
        decisions.extend(self.resolvers_generator.iter_decisions(context, whitelist))

        allowed = self.type_defs_generator.resolve_whitelist(whitelist)
        report = GenerationReport(
            whitelist=tuple(sorted(allowed)),
            decisions=decisions,
            execution_time_ms=(time.time() - start) * 1000,
        )
        logger.debug("Explained %d fragment(s): %s", len(decisions), report.format_short())
        return report


# Global builder instance
_builder: Optional[SchemaBuilder] = None


def get_builder() -> SchemaBuilder:
    """Get or create the global schema builder."""
    global _builder
    if _builder is None:
        _builder = SchemaBuilder()
    return _builder


def reset_builder() -> None:
    """Drop the global schema builder."""
    global _builder
    _builder = None


__all__ = [
    "SchemaBuilder",
    "get_builder",
    "reset_builder",
]
