"""
Schema Builder
==============

Guard-filtered GraphQL schema composition.

Parts of an application contribute type definitions and resolvers, each
tagged with guard ids. Per request, the builder keeps only the fragments
whose guards accept the request context and merges them into one type-def
document and one resolver map, ready for a GraphQL server library.

Quick Start:
    from schema_builder import SchemaBuilder, Guard

    class AdminGuard(Guard):
        guard_id = "admin"

        def validate(self, context, extras=()):
            return context.get("role") == "admin"

    builder = SchemaBuilder()
    builder.register_guards([AdminGuard])
    builder.add_type_def("type Secret { id: ID }", ["admin"])
    builder.add_entrypoint("secret", "query", "secret: Secret", resolve_secret, ["admin"])

    type_defs = builder.generate_type_defs({"role": "admin"})
    resolvers = builder.generate_resolvers({"role": "admin"})

    # Why was something left out?
    print(builder.explain({"role": "guest"}).format())
"""

__version__ = "1.0.0"

# Builder
from schema_builder.builder import (
    SchemaBuilder,
    get_builder,
    reset_builder,
)

# Guards
from schema_builder.guards import (
    CallableGuard,
    Guard,
    GuardOutcome,
    GuardReference,
    GuardRegistry,
    create_guard,
    determine_runnable_guards,
    parse_guard_references,
)

# Fragments
from schema_builder.fragments import (
    ENTRYPOINT_MUTATION,
    ENTRYPOINT_QUERY,
    ENTRYPOINT_SUBSCRIPTION,
    Fragment,
    FragmentKind,
    FragmentStore,
    Group,
)

# Generators
from schema_builder.generators import (
    FragmentDecision,
    GenerationReport,
    ResolversGenerator,
    TypeDefsGenerator,
)

# Core
from schema_builder.core import (
    BuilderConfig,
    DuplicateGuardPolicy,
    get_config,
    set_config,
)

# Errors
from schema_builder.errors import (
    DuplicateGuardError,
    DuplicateResolverError,
    GuardError,
    GuardNotFoundError,
    InvalidGroupError,
    InvalidGuardError,
    SchemaBuilderError,
)

__all__ = [
    # Version
    "__version__",
    # Builder
    "SchemaBuilder",
    "get_builder",
    "reset_builder",
    # Guards
    "CallableGuard",
    "Guard",
    "GuardOutcome",
    "GuardReference",
    "GuardRegistry",
    "create_guard",
    "determine_runnable_guards",
    "parse_guard_references",
    # Fragments
    "ENTRYPOINT_MUTATION",
    "ENTRYPOINT_QUERY",
    "ENTRYPOINT_SUBSCRIPTION",
    "Fragment",
    "FragmentKind",
    "FragmentStore",
    "Group",
    # Generators
    "FragmentDecision",
    "GenerationReport",
    "ResolversGenerator",
    "TypeDefsGenerator",
    # Core
    "BuilderConfig",
    "DuplicateGuardPolicy",
    "get_config",
    "set_config",
    # Errors
    "DuplicateGuardError",
    "DuplicateResolverError",
    "GuardError",
    "GuardNotFoundError",
    "InvalidGroupError",
    "InvalidGuardError",
    "SchemaBuilderError",
]
