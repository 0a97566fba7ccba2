"""
Schema Builder Core Package
===========================

Configuration shared by the builder, the registries and the CLI.
"""

from schema_builder.core.config import (
    BuilderConfig,
    DuplicateGuardPolicy,
    get_config,
    set_config,
)

__all__ = [
    "BuilderConfig",
    "DuplicateGuardPolicy",
    "get_config",
    "set_config",
]
