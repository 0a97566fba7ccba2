"""
Schema Builder Generators Package
=================================

Generators that turn the fragment store into a schema for one context.
"""

from schema_builder.generators.base import Generator
from schema_builder.generators.report import FragmentDecision, GenerationReport
from schema_builder.generators.resolvers import ResolversGenerator
from schema_builder.generators.typedefs import TypeDefsGenerator

__all__ = [
    "FragmentDecision",
    "GenerationReport",
    "Generator",
    "ResolversGenerator",
    "TypeDefsGenerator",
]
