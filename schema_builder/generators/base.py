"""
Generator Base
==============

Shared guard filtering for the type-def and resolver generators.

For each fragment:
1. References outside the whitelist are dropped and count as satisfied
2. The remaining guards are evaluated in order against the context; an id
   that was never registered excludes the fragment like a failing guard
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, FrozenSet, Iterable, Iterator, Optional

from schema_builder.fragments.models import Fragment
from schema_builder.fragments.store import FragmentStore
from schema_builder.generators.report import FragmentDecision
from schema_builder.guards.registry import GuardRegistry, determine_runnable_guards


class Generator(ABC):
    """Abstract base class for generators."""

    def __init__(self, store: FragmentStore, registry: GuardRegistry):
        self.store = store
        self.registry = registry

    def resolve_whitelist(self, whitelist: Optional[Iterable[str]]) -> FrozenSet[str]:
        """No whitelist means every currently registered guard is enforced."""
        if whitelist is None:
            return frozenset(self.registry.get_ids())
        if isinstance(whitelist, str):
            whitelist = [whitelist]
        return frozenset(whitelist)

    def decide(self, fragment: Fragment, context: Any, whitelist: FrozenSet[str]) -> FragmentDecision:
        """Evaluate one fragment's guards."""
        runnable = determine_runnable_guards(fragment.guards, whitelist)
        skipped = tuple(ref.guard_id for ref in fragment.guards if ref.guard_id not in whitelist)
        outcome = self.registry.validate_guards(runnable, context)
        return FragmentDecision(fragment=fragment, outcome=outcome, skipped=skipped)

    def is_included(self, fragment: Fragment, context: Any, whitelist: FrozenSet[str]) -> bool:
        return self.decide(fragment, context, whitelist).included

    def iter_decisions(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> Iterator[FragmentDecision]:
        """Decisions for every fragment this generator covers, in generation order."""
        allowed = self.resolve_whitelist(whitelist)
        for fragment in self.fragments():
            yield self.decide(fragment, context, allowed)

    @abstractmethod
    def fragments(self) -> Iterator[Fragment]:
        """Fragments covered by this generator, in generation order."""

    @abstractmethod
    def generate(self, context: Any, whitelist: Optional[Iterable[str]] = None) -> Any:
        """Build the filtered artifact for a context."""
