"""
Generation Report
=================

Per-fragment include/exclude decisions for one context and whitelist.

Generation itself never raises on a failing guard; the report is where the
failure detail (guard id, extras, reason) is exposed.

Usage:
    report = builder.explain({"user": user})
    print(report.format())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from schema_builder.fragments.models import Fragment, FragmentKind, Group
from schema_builder.guards.base import GuardOutcome


@dataclass(frozen=True)
class FragmentDecision:
    """Whether one fragment survived its guards, and why."""

    fragment: Fragment
    outcome: GuardOutcome
    skipped: Tuple[str, ...] = ()

    @property
    def included(self) -> bool:
        return self.outcome.passed

    def __str__(self) -> str:
        """Format decision for display."""
        icon = "✅" if self.included else "❌"
        label = f"{self.fragment.kind.value} {self.fragment.describe()}"
        if self.fragment.group:
            label = f"{self.fragment.group.type_name}.{label}"
        result = f"{icon} {label}: {self.outcome.format()}"
        if self.skipped:
            result += f" (not whitelisted: {', '.join(self.skipped)})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.fragment.kind.value,
            "group": self.fragment.group.value if self.fragment.group else None,
            "name": self.fragment.name,
            "guards": [str(ref) for ref in self.fragment.guards],
            "included": self.included,
            "skipped": list(self.skipped),
            "outcome": self.outcome.to_dict(),
        }


@dataclass
class GenerationReport:
    """Decisions for every fragment in the store."""

    whitelist: Tuple[str, ...] = ()
    decisions: List[FragmentDecision] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def included(self) -> List[FragmentDecision]:
        return [d for d in self.decisions if d.included]

    @property
    def excluded(self) -> List[FragmentDecision]:
        return [d for d in self.decisions if not d.included]

    def get_by_kind(self, kind: FragmentKind) -> List[FragmentDecision]:
        """Get decisions by fragment kind."""
        return [d for d in self.decisions if d.fragment.kind == kind]

    def get_by_group(self, group: Optional[Group]) -> List[FragmentDecision]:
        """Get decisions by group; None selects top-level fragments."""
        return [d for d in self.decisions if d.fragment.group == group]

    def find(self, name: str, group: Optional[Group] = None) -> Optional[FragmentDecision]:
        """Find the decision for a named resolver."""
        for decision in self.decisions:
            if decision.fragment.name == name and decision.fragment.group == group:
                return decision
        return None

    def format(self) -> str:
        """Format the report for display."""
        lines = [
            "",
            "═══════════════════════════════════════════════════════════",
            "                    SCHEMA GENERATION",
            "═══════════════════════════════════════════════════════════",
            "",
            f"Whitelist: {', '.join(self.whitelist) if self.whitelist else '(none)'}",
            "",
        ]

        for kind in FragmentKind:
            decisions = self.get_by_kind(kind)
            if not decisions:
                continue
            lines.append(f"─── {kind.value.upper()} ───")
            for d in decisions:
                lines.append(f"  {d}")
            lines.append("")

        lines.append("═══════════════════════════════════════════════════════════")
        lines.append(
            f"Summary: {len(self.included)} included | {len(self.excluded)} excluded | "
            f"{self.execution_time_ms:.1f}ms"
        )
        lines.append("═══════════════════════════════════════════════════════════")

        return "\n".join(lines)

    def format_short(self) -> str:
        """Format a short summary."""
        return f"{len(self.included)} included, {len(self.excluded)} excluded"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "whitelist": list(self.whitelist),
            "decisions": [d.to_dict() for d in self.decisions],
            "execution_time_ms": self.execution_time_ms,
        }
