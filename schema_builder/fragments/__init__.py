"""
Schema Builder Fragments Package
================================

Fragment types and the fragment store.
"""

from schema_builder.fragments.models import (
    ENTRYPOINT_MUTATION,
    ENTRYPOINT_QUERY,
    ENTRYPOINT_SUBSCRIPTION,
    Fragment,
    FragmentKind,
    Group,
    normalize_group,
)
from schema_builder.fragments.store import FragmentStore

__all__ = [
    "ENTRYPOINT_MUTATION",
    "ENTRYPOINT_QUERY",
    "ENTRYPOINT_SUBSCRIPTION",
    "Fragment",
    "FragmentKind",
    "FragmentStore",
    "Group",
    "normalize_group",
]
