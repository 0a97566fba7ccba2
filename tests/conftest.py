"""Pytest configuration for schema builder tests."""

import sys
from pathlib import Path

# Ensure we import from the local package, not any other installed version
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from schema_builder.core.config import BuilderConfig, set_config
from schema_builder.builder import SchemaBuilder, reset_builder
from schema_builder.guards.base import Guard


class FooGuard(Guard):
    """Passes when context["foo"] == "bar"."""

    guard_id = "test_guard"

    def validate(self, context, extras=()):
        return context.get("foo") == "bar"


class OtherGuard(Guard):
    """Passes when context["other"] == "derp"."""

    guard_id = "other_guard"

    def validate(self, context, extras=()):
        return context.get("other") == "derp"


class RoleGuard(Guard):
    """Passes when context["role"] is one of the extras."""

    guard_id = "role"

    def validate(self, context, extras=()):
        role = context.get("role")
        if role is None:
            raise self.fail(extras, "no role in context")
        return role in extras


class CountingGuard(Guard):
    """Records every context it is asked about."""

    guard_id = "counting"
    calls = []

    def validate(self, context, extras=()):
        CountingGuard.calls.append(context)
        return True


@pytest.fixture(autouse=True)
def isolated_config():
    """Keep tests independent of any config file in the working directory."""
    set_config(BuilderConfig())
    reset_builder()
    CountingGuard.calls = []
    yield
    set_config(None)
    reset_builder()


@pytest.fixture
def guard_classes():
    """Guard classes used across tests."""
    return {
        "foo": FooGuard,
        "other": OtherGuard,
        "role": RoleGuard,
        "counting": CountingGuard,
    }


@pytest.fixture
def builder():
    """An empty builder."""
    return SchemaBuilder(config=BuilderConfig())


@pytest.fixture
def guarded_builder(builder):
    """A builder with test_guard and other_guard registered."""
    builder.register_guards([FooGuard, OtherGuard])
    return builder


@pytest.fixture
def strip_ws():
    """Remove all whitespace, for comparing generated documents."""
    return lambda text: "".join(text.split())
