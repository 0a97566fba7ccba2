"""Tests for guard base types."""

import pytest

from schema_builder.errors import GuardError
from schema_builder.guards.base import (
    CallableGuard,
    Guard,
    GuardOutcome,
    GuardReference,
    create_guard,
    parse_guard_references,
)


class TestGuardReference:
    """Tests for GuardReference parsing."""

    def test_plain_id(self):
        """A bare id has no extras."""
        ref = GuardReference.parse("admin")
        assert ref.guard_id == "admin"
        assert ref.extras == ()

    def test_id_with_extras(self):
        """Extras follow the delimiter, comma separated."""
        ref = GuardReference.parse("role:admin,editor")
        assert ref.guard_id == "role"
        assert ref.extras == ("admin", "editor")

    def test_whitespace_and_empty_extras_dropped(self):
        ref = GuardReference.parse(" role : admin, ,editor ")
        assert ref.guard_id == "role"
        assert ref.extras == ("admin", "editor")

    def test_trailing_delimiter(self):
        assert GuardReference.parse("role:") == GuardReference("role")

    def test_reference_passes_through(self):
        ref = GuardReference("role", ("admin",))
        assert GuardReference.parse(ref) is ref

    def test_missing_id_rejected(self):
        with pytest.raises(ValueError):
            GuardReference.parse(":admin")

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            GuardReference.parse(42)

    def test_str_round_trip(self):
        assert str(GuardReference.parse("role:admin,editor")) == "role:admin,editor"
        assert str(GuardReference.parse("admin")) == "admin"


class TestParseGuardReferences:
    """Tests for parse_guard_references."""

    def test_none_is_empty(self):
        assert parse_guard_references(None) == ()

    def test_single_string_is_one_reference(self):
        """A bare string is not iterated character by character."""
        assert parse_guard_references("admin") == (GuardReference("admin"),)

    def test_order_preserved(self):
        refs = parse_guard_references(["b", "a:x", GuardReference("c")])
        assert [r.guard_id for r in refs] == ["b", "a", "c"]


class TestGuardOutcome:
    """Tests for GuardOutcome."""

    def test_success_is_truthy(self):
        outcome = GuardOutcome.success(["a"])
        assert outcome
        assert outcome.evaluated == ("a",)
        assert outcome.format() == "passed"

    def test_failure_carries_guard(self):
        outcome = GuardOutcome.failure(GuardReference("role", ("admin",)), ["role"], "nope")
        assert not outcome
        assert outcome.guard_id == "role"
        assert outcome.extras == ("admin",)
        assert "role" in outcome.format()
        assert "nope" in outcome.format()

    def test_from_error(self):
        error = GuardError("role", ["admin"], "no role in context")
        outcome = GuardOutcome.from_error(error, ["role"])
        assert not outcome.passed
        assert outcome.guard_id == "role"
        assert outcome.extras == ("admin",)
        assert outcome.reason == "no role in context"

    def test_to_dict(self):
        d = GuardOutcome.failure(GuardReference("a")).to_dict()
        assert d["passed"] is False
        assert d["guard_id"] == "a"
        assert d["extras"] == []


class TestGuard:
    """Tests for the Guard base class."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Guard()

    def test_missing_id_raises(self):
        class Anonymous(Guard):
            def validate(self, context, extras=()):
                return True

        with pytest.raises(NotImplementedError):
            Anonymous().id()

    def test_fail_builds_guard_error(self):
        class Named(Guard):
            guard_id = "named"

            def validate(self, context, extras=()):
                raise self.fail(extras, "because")

        with pytest.raises(GuardError) as exc_info:
            Named().validate({}, ("x",))
        assert exc_info.value.guard_id == "named"
        assert exc_info.value.extras == ("x",)
        assert exc_info.value.reason == "because"


class TestCreateGuard:
    """Tests for create_guard factory."""

    def test_factory_creates_guard_class(self):
        """The result is a zero-arg constructible guard class."""
        guard_cls = create_guard("is_admin", lambda context, extras: context.get("admin", False))
        assert issubclass(guard_cls, CallableGuard)
        assert guard_cls.__name__ == "IsAdminGuard"

        guard = guard_cls()
        assert guard.id() == "is_admin"
        assert guard.validate({"admin": True})
        assert not guard.validate({})

    def test_predicate_receives_extras(self):
        seen = []
        guard_cls = create_guard("scope", lambda context, extras: seen.append(extras) or True)
        guard_cls().validate({}, ("read", "write"))
        assert seen == [("read", "write")]

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            create_guard("", lambda context, extras: True)
