"""Tests for generation reports (SchemaBuilder.explain)."""

from schema_builder.fragments.models import FragmentKind, Group


def resolve_id(value):
    return value["id"]


class TestExplain:
    """Tests for explain()."""

    def test_empty_builder(self, builder):
        report = builder.explain({})
        assert report.decisions == []
        assert report.format_short() == "0 included, 0 excluded"

    def test_decisions_cover_every_fragment(self, guarded_builder):
        guarded_builder.add_type_def("type Foo { id: ID }", ["test_guard"])
        guarded_builder.add_entrypoint("foo", "query", "foo: Foo", resolve_id, ["other_guard"])
        guarded_builder.add_type_resolver("Foo", {"id": resolve_id})

        report = guarded_builder.explain({"foo": "bar"})

        assert len(report.decisions) == 4
        assert len(report.get_by_kind(FragmentKind.TYPE_DEF)) == 2
        assert len(report.get_by_group(Group.QUERY)) == 2
        assert [d.fragment.describe() for d in report.excluded] == ["foo: Foo", "foo"]

    def test_failure_detail(self, builder, guard_classes):
        builder.register_guards(guard_classes["role"])
        builder.add_resolver("admin", resolve_id, "mutation", ["role:admin,owner"])

        decision = builder.explain({}).find("admin", Group.MUTATION)

        assert not decision.included
        assert decision.outcome.guard_id == "role"
        assert decision.outcome.extras == ("admin", "owner")
        assert decision.outcome.reason == "no role in context"

    def test_skipped_guards(self, guarded_builder):
        guarded_builder.add_type_resolver("Foo", {}, ["test_guard", "other_guard"])

        report = guarded_builder.explain({"foo": "bar"}, ["test_guard"])
        decision = report.find("Foo")

        assert decision.included
        assert decision.skipped == ("other_guard",)
        assert decision.outcome.evaluated == ("test_guard",)
        assert report.whitelist == ("test_guard",)

    def test_default_whitelist_reported(self, guarded_builder):
        assert guarded_builder.explain({}).whitelist == ("other_guard", "test_guard")

    def test_matches_generation(self, guarded_builder):
        guarded_builder.add_entrypoint("a", "query", "a: String", resolve_id, ["test_guard"])
        guarded_builder.add_entrypoint("b", "query", "b: String", resolve_id, ["other_guard"])
        context = {"other": "derp"}

        report = guarded_builder.explain(context)
        included = {d.fragment.name for d in report.included if d.fragment.kind == FragmentKind.RESOLVER}
        assert included == set(guarded_builder.generate_resolvers(context)["Query"])

    def test_format(self, guarded_builder):
        guarded_builder.add_type_def("type Foo { id: ID }", ["test_guard"])
        guarded_builder.add_resolver("bar", resolve_id, "query")

        text = guarded_builder.explain({}).format()

        assert "TYPE_DEF" in text
        assert "RESOLVER" in text
        assert "failed on test_guard" in text
        assert "Query.resolver bar" in text
        assert "1 included | 1 excluded" in text

    def test_to_dict(self, guarded_builder, guard_classes):
        guarded_builder.register_guards(guard_classes["role"])
        guarded_builder.add_resolver("bar", resolve_id, "query", ["role:x"])
        data = guarded_builder.explain({}, []).to_dict()

        [decision] = data["decisions"]
        assert decision["group"] == "query"
        assert decision["guards"] == ["role:x"]
        assert decision["skipped"] == ["role"]
        assert decision["included"] is True
