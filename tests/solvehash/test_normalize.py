"""Tests for constraint normalization."""

from solvehash.primitives.constraints import ANY, Branch, Revision, SemverRange
from solvehash.primitives.inputs import (
    Override,
    ProjectConstraint,
    ProjectIdentifier,
    ProjectProperties,
)
from solvehash.primitives.normalize import apply_override, merge, normalize, override_all


class TestMerge:
    """merge(primary, *others)."""

    def test_primary_wins(self):
        primary = {"a": ProjectProperties(constraint=SemverRange("^1.0.0"))}
        test = {"a": ProjectProperties(constraint=Branch("dev"))}
        merged = merge(primary, test)
        assert merged["a"].constraint == SemverRange("^1.0.0")

    def test_union_of_roots(self):
        merged = merge({"a": ProjectProperties()}, {"b": ProjectProperties()})
        assert set(merged) == {"a", "b"}

    def test_none_inputs(self):
        assert merge(None, None) == {}

    def test_inputs_not_mutated(self):
        primary = {"a": ProjectProperties()}
        merge(primary, {"b": ProjectProperties()})
        assert set(primary) == {"a"}


class TestApplyOverride:
    """Single-root override application."""

    def test_no_override(self):
        pc = apply_override("a", ProjectProperties("src", Branch("m")), None)
        assert pc == ProjectConstraint(ProjectIdentifier("a", "src"), Branch("m"))

    def test_constraint_replaced(self):
        pc = apply_override(
            "a", ProjectProperties("", SemverRange("^1.0.0")), Override("a", constraint=Revision("abc"))
        )
        assert pc.constraint == Revision("abc")

    def test_network_name_replaced(self):
        pc = apply_override("a", ProjectProperties("old"), Override("a", network_name="new"))
        assert pc.ident.network_name == "new"

    def test_empty_network_name_keeps_declared(self):
        """An empty override location does not clear the declared one."""
        pc = apply_override("a", ProjectProperties("old"), Override("a", network_name=""))
        assert pc.ident.network_name == "old"

    def test_absent_constraint_keeps_declared(self):
        pc = apply_override(
            "a", ProjectProperties("", Branch("m")), Override("a", network_name="x")
        )
        assert pc.constraint == Branch("m")

    def test_undeclared_root_defaults(self):
        pc = apply_override("a", None, Override("a"))
        assert pc == ProjectConstraint(ProjectIdentifier("a", ""), ANY)


class TestOverrideAll:
    """override_all(constraints, overrides)."""

    def test_override_introduces_root(self):
        result = override_all({}, [Override("new", constraint=Branch("m"))])
        assert result["new"].constraint == Branch("m")

    def test_untouched_roots_pass_through(self):
        result = override_all({"a": ProjectProperties()}, [Override("b")])
        assert result["a"] == ProjectConstraint(ProjectIdentifier("a"), ANY)

    def test_duplicate_overrides_order_independent(self):
        """Same-root overrides combine the same way in any input order."""
        ovrs = [
            Override("a", constraint=Branch("m")),
            Override("a", network_name="fork"),
        ]
        forward = override_all({}, ovrs)
        backward = override_all({}, list(reversed(ovrs)))
        assert forward == backward
        assert forward["a"] == ProjectConstraint(ProjectIdentifier("a", "fork"), Branch("m"))


class TestNormalize:
    """merge + override_all."""

    def test_full_pipeline(self):
        result = normalize(
            {"a": ProjectProperties(constraint=SemverRange("^1.0.0"))},
            {"a": ProjectProperties(constraint=Branch("dev")), "t": ProjectProperties()},
            [Override("a", network_name="mirror")],
        )
        assert result == {
            "a": ProjectConstraint(ProjectIdentifier("a", "mirror"), SemverRange("^1.0.0")),
            "t": ProjectConstraint(ProjectIdentifier("t", ""), ANY),
        }

    def test_missing_overrides_noop(self):
        deps = {"a": ProjectProperties("src", Branch("m"))}
        assert normalize(deps) == normalize(deps, None, [])
