"""Tests for framework reference resolution."""

from conftest import make_project

from models.diagnostics import DiagnosticCode, Severity
from models.framework import Resolved, RollForward, Unresolved
from resolution.resolver import ReferenceResolver


class TestReferenceResolver:
    """Resolving declared references against the bundled registry."""

    def test_unknown_reference(self, registry):
        """An unregistered name yields Unresolved plus one UnknownFrameworkReference error."""
        project = make_project("sample-2.1", ["Banana.App"])
        outcome = ReferenceResolver(registry).resolve_project(project)

        assert len(outcome.results) == 1
        assert isinstance(outcome.results[0], Unresolved)
        assert not outcome.succeeded

        errors = outcome.diagnostics.with_code(DiagnosticCode.UNKNOWN_FRAMEWORK_REFERENCE)
        assert len(errors) == 1
        assert errors[0].severity == Severity.ERROR
        assert errors[0].subject == "Banana.App"
        assert errors[0].project == "App1.csproj"
        assert "Banana.App" in errors[0].message

    def test_all_unknown_references_reported(self, registry):
        """Resolution continues past unknown names so every one is reported."""
        project = make_project("sample-2.1", ["Banana.App", "App", "Cherry.App"])
        outcome = ReferenceResolver(registry).resolve_project(project)

        assert len(outcome.results) == 3
        assert len(outcome.resolved) == 1
        assert [d.subject for d in outcome.diagnostics.errors] == ["Banana.App", "Cherry.App"]

    def test_direct_reference(self, registry):
        """A direct entry resolves to its own identity with no alias."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-2.1", ["App"]))
        result = outcome.results[0]
        assert isinstance(result, Resolved)
        assert str(result.identity) == "App/2.1.1"
        assert result.roll_forward == RollForward.LATEST_PATCH
        assert result.via_alias is None
        assert outcome.succeeded

    def test_alias_reference(self, registry):
        """An alias resolves to the canonical identity and remembers the alias."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-2.1", ["All"]))
        result = outcome.results[0]
        assert str(result.identity) == "App/2.1.1"
        assert result.via_alias == "All"

    def test_casing_variants(self, registry):
        """Registered casing variants resolve; unregistered ones do not."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-2.1", ["ALl", "all"]))
        assert isinstance(outcome.results[0], Resolved)
        assert isinstance(outcome.results[1], Unresolved)

    def test_version_comes_from_platform(self, registry):
        """The same reference name resolves per platform."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-2.2", ["App"]))
        assert outcome.results[0].identity.version == "2.2.0"

    def test_suggestions_for_near_misses(self, registry):
        """Near misses suggest registered names."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-2.1", ["Ap"]))
        message = outcome.diagnostics.errors[0].message
        assert "Did you mean" in message
        assert "'App'" in message

    def test_unknown_platform(self, registry):
        """References on an unregistered platform are all unknown."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-9.9", ["App"]))
        assert isinstance(outcome.results[0], Unresolved)
        assert "no registered shared frameworks" in outcome.diagnostics.errors[0].message

    def test_no_references(self, registry):
        """A project without framework references resolves trivially."""
        outcome = ReferenceResolver(registry).resolve_project(make_project("sample-2.1"))
        assert outcome.results == []
        assert outcome.succeeded
        assert len(outcome.diagnostics) == 0
