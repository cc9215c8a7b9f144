"""Tests for explicit package pin conflict checks."""

from conftest import make_project

from models.diagnostics import DiagnosticCode, Severity
from models.framework import Unresolved
from models.project import FrameworkReference, PackageReference
from resolution.conflicts import check_conflicts
from resolution.resolver import ReferenceResolver


def _resolve(registry, project):
    return ReferenceResolver(registry).resolve_project(project).results


class TestCheckConflicts:
    """Framework packages that are also pinned explicitly."""

    def test_pin_of_framework_package_warns(self, registry):
        """One warning naming the pin and the project; no error."""
        project = make_project("sample-2.1", ["App"], [("App", "2.1.1")])
        diagnostics = check_conflicts(_resolve(registry, project), project.package_references, project.identity)

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.severity == Severity.WARNING
        assert diagnostic.code == DiagnosticCode.CONFLICTING_EXPLICIT_PACKAGE_REFERENCE
        assert diagnostic.subject == "App"
        assert "App" in diagnostic.message
        assert "App1.csproj" in diagnostic.message

    def test_pin_through_alias_warns(self, registry):
        """The canonical package is compared, whatever name was referenced."""
        project = make_project("sample-2.1", ["All"], [("App", "9.9.9")])
        diagnostics = check_conflicts(_resolve(registry, project), project.package_references, project.identity)
        assert len(diagnostics) == 1
        assert "'All'" in diagnostics[0].message

    def test_package_names_compare_case_insensitively(self, registry):
        """Package ids are case-insensitive."""
        project = make_project("sample-2.1", ["App"], [("app", "2.1.1")])
        diagnostics = check_conflicts(_resolve(registry, project), project.package_references, project.identity)
        assert len(diagnostics) == 1

    def test_one_warning_per_package(self, registry):
        """Aliases of the same framework and repeated pins warn once."""
        project = make_project("sample-2.1", ["App", "All"], [("App", "1.0.0"), ("App", "2.0.0")])
        diagnostics = check_conflicts(_resolve(registry, project), project.package_references, project.identity)
        assert len(diagnostics) == 1

    def test_unrelated_pin(self, registry):
        """Pins of app-local packages are fine."""
        project = make_project("sample-2.1", ["App"], [("Lib.A", "1.0.0")])
        assert check_conflicts(_resolve(registry, project), project.package_references, project.identity) == []

    def test_unresolved_results_are_skipped(self):
        """Only resolved references take part in the check."""
        results = [Unresolved(FrameworkReference("App"), "not registered for this platform")]
        assert check_conflicts(results, [PackageReference("App", "1.0.0")], "App1.csproj") == []
