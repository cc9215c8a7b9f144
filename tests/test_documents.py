"""Tests for runtimeconfig/deps document serialisation."""

import json

import pytest

from conftest import make_graph, make_project, sample_libraries

from manifest.documents import build_deps, build_runtimeconfig, render_json, write_documents
from manifest.models import DependencyManifest, ManifestLibrary
from models.errors import SchemaError
from models.framework import RollForward, RuntimeSelection
from models.moniker import TargetPlatformMoniker
from pipeline import run_build

SAMPLE_21 = TargetPlatformMoniker.parse("sample-2.1")


class TestRuntimeConfig:
    """The runtime-selection descriptor."""

    def test_with_roll_forward(self):
        document = build_runtimeconfig(RuntimeSelection("App", "2.1.1", RollForward.LATEST_PATCH), SAMPLE_21)
        assert document == {
            "runtimeOptions": {
                "tfm": "sample-2.1",
                "rollForward": "LatestPatch",
                "framework": {"name": "App", "version": "2.1.1"},
            }
        }

    def test_without_roll_forward(self):
        """rollForward is only written when the registry declares one."""
        document = build_runtimeconfig(RuntimeSelection("Sample.Core", "2.1.0"), SAMPLE_21)
        assert "rollForward" not in document["runtimeOptions"]


class TestDeps:
    """The dependency manifest document."""

    def _manifest(self):
        return DependencyManifest(target=SAMPLE_21, libraries=[
            ManifestLibrary("App1", "1.0.0", type="project", runtime=["App1.dll"],
                            dependencies={"Lib.A": "1.0.0"}),
            ManifestLibrary("Lib.A", "1.0.0", runtime=["lib/netstandard2.0/Lib.A.dll"],
                            serviceable=True, sha512="abc==", path="lib.a/1.0.0"),
            ManifestLibrary("Meta", "1.0.0"),
        ])

    def test_structure(self):
        document = build_deps(self._manifest())
        assert document["runtimeTarget"] == {"name": "sample-2.1"}
        assert document["compilationOptions"] == {}

        target = document["targets"]["sample-2.1"]
        assert list(target) == ["App1/1.0.0", "Lib.A/1.0.0", "Meta/1.0.0"]
        assert target["App1/1.0.0"] == {"dependencies": {"Lib.A": "1.0.0"}, "runtime": {"App1.dll": {}}}
        assert target["Meta/1.0.0"] == {}

        libraries = document["libraries"]
        assert libraries["App1/1.0.0"] == {"type": "project", "serviceable": False}
        assert libraries["Lib.A/1.0.0"] == {
            "type": "package", "serviceable": True, "sha512": "abc==", "path": "lib.a/1.0.0",
        }

    def test_invalid_library_type(self):
        """Documents that break the schema are never produced."""
        manifest = DependencyManifest(target=SAMPLE_21, libraries=[ManifestLibrary("X", "1.0.0", type="tool")])
        with pytest.raises(SchemaError):
            build_deps(manifest)

    def test_render_json(self):
        """Indented JSON with a trailing newline."""
        text = render_json({"b": 1, "a": {"c": []}})
        assert text.endswith("}\n")
        assert text.startswith('{\n  "b": 1,')
        assert json.loads(text) == {"b": 1, "a": {"c": []}}


class TestWriteDocuments:
    """Writing both documents to disk."""

    def _outcome(self, registry):
        project = make_project("sample-2.1", ["App"])
        return project, run_build(project, registry, make_graph(sample_libraries()))

    def test_files_written(self, registry, tmp_path):
        project, outcome = self._outcome(registry)
        out = tmp_path / "bin"
        runtimeconfig, deps = write_documents(str(out), project, outcome.selection, outcome.manifest)

        assert runtimeconfig.endswith("App1.runtimeconfig.json")
        assert deps.endswith("App1.deps.json")
        data = json.loads((out / "App1.runtimeconfig.json").read_text(encoding="utf-8"))
        assert data["runtimeOptions"]["framework"] == {"name": "App", "version": "2.1.1"}
        deps_data = json.loads((out / "App1.deps.json").read_text(encoding="utf-8"))
        assert list(deps_data["libraries"])[0] == "App1/1.0.0"

    def test_output_is_byte_identical(self, registry, tmp_path):
        """Independent runs over the same inputs write identical bytes."""
        first_project, first = self._outcome(registry)
        second_project, second = self._outcome(registry)
        write_documents(str(tmp_path / "one"), first_project, first.selection, first.manifest)
        write_documents(str(tmp_path / "two"), second_project, second.selection, second.manifest)

        for name in ("App1.runtimeconfig.json", "App1.deps.json"):
            assert (tmp_path / "one" / name).read_bytes() == (tmp_path / "two" / name).read_bytes()
