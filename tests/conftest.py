"""Shared fixtures: the bundled registry and small dependency graphs."""

import logging

import pytest

from constants import Constants
from graph.models import DependencyGraph
from models.moniker import TargetPlatformMoniker
from models.project import FrameworkReference, PackageReference, ProjectDeclarations
from registry.loader import DATA_DIR, load_registry, reset_registry_cache


@pytest.fixture
def registry():
    """The bundled framework registry (independent of FXRESOLVE_REGISTRY)."""
    return load_registry(str(DATA_DIR / Constants.DEFAULT_REGISTRY_FILE))


@pytest.fixture(autouse=True)
def _isolate_registry(monkeypatch):
    """Keep registry env overrides and cached registries out of other tests."""
    monkeypatch.delenv(Constants.ENV_REGISTRY, raising=False)
    reset_registry_cache()
    yield
    reset_registry_cache()


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI attached to the root logger and restore its level."""
    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)
    yield
    root.setLevel(level)
    for handler in [h for h in root.handlers if getattr(h, "_fx_managed", False)]:
        root.removeHandler(handler)
    for handler in [h for h in root.handlers
                    if isinstance(h, logging.FileHandler) and h not in before]:
        root.removeHandler(handler)
        handler.close()


def make_project(moniker="sample-2.1", frameworks=(), packages=(), name="App1"):
    """ProjectDeclarations from plain names and ``(name, version)`` pins."""
    return ProjectDeclarations(
        name=name,
        moniker=TargetPlatformMoniker.parse(moniker),
        framework_references=[FrameworkReference(f) for f in frameworks],
        package_references=[PackageReference(n, v) for n, v in packages],
    )


def library(runtime=(), native=(), dependencies=None, type_="package"):
    """One library record in assets-file layout."""
    record = {"type": type_}
    if dependencies:
        record["dependencies"] = dict(dependencies)
    if runtime:
        record["runtime"] = {path: {} for path in runtime}
    if native:
        record["native"] = {path: {} for path in native}
    return record


def sample_libraries(app_version="2.1.1", core_version="2.1.0"):
    """Framework libraries of a sample-2.1 app plus one app-local package."""
    return {
        f"App/{app_version}": library(
            runtime=["lib/sample2.1/App.Runtime.dll"],
            dependencies={"Sample.Core": core_version},
        ),
        f"Sample.Core/{core_version}": library(
            runtime=["lib/sample2.1/Sample.Core.dll"],
            native=["runtimes/linux-x64/native/libsamplehost.so"],
        ),
        "Lib.A/1.0.0": library(runtime=["lib/netstandard2.0/Lib.A.dll"]),
    }


def make_graph(libraries, moniker="sample-2.1", metadata=None):
    """DependencyGraph with a single target."""
    return DependencyGraph.from_dict({
        "version": 3,
        "targets": {moniker: libraries},
        "libraries": metadata or {},
    })
