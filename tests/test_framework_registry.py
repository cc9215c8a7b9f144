"""Tests for the framework registry and its loader."""

import json

import pytest
import yaml

from constants import Constants
from models.errors import RegistryError, SchemaError
from models.framework import DirectEntry, RollForward
from models.moniker import TargetPlatformMoniker
from registry.framework_registry import FrameworkRegistry
from registry.loader import get_default_registry, load_registry

SAMPLE_21 = TargetPlatformMoniker.parse("sample-2.1")


def _registry_data(references, precedence=None):
    body = {"core_runtime_package": "Sample.Core", "references": references}
    if precedence is not None:
        body["primary_precedence"] = precedence
    return {"version": 1, "platforms": {"sample-2.1": body}}


class TestBundledRegistry:
    """Lookups against the bundled registry data."""

    def test_platforms_are_registered(self, registry):
        """Both sample platforms and both netcoreapp platforms are present."""
        names = [str(m) for m in registry.monikers()]
        assert "sample-2.1" in names
        assert "sample-2.2" in names
        assert "netcoreapp2.1" in names

    def test_direct_lookup(self, registry):
        """A direct entry carries the pinned identity and roll-forward policy."""
        entry = registry.lookup(SAMPLE_21, "App")
        assert isinstance(entry, DirectEntry)
        assert str(entry.identity) == "App/2.1.1"
        assert entry.roll_forward == RollForward.LATEST_PATCH

    def test_unknown_name_is_not_found(self, registry):
        """Unregistered names and unknown platforms both return None."""
        assert registry.lookup(SAMPLE_21, "Banana.App") is None
        assert registry.lookup(TargetPlatformMoniker.parse("sample-9.0"), "App") is None

    def test_lookup_is_case_sensitive(self, registry):
        """Only registered casing variants resolve."""
        assert registry.lookup(SAMPLE_21, "ALl") is not None
        assert registry.lookup(SAMPLE_21, "all") is None

    def test_alias_resolves_to_canonical_entry(self, registry):
        """Aliases follow to the canonical name's direct entry."""
        canonical, entry = registry.resolve_alias(SAMPLE_21, "All")
        assert canonical == "App"
        assert entry.version == "2.1.1"

    def test_alias_chain(self, registry):
        """A two-level alias chain ends at the direct entry."""
        moniker = TargetPlatformMoniker.parse(".NETCoreApp,Version=v2.1")
        canonical, entry = registry.resolve_alias(moniker, "Microsoft.AspNetCore.ALl")
        assert canonical == "Microsoft.AspNetCore.App"
        assert entry.package == "Microsoft.AspNetCore.App"

    def test_resolve_alias_unknown_name(self, registry):
        """Resolving an unregistered name raises KeyError."""
        with pytest.raises(KeyError):
            registry.resolve_alias(SAMPLE_21, "Banana.App")

    def test_known_references_sorted(self, registry):
        """Known reference names come back sorted."""
        names = registry.known_references(SAMPLE_21)
        assert names == sorted(names)
        assert "Sample.Core" in names

    def test_precedence_rank(self, registry):
        """Earlier precedence entries rank lower; unlisted names are unranked."""
        release = registry.platform(SAMPLE_21)
        assert release.rank("App") == 0
        assert release.rank("Sample.Core") == 1
        assert release.rank("Other") is None

    def test_release_is_read_only(self, registry):
        """Reference tables cannot be mutated after load."""
        release = registry.platform(SAMPLE_21)
        with pytest.raises(TypeError):
            release.references["Banana.App"] = DirectEntry("Banana.App", "1.0.0")


class TestRegistryValidation:
    """Inconsistent registry data fails at load time."""

    def test_alias_cycle(self):
        """Aliases pointing at each other are rejected."""
        data = _registry_data({"A": {"alias_of": "B"}, "B": {"alias_of": "A"}})
        with pytest.raises(RegistryError, match="cycle"):
            FrameworkRegistry.from_dict(data)

    def test_dangling_alias(self):
        """An alias to an unregistered name is rejected."""
        data = _registry_data({"A": {"alias_of": "Missing"}})
        with pytest.raises(RegistryError, match="unregistered"):
            FrameworkRegistry.from_dict(data)

    def test_version_must_be_exact(self):
        """Direct entries pin a full major.minor.patch version."""
        data = _registry_data({"App": {"package": "App", "version": "2.1"}})
        with pytest.raises(RegistryError, match="exact version"):
            FrameworkRegistry.from_dict(data)

    def test_schema_violation(self):
        """Missing core runtime package is a schema error."""
        data = {"platforms": {"sample-2.1": {"references": {}}}}
        with pytest.raises(SchemaError):
            FrameworkRegistry.from_dict(data)

    def test_unknown_roll_forward(self):
        """Roll-forward values are limited to the known policies."""
        data = _registry_data({"App": {"package": "App", "version": "1.0.0", "roll_forward": "Sometimes"}})
        with pytest.raises(SchemaError):
            FrameworkRegistry.from_dict(data)

    def test_invalid_platform_key(self):
        """Platform keys must be monikers."""
        data = {"platforms": {"banana": {"core_runtime_package": "X", "references": {}}}}
        with pytest.raises(RegistryError):
            FrameworkRegistry.from_dict(data)

    def test_duplicate_platform_spellings(self):
        """Two spellings of the same moniker are one platform registered twice."""
        body = {"core_runtime_package": "Microsoft.NETCore.App", "references": {}}
        data = {"platforms": {"netcoreapp2.1": body, ".NETCoreApp,Version=v2.1": body}}
        with pytest.raises(RegistryError, match="more than once"):
            FrameworkRegistry.from_dict(data)


class TestRegistryLoader:
    """Reading registry files from disk."""

    def test_load_yaml(self, tmp_path):
        """YAML files load through safe_load."""
        path = tmp_path / "frameworks.yaml"
        path.write_text(yaml.safe_dump(_registry_data({"App": {"package": "App", "version": "1.0.0"}})))
        registry = load_registry(str(path))
        assert registry.lookup(SAMPLE_21, "App").version == "1.0.0"

    def test_load_json(self, tmp_path):
        """Files ending in .json load as JSON."""
        path = tmp_path / "frameworks.json"
        path.write_text(json.dumps(_registry_data({"App": {"package": "App", "version": "3.0.0"}})))
        registry = load_registry(str(path))
        assert registry.lookup(SAMPLE_21, "App").version == "3.0.0"

    def test_missing_file(self, tmp_path):
        """A missing registry file is a RegistryError."""
        with pytest.raises(RegistryError, match="not found"):
            load_registry(str(tmp_path / "nope.yaml"))

    def test_unparseable_file(self, tmp_path):
        """Broken YAML is a RegistryError."""
        path = tmp_path / "frameworks.yaml"
        path.write_text("platforms: [unclosed\n")
        with pytest.raises(RegistryError):
            load_registry(str(path))

    def test_env_override(self, tmp_path, monkeypatch):
        """FXRESOLVE_REGISTRY replaces the bundled data."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps(_registry_data({"Custom": {"package": "Custom", "version": "1.2.3"}})))
        monkeypatch.setenv(Constants.ENV_REGISTRY, str(path))
        registry = get_default_registry()
        assert registry.lookup(SAMPLE_21, "Custom") is not None
        assert registry.lookup(SAMPLE_21, "App") is None

    def test_default_registry_is_cached(self):
        """The default registry is loaded once per path."""
        assert get_default_registry() is get_default_registry()
