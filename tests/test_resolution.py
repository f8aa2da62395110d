"""test suite for version metadata resolution."""
import logging
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pkgversions.domain.errors import DiagnosticKind, RegistryError
from pkgversions.domain.models import VersionMetadata
from pkgversions.registry.client import RegistryClient
from pkgversions.resolution.resolver import (
    FailurePolicy,
    Resolution,
    ResolutionState,
    Resolver,
)

BAZELX = {
    "latestVersion": "1.2.0",
    "lastUpdatedTimestamp": "2024-01-02T00:00:00Z",
    "versions": [
        {"version": "1.2.0", "exists": True, "fips": False, "lts": "", "releaseDate": "2024-01-01", "eolDate": ""}
    ],
    "eolVersions": [],
}


class MockRegistryClient(RegistryClient):
    """mock registry client for testing."""

    def __init__(self, documents=None, errors=None):
        self.documents = documents or {}
        self.errors = errors or {}
        self.calls = []

    def get_package_version_metadata(self, package_name: str):
        self.calls.append(package_name)
        if package_name in self.errors:
            raise self.errors[package_name]
        if package_name in self.documents:
            return self.documents[package_name]
        raise RegistryError(package_name, f"package {package_name} not found", status_code=404)


class TestResolver:
    @pytest.fixture
    def registry(self):
        return MockRegistryClient(documents={"bazelx": BAZELX, "empty": {}})

    @pytest.fixture
    def resolver(self, registry):
        return Resolver(registry)

    def test_resolve_success(self, resolver):
        resolution = resolver.resolve("bazelx")

        assert resolution.state == ResolutionState.MAPPED
        assert resolution.ok
        assert resolution.diagnostics == []
        assert not resolution.degraded
        assert resolution.metadata.latest_version == "1.2.0"
        assert resolution.metadata.versions[0].release_date == "2024-01-01"

    def test_one_remote_call_per_resolve(self, resolver, registry):
        resolver.resolve("bazelx")
        resolver.resolve("bazelx")
        assert registry.calls == ["bazelx", "bazelx"]

    def test_logs_request(self, resolver, caplog):
        caplog.set_level(logging.INFO, logger="pkgversions.resolution.resolver")
        resolver.resolve("bazelx")
        assert "read versions data-source request: package=bazelx" in caplog.text

    def test_empty_response_is_success(self, resolver):
        resolution = resolver.resolve("empty")

        assert resolution.state == ResolutionState.MAPPED
        assert resolution.metadata.versions == ()
        assert resolution.metadata.eol_versions == ()
        assert resolution.metadata.latest_version == ""

    def test_strict_failure(self, resolver):
        resolution = resolver.resolve("missing")

        assert resolution.state == ResolutionState.FAILED
        assert resolution.metadata is None
        assert len(resolution.diagnostics) == 1
        diag = resolution.diagnostics[0]
        assert diag.kind == DiagnosticKind.REMOTE
        assert diag.summary == "failed to get package version metadata"
        assert diag.detail == "package missing not found"
        assert diag.params == "[package=missing]"

    def test_any_client_exception_is_remote_error(self):
        registry = MockRegistryClient(errors={"slow": TimeoutError("deadline exceeded")})
        resolution = Resolver(registry).resolve("slow")

        assert resolution.state == ResolutionState.FAILED
        assert resolution.diagnostics[0].kind == DiagnosticKind.REMOTE
        assert "deadline exceeded" in resolution.diagnostics[0].detail

    def test_sentinel_failure(self, registry, caplog):
        resolver = Resolver(registry, FailurePolicy.SENTINEL)
        caplog.set_level(logging.WARNING, logger="pkgversions.resolution.resolver")

        resolution = resolver.resolve("missing")

        assert resolution.state == ResolutionState.MAPPED
        assert resolution.degraded
        assert resolution.diagnostics == []
        assert resolution.metadata == VersionMetadata.sentinel()
        assert "using placeholder metadata" in caplog.text

    def test_policy_from_string(self, registry):
        assert Resolver(registry, "sentinel").failure_policy == FailurePolicy.SENTINEL
        with pytest.raises(ValueError):
            Resolver(registry, "lenient")

    def test_mapping_failure(self):
        registry = MockRegistryClient(documents={"broken": {"latestVersion": None}})
        resolution = Resolver(registry).resolve("broken")

        assert resolution.state == ResolutionState.FAILED
        assert resolution.metadata is None
        assert resolution.diagnostics[0].kind == DiagnosticKind.MAPPING
        assert resolution.diagnostics[0].params == "[package=broken]"

    def test_mapping_failure_is_not_replaced_by_sentinel(self):
        registry = MockRegistryClient(documents={"broken": ["not", "an", "object"]})
        resolution = Resolver(registry, FailurePolicy.SENTINEL).resolve("broken")

        assert resolution.state == ResolutionState.FAILED
        assert resolution.diagnostics[0].kind == DiagnosticKind.MAPPING

    @pytest.mark.parametrize("entry", [
        {"version": "1.0", "exists": "no"},
        {"version": "1.0", "fips": 1},
        {"version": 1.0},
        {"version": "1.0", "releaseDate": 20240101},
    ])
    def test_mistyped_field_is_mapping_error(self, entry):
        registry = MockRegistryClient(documents={"odd": {"versions": [entry]}})
        resolution = Resolver(registry).resolve("odd")

        assert resolution.state == ResolutionState.FAILED
        assert resolution.metadata is None
        assert resolution.diagnostics[0].kind == DiagnosticKind.MAPPING

    def test_mistyped_top_level_field_is_mapping_error(self):
        registry = MockRegistryClient(documents={"odd": {"latestVersion": 2}})
        resolution = Resolver(registry, FailurePolicy.SENTINEL).resolve("odd")

        assert resolution.state == ResolutionState.FAILED
        assert resolution.diagnostics[0].kind == DiagnosticKind.MAPPING

    def test_casing_tolerance(self):
        snake = {
            "latest_version": "1.2.0",
            "last_updated_timestamp": "2024-01-02T00:00:00Z",
            "versions": [
                {"version": "1.2.0", "exists": True, "fips": False, "lts": "", "release_date": "2024-01-01", "eol_date": ""}
            ],
            "eol_versions": [],
        }
        registry = MockRegistryClient(documents={"camel": BAZELX, "snake": snake})
        resolver = Resolver(registry)

        assert resolver.resolve("camel").metadata == resolver.resolve("snake").metadata

    def test_resolution_is_immutable(self, resolver):
        resolution = resolver.resolve("bazelx")
        assert isinstance(resolution, Resolution)
        with pytest.raises(Exception):
            resolution.state = ResolutionState.FAILED


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
