import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..domain.errors import Diagnostic, DiagnosticKind, error_to_diagnostic
from ..domain.models import VersionMetadata
from ..registry.client import RegistryClient

logger = logging.getLogger(__name__)

REMOTE_FAILURE_SUMMARY = "failed to get package version metadata"
MAPPING_FAILURE_SUMMARY = "unable to map package version metadata"


class FailurePolicy(str, Enum):
    STRICT = "strict"
    SENTINEL = "sentinel"


class ResolutionState(str, Enum):
    MAPPED = "mapped"
    FAILED = "failed"


class Resolution(BaseModel):
    """outcome of one lookup: either metadata or diagnostics, never both."""
    model_config = ConfigDict(frozen=True)

    package: str
    state: ResolutionState
    metadata: Optional[VersionMetadata] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    degraded: bool = False  # metadata is the sentinel placeholder

    @property
    def ok(self) -> bool:
        return self.state == ResolutionState.MAPPED


def input_params(package: str) -> str:
    return f"[package={package}]"


class Resolver:
    """performs the lookup-and-map pipeline for one package name per call."""

    def __init__(self, registry: RegistryClient, failure_policy: FailurePolicy = FailurePolicy.STRICT):
        self.registry = registry
        self.failure_policy = FailurePolicy(failure_policy)

    def resolve(self, package_name: str) -> Resolution:
        logger.info(f"read versions data-source request: package={package_name}")
        params = input_params(package_name)

        try:
            raw = self.registry.get_package_version_metadata(package_name)
        except Exception as e:
            return self._remote_failure(package_name, e)

        try:
            metadata = VersionMetadata.model_validate(raw)
        except ValidationError as e:
            logger.debug(f"registry response for {package_name} failed validation: {e}")
            return Resolution(
                package=package_name,
                state=ResolutionState.FAILED,
                diagnostics=[error_to_diagnostic(e, MAPPING_FAILURE_SUMMARY, DiagnosticKind.MAPPING, params)],
            )

        logger.debug(
            f"mapped {len(metadata.versions)} versions and {len(metadata.eol_versions)} eol versions "
            f"for {package_name}"
        )
        return Resolution(package=package_name, state=ResolutionState.MAPPED, metadata=metadata)

    def _remote_failure(self, package_name: str, err: Exception) -> Resolution:
        if self.failure_policy == FailurePolicy.SENTINEL:
            logger.warning(
                f"registry lookup for {package_name} failed, using placeholder metadata: {err}"
            )
            return Resolution(
                package=package_name,
                state=ResolutionState.MAPPED,
                metadata=VersionMetadata.sentinel(),
                degraded=True,
            )

        logger.debug(f"registry lookup for {package_name} failed: {err!r}")
        return Resolution(
            package=package_name,
            state=ResolutionState.FAILED,
            diagnostics=[
                error_to_diagnostic(err, REMOTE_FAILURE_SUMMARY, DiagnosticKind.REMOTE, input_params(package_name))
            ],
        )
