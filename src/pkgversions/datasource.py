"""the versions data source: describe, configure and read cycles for the host."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from .domain.errors import Diagnostic, DiagnosticKind, MappingError, error_to_diagnostic, has_error
from .registry.client import RegistryClient
from .resolution.encoders import MetadataEncoder, StructuredEncoder
from .resolution.resolver import FailurePolicy, Resolver, input_params
from .schema.attributes import Schema
from .schema.versions import PACKAGE, versions_schema

logger = logging.getLogger(__name__)


class ReadResponse(BaseModel):
    """what a read hands back to the host: a state value or diagnostics."""
    state: Optional[Dict[str, Any]] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return has_error(self.diagnostics)


class VersionsDataSource:
    """looks up version metadata for the given package name."""

    def __init__(
        self,
        encoder: Optional[MetadataEncoder] = None,
        failure_policy: FailurePolicy = FailurePolicy.STRICT,
    ):
        self.encoder = encoder or StructuredEncoder()
        self.failure_policy = FailurePolicy(failure_policy)
        self.resolver: Optional[Resolver] = None
        self._schema = versions_schema()

    def metadata(self, provider_type_name: str) -> str:
        return f"{provider_type_name}_versions"

    def schema(self) -> Schema:
        return self._schema

    def configure(self, client: Optional[RegistryClient]) -> None:
        # the host may call configure before provider data exists
        if client is None:
            return
        self.resolver = Resolver(client, self.failure_policy)

    @property
    def configured(self) -> bool:
        return self.resolver is not None

    def close(self) -> None:
        """release the configured registry client, if any."""
        if self.resolver is not None:
            self.resolver.registry.close()

    def read(self, config: Mapping[str, Any]) -> ReadResponse:
        package = config.get(PACKAGE)
        params = input_params(package) if isinstance(package, str) else ""

        problems = self._schema.validate_input(config)
        if problems:
            return ReadResponse(diagnostics=[
                Diagnostic(
                    kind=DiagnosticKind.INPUT,
                    summary="invalid versions data-source configuration",
                    detail="; ".join(problems),
                    params=params,
                )
            ])

        if self.resolver is None:
            return ReadResponse(diagnostics=[
                Diagnostic(
                    kind=DiagnosticKind.CONFIG,
                    summary="provider not configured",
                    detail="configure must supply a registry client before reading",
                    params=params,
                )
            ])

        resolution = self.resolver.resolve(package)
        if not resolution.ok:
            return ReadResponse(diagnostics=resolution.diagnostics)

        try:
            encoded = self.encoder.encode(resolution.metadata)
        except MappingError as e:
            return ReadResponse(diagnostics=[
                error_to_diagnostic(e, "unable to encode package version metadata", DiagnosticKind.MAPPING, params)
            ])

        state = {name: None for name in self._schema.attributes}
        state[PACKAGE] = package
        state[self.encoder.attribute] = encoded

        problems = self._schema.validate_state(state)
        if problems:
            logger.debug(f"state for {package} does not match schema: {problems}")
            return ReadResponse(diagnostics=[
                Diagnostic(
                    kind=DiagnosticKind.MAPPING,
                    summary="package version metadata does not match the schema",
                    detail="; ".join(problems),
                    params=params,
                )
            ])

        return ReadResponse(state=state, diagnostics=resolution.diagnostics)
