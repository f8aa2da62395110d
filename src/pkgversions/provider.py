from typing import Optional

from .config import Settings
from .datasource import VersionsDataSource
from .registry.client import RegistryClient
from .registry.http import HttpRegistry
from .resolution.encoders import encoder_for

PROVIDER_TYPE_NAME = "registry"


def build_registry_client(settings: Settings) -> RegistryClient:
    return HttpRegistry(settings.registry_url, timeout=settings.timeout, token=settings.token)


def build_data_source(settings: Settings, client: Optional[RegistryClient] = None) -> VersionsDataSource:
    """create a versions data source and run its configure step."""
    data_source = VersionsDataSource(
        encoder=encoder_for(settings.encoding),
        failure_policy=settings.failure_policy,
    )
    data_source.configure(client or build_registry_client(settings))
    return data_source
