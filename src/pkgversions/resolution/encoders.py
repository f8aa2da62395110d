from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic_core import PydanticSerializationError

from .mapping import metadata_value
from ..domain.errors import MappingError
from ..domain.models import VersionMetadata
from ..schema.versions import METADATA, RAW_METADATA


class Encoding(str, Enum):
    STRUCTURED = "structured"
    RAW = "raw"


class MetadataEncoder(ABC):
    """final step of a read: turns the canonical model into one state attribute."""
    attribute: str = ""

    @abstractmethod
    def encode(self, metadata: VersionMetadata) -> Any:
        pass


class StructuredEncoder(MetadataEncoder):
    """writes the typed `metadata` object."""
    attribute = METADATA

    def encode(self, metadata: VersionMetadata) -> Any:
        return metadata_value(metadata)


class RawEncoder(MetadataEncoder):
    """writes `raw_metadata` as camelCase JSON text."""
    attribute = RAW_METADATA

    def encode(self, metadata: VersionMetadata) -> Any:
        try:
            return metadata.model_dump_json(by_alias=True)
        except PydanticSerializationError as e:
            raise MappingError(f"unable to convert package version metadata to JSON: {e}") from e


def encoder_for(encoding: Encoding) -> MetadataEncoder:
    encoding = Encoding(encoding)
    if encoding == Encoding.RAW:
        return RawEncoder()
    return StructuredEncoder()
