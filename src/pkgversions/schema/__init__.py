"""schema declarations for the versions data source."""
from .attributes import (
    AttrType,
    Attribute,
    BoolAttribute,
    BoolType,
    ListNestedAttribute,
    ListType,
    NestedObject,
    ObjectType,
    Schema,
    SingleNestedAttribute,
    StringAttribute,
    StringType,
)
from .versions import (
    METADATA,
    PACKAGE,
    RAW_METADATA,
    metadata_type,
    version_entry_type,
    versions_schema,
)

__all__ = [
    "AttrType",
    "Attribute",
    "BoolAttribute",
    "BoolType",
    "ListNestedAttribute",
    "ListType",
    "NestedObject",
    "ObjectType",
    "Schema",
    "SingleNestedAttribute",
    "StringAttribute",
    "StringType",
    "METADATA",
    "PACKAGE",
    "RAW_METADATA",
    "metadata_type",
    "version_entry_type",
    "versions_schema",
]
