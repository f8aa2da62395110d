from .attributes import (
    BoolAttribute,
    ListNestedAttribute,
    NestedObject,
    ObjectType,
    Schema,
    SingleNestedAttribute,
    StringAttribute,
)

PACKAGE = "package"
METADATA = "metadata"
RAW_METADATA = "raw_metadata"


def version_entry_object() -> NestedObject:
    """shape of a single VersionEntry."""
    return NestedObject({
        "version": StringAttribute(required=True, description="Version identifier."),
        "exists": BoolAttribute(required=True, description="Whether the version can currently be installed."),
        "fips": BoolAttribute(required=True, description="Whether this entry is the FIPS build variant."),
        "lts": StringAttribute(required=True, description="Long-term-support channel, empty when not LTS."),
        "release_date": StringAttribute(required=True, description="ISO-8601 release date, empty when unknown."),
        "eol_date": StringAttribute(required=True, description="ISO-8601 end-of-life date, empty when not announced."),
    })


def version_list_attribute(description: str) -> ListNestedAttribute:
    return ListNestedAttribute(version_entry_object(), required=True, description=description)


def metadata_attribute() -> SingleNestedAttribute:
    return SingleNestedAttribute(
        {
            "latest_version": StringAttribute(required=True, description="Newest known version."),
            "last_updated_timestamp": StringAttribute(
                required=True, description="When the registry last refreshed this package."
            ),
            "versions": version_list_attribute("All known versions, in registry order."),
            "eol_versions": version_list_attribute("Versions that have reached end-of-life."),
        },
        computed=True,
        description="Version metadata for the package.",
    )


def versions_schema() -> Schema:
    """schema for the versions data source."""
    return Schema(
        {
            PACKAGE: StringAttribute(required=True, description="The name of the package to lookup"),
            METADATA: metadata_attribute(),
            RAW_METADATA: StringAttribute(
                computed=True,
                description="Version metadata serialized as JSON, set instead of metadata in raw encoding mode.",
            ),
        },
        description="Lookup version metadata for the given package name.",
    )


def metadata_type() -> ObjectType:
    return metadata_attribute().attr_type()


def version_entry_type() -> ObjectType:
    return version_entry_object().attr_type()
