from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Tuple
from packaging.version import Version, InvalidVersion

# registry revisions disagree on casing, so accept both on input.
# serialization by alias gives the camelCase wire form.
# scalar fields are strict: a mistyped value is a mapping error, never coerced.
_WIRE_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


class VersionEntry(BaseModel):
    """one release of a package."""
    model_config = _WIRE_CONFIG

    version: str = Field(strict=True)
    exists: bool = Field(False, strict=True)
    fips: bool = Field(False, strict=True)
    lts: str = Field("", strict=True)
    release_date: str = Field("", strict=True)
    eol_date: str = Field("", strict=True)

    @property
    def parsed_version(self) -> Optional[Version]:
        try:
            return Version(self.version)
        except InvalidVersion:
            return None

    @property
    def is_lts(self) -> bool:
        return bool(self.lts)


class VersionMetadata(BaseModel):
    """the full answer for one package, as returned by the registry."""
    model_config = _WIRE_CONFIG

    latest_version: str = Field("", strict=True)
    last_updated_timestamp: str = Field("", strict=True)
    versions: Tuple[VersionEntry, ...] = Field(default_factory=tuple)
    eol_versions: Tuple[VersionEntry, ...] = Field(default_factory=tuple)

    @classmethod
    def sentinel(cls) -> "VersionMetadata":
        """placeholder used when the registry call fails in sentinel mode."""
        return cls(versions=(VersionEntry(version="", exists=True, fips=False),))

    def find(self, version: str, fips: bool = False) -> Optional[VersionEntry]:
        """
        look up an entry in `versions` by version string and variant.

        versions that parse as PEP 440 compare by value, so "1.2" matches
        "1.2.0"; anything else compares literally.
        """
        try:
            wanted = Version(version)
        except InvalidVersion:
            wanted = None

        for entry in self.versions:
            if entry.fips != fips:
                continue
            if entry.version == version:
                return entry
            if wanted is not None and entry.parsed_version == wanted:
                return entry
        return None
