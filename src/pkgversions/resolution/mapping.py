"""conversion from the domain models to plain attribute values."""
from typing import Any, Dict, List, Sequence

from ..domain.models import VersionEntry, VersionMetadata


def entry_value(entry: VersionEntry) -> Dict[str, Any]:
    return {
        "version": entry.version,
        "exists": entry.exists,
        "fips": entry.fips,
        "lts": entry.lts,
        "release_date": entry.release_date,
        "eol_date": entry.eol_date,
    }


def entries_value(entries: Sequence[VersionEntry]) -> List[Dict[str, Any]]:
    return [entry_value(e) for e in entries]


def metadata_value(metadata: VersionMetadata) -> Dict[str, Any]:
    """
    build the value of the `metadata` attribute.

    keys are the schema's attribute names; list order is kept as given.
    """
    return {
        "latest_version": metadata.latest_version,
        "last_updated_timestamp": metadata.last_updated_timestamp,
        "versions": entries_value(metadata.versions),
        "eol_versions": entries_value(metadata.eol_versions),
    }
