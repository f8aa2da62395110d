from abc import ABC, abstractmethod
from typing import Any, Dict


class RegistryClient(ABC):
    """
    the single upstream call this project depends on.

    implementations must be safe to share between concurrent reads and
    must raise RegistryError for every kind of failure.
    """

    @abstractmethod
    def get_package_version_metadata(self, package_name: str) -> Dict[str, Any]:
        """Get the raw version metadata document for a package."""
        pass

    def close(self) -> None:
        """Release any connections held by the client."""
        pass
