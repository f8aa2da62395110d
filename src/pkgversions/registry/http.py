import logging
import httpx
from typing import Any, Dict, Optional

from .client import RegistryClient
from ..domain.errors import RegistryError

logger = logging.getLogger(__name__)

METADATA_PATH = "/registry/v1/package_version_metadata"


class HttpRegistry(RegistryClient):
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        # one pooled client is shared by every read
        self.client = client or httpx.Client(timeout=timeout)
        self.headers = headers

    def get_package_version_metadata(self, package_name: str) -> Dict[str, Any]:
        url = f"{self.base_url}{METADATA_PATH}"
        logger.debug(f"GET {url} package={package_name}")

        try:
            response = self.client.get(url, params={"package": package_name}, headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise RegistryError(package_name, f"package {package_name} not found", status_code=404) from e
            raise RegistryError(
                package_name,
                f"registry returned HTTP {status} for package {package_name}",
                status_code=status,
            ) from e
        except httpx.TimeoutException as e:
            raise RegistryError(package_name, f"registry request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise RegistryError(package_name, f"registry request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise RegistryError(
                package_name,
                f"registry returned invalid JSON for package {package_name}",
                status_code=response.status_code,
            ) from e

    def close(self) -> None:
        self.client.close()
