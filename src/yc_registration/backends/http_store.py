"""Read-only registration store backed by a remote REST collection"""

import logging
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from yc_registration.backends.registration_store import RegistrationStore, StoreError
from yc_registration.models.registration import Registration

logger = logging.getLogger(__name__)

_registration_list = TypeAdapter(list[Registration])


class HttpRegistrationStore(RegistrationStore):
    """Fetches the registration collection with a GET on a fixed URL"""

    def __init__(
        self,
        collection_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.collection_url = collection_url
        self.api_key = api_key
        self.timeout = timeout
        # Injectable for tests (httpx.MockTransport)
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-Admin-Key"] = self.api_key
        return headers

    async def list_all(self) -> list[Registration]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.collection_url, headers=self._headers())
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Registrations endpoint returned {e.response.status_code}: {self.collection_url}"
            )
            raise StoreError(
                f"Failed to fetch registrations (HTTP {e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach registrations endpoint {self.collection_url}: {e}")
            raise StoreError("Failed to fetch registrations") from e

        try:
            return _registration_list.validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Unexpected registrations payload from {self.collection_url}: {e}")
            raise StoreError("Registrations endpoint returned invalid data") from e

    async def append(self, registration: Registration) -> None:
        raise StoreError("Remote registrations endpoint is read-only")
