"""Registration store interface shared by the local and remote backends"""

from abc import ABC, abstractmethod
from typing import Optional

from yc_registration.models.registration import Registration


class StoreError(RuntimeError):
    """The store is unavailable, its data is corrupted, or it refused a write"""


class RegistrationStore(ABC):
    """Append-only collection of submitted registrations"""

    @abstractmethod
    async def append(self, registration: Registration) -> None:
        """
        Persist a new registration.

        Raises:
            StoreError: If the record cannot be stored
        """

    @abstractmethod
    async def list_all(self) -> list[Registration]:
        """
        All registrations in insertion order.

        Raises:
            StoreError: If the collection cannot be read
        """

    async def find_by_id(self, registration_id: str) -> Optional[Registration]:
        """Look up one registration, None if no record has that id"""
        for registration in await self.list_all():
            if registration.id == registration_id:
                return registration
        return None
