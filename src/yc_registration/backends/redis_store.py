"""Registration store kept as a single JSON blob in Redis"""

import json
import logging

from pydantic import TypeAdapter, ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from yc_registration.backends.registration_store import RegistrationStore, StoreError
from yc_registration.models.registration import Registration

logger = logging.getLogger(__name__)

REGISTRATIONS_KEY = "registrations"

_registration_list = TypeAdapter(list[Registration])


class RedisRegistrationStore(RegistrationStore):
    """
    Stores the whole collection as one JSON array under a single key.

    The blob is read and written wholesale, so concurrent writers from
    different sessions can overwrite each other; appends are only atomic
    for a single caller.
    """

    def __init__(self, redis_client: Redis, key: str = REGISTRATIONS_KEY):
        self.redis_client = redis_client
        self.key = key

    async def _load(self) -> list[Registration]:
        try:
            blob = await self.redis_client.get(self.key)
        except RedisError as e:
            logger.error(f"Redis error reading {self.key}: {e}")
            raise StoreError("Registration store is unavailable") from e

        if not blob:
            return []

        try:
            return _registration_list.validate_json(blob)
        except ValidationError as e:
            logger.error(f"Corrupted registrations blob under {self.key}: {e}")
            raise StoreError("Stored registrations are corrupted") from e

    async def _save(self, registrations: list[Registration]) -> None:
        blob = json.dumps([r.to_json_dict() for r in registrations])
        try:
            await self.redis_client.set(self.key, blob)
        except RedisError as e:
            logger.error(f"Redis error writing {self.key}: {e}")
            raise StoreError("Registration store is unavailable") from e

    async def append(self, registration: Registration) -> None:
        registrations = await self._load()

        if any(r.id == registration.id for r in registrations):
            raise StoreError(f"Registration {registration.id} already exists")
        if registrations and registration.registered_at < registrations[-1].registered_at:
            raise StoreError("Registrations must be appended in time order")

        registrations.append(registration)
        await self._save(registrations)
        logger.info(f"Stored registration {registration.id} ({len(registrations)} total)")

    async def list_all(self) -> list[Registration]:
        return await self._load()
