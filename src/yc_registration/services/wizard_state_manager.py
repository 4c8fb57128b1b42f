import logging
import uuid

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from yc_registration.models.wizard import WizardState

logger = logging.getLogger(__name__)


class WizardStateManager:
    """
    Keeps each browser session's registration wizard in Redis with a TTL.

    - One key per wizard (``wizard_state:{wizard_id}``)
    - 30-minute sliding expiry, refreshed on every save
    - Missing or corrupted state starts a fresh wizard at step 1
    """

    def __init__(self, redis_client: Redis, ttl_seconds: int = 1800):
        """
        Initialize WizardStateManager with Redis backend.

        Args:
            redis_client: Async Redis client (from dependency injection)
            ttl_seconds: Time-to-live in seconds (default: 1800 = 30 minutes)
        """
        self.redis_client = redis_client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def new_wizard_id() -> str:
        return str(uuid.uuid4())

    def _state_key(self, wizard_id: str) -> str:
        return f"wizard_state:{wizard_id}"

    async def get_state(self, wizard_id: str) -> WizardState:
        """
        Load the wizard for a session.

        Returns:
            Stored state, or a fresh WizardState if none or corrupted

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._state_key(wizard_id)
        try:
            state_json = await self.redis_client.get(key)
        except RedisError as e:
            logger.error(f"Redis error getting wizard state {wizard_id}: {e}")
            raise

        if not state_json:
            return WizardState()

        try:
            return WizardState.model_validate_json(state_json)
        except ValidationError:
            logger.error(f"Corrupted wizard state {wizard_id}, starting over")
            return WizardState()

    async def save_state(self, wizard_id: str, state: WizardState) -> None:
        """
        Store the wizard and refresh its TTL.

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._state_key(wizard_id)
        try:
            await self.redis_client.setex(key, self.ttl_seconds, state.model_dump_json())
        except RedisError as e:
            logger.error(f"Redis error saving wizard state {wizard_id}: {e}")
            raise

    async def clear_state(self, wizard_id: str) -> None:
        """
        Drop a wizard, e.g. after it was submitted.

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._state_key(wizard_id)
        try:
            await self.redis_client.delete(key)
            logger.info(f"Cleared wizard state {wizard_id}")
        except RedisError as e:
            logger.error(f"Redis error clearing wizard state {wizard_id}: {e}")
            raise
