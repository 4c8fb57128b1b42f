"""Data connections and the store dependencies built on them"""

from fastapi import Depends
from redis import asyncio as redis_asyncio

from yc_registration.backends.http_store import HttpRegistrationStore
from yc_registration.backends.redis_store import RedisRegistrationStore
from yc_registration.backends.registration_store import RegistrationStore
from yc_registration.config import config
from yc_registration.services.wizard_state_manager import WizardStateManager

# Redis URL from config
REDIS_URL = config["redis_url"]

# Async Redis client (singleton); connections are opened lazily on first use
redis_client = redis_asyncio.from_url(
    REDIS_URL,
    decode_responses=True,
    max_connections=20,  # Max connections in pool
    socket_connect_timeout=5,  # Connection timeout in seconds
    socket_keepalive=True,  # Enable TCP keepalive
    retry_on_timeout=True,  # Retry on timeout
)


def get_redis():
    """Get Redis client"""
    return redis_client


def get_registration_store(redis=Depends(get_redis)) -> RegistrationStore:
    """Local store the wizard writes submissions to"""
    return RedisRegistrationStore(redis)


def get_dashboard_store(
    local_store: RegistrationStore = Depends(get_registration_store),
) -> RegistrationStore:
    """
    Store the admin pages read from.

    Uses the remote collection endpoint when REGISTRATIONS_API_URL is set,
    otherwise the local store.
    """
    api_url = config.get("registrations_api_url")
    if api_url:
        return HttpRegistrationStore(
            api_url,
            api_key=config.get("registrations_api_key"),
            timeout=config["http_timeout_seconds"],
        )
    return local_store


def get_wizard_state_manager(redis=Depends(get_redis)) -> WizardStateManager:
    return WizardStateManager(redis, ttl_seconds=config["wizard_state_ttl_seconds"])
