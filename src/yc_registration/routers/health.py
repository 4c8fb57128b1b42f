from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from redis.exceptions import RedisError

from yc_registration.config import config
from yc_registration.models.database import get_redis

health = APIRouter()


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "yc-registration",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"] or "development",
    }


@health.get("/health/detailed")
async def detailed_health_check(redis=Depends(get_redis)):
    """Detailed health check with Redis and configuration checks"""
    health_status = {
        "status": "healthy",
        "service": "yc-registration",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"] or "development",
        "checks": {},
    }

    # Redis connectivity check
    try:
        pong = await redis.ping()
        health_status["checks"]["redis"] = "healthy" if pong else "unhealthy"
        if not pong:
            health_status["status"] = "unhealthy"
    except RedisError as e:
        health_status["checks"]["redis"] = f"unhealthy: {str(e)}"
        health_status["status"] = "unhealthy"

    # Admin login is disabled without credentials; report but stay healthy
    admin_configured = bool(config.get("admin_username") and config.get("admin_password"))
    health_status["checks"]["admin_login"] = (
        "configured" if admin_configured else "disabled"
    )
    health_status["checks"]["dashboard_source"] = (
        "remote" if config.get("registrations_api_url") else "local"
    )

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
