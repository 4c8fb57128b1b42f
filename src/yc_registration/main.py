#!/usr/bin/env python3
"""YC Registration - registration wizard and admin dashboard web server"""

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from redis.exceptions import RedisError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from yc_registration.config import config
from yc_registration.logging_config import get_logger, setup_logging
from yc_registration.routers.admin import router as admin_router
from yc_registration.routers.api import router as api_router
from yc_registration.routers.health import health
from yc_registration.routers.pages import router as pages_router
from yc_registration.routers.registration import router as registration_router
from yc_registration.templating import templates

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


app = FastAPI(
    title="YC Registration",
    description="Event registration wizard with an admin dashboard for submitted registrations",
    version="1.0.0",
    contact={
        "name": "YC Registration Support",
        "email": config["contact_email"],
    },
    docs_url=None,
    redoc_url=None,
)

# Session cookie carries the wizard id, one-shot notices and the admin flag
session_secret_key = config["session_secret_key"]
if not session_secret_key or len(session_secret_key) < 32:
    raise RuntimeError(
        "SESSION_SECRET_KEY must be set to a secure random string (>=32 characters)."
    )

app.add_middleware(
    SessionMiddleware,
    secret_key=session_secret_key,
    max_age=1800,  # 30 minutes, same as the wizard state TTL
    https_only=config["session_https_only"],
    same_site="lax",
)


@app.exception_handler(StarletteHTTPException)
async def not_found_page(request: Request, exc: StarletteHTTPException):
    """Render a not-found page for browsers; JSON routes keep the default body"""
    if exc.status_code == status.HTTP_404_NOT_FOUND and not request.url.path.startswith(
        "/api/"
    ):
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"path": request.url.path},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(RedisError)
async def storage_unavailable(request: Request, exc: RedisError):
    logger.error(f"Redis unavailable while serving {request.url.path}: {exc}")
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": "Service temporarily unavailable",
            "message": "We could not reach our storage. Please try again in a moment.",
        },
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


# Include routers
app.include_router(health)
app.include_router(pages_router)
app.include_router(registration_router)
app.include_router(admin_router)
app.include_router(api_router)


def run():
    """Serve the app with uvicorn on the configured port"""
    port = config.get("port")
    logger.info(f"Starting YC Registration on 0.0.0.0:{port}")
    logger.info("Health check available at /health")

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise


if __name__ == "__main__":
    run()
