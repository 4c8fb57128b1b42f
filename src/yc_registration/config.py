"""Configuration loader for YC Registration with environment-specific support"""

import os
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "port": int(os.getenv("PORT", "8000")),
    "redis_url": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
    "session_secret_key": os.getenv("SESSION_SECRET_KEY"),
    # Set to "false" only for plain-HTTP local development
    "session_https_only": os.getenv("SESSION_HTTPS_ONLY", "true").lower() == "true",
    "admin_username": os.getenv("ADMIN_USERNAME"),
    "admin_password": os.getenv("ADMIN_PASSWORD"),
    "admin_api_key": os.getenv("ADMIN_API_KEY"),
    # Remote collection endpoint for the dashboard. Unset means local store.
    "registrations_api_url": os.getenv("REGISTRATIONS_API_URL"),
    "registrations_api_key": os.getenv("REGISTRATIONS_API_KEY"),
    "http_timeout_seconds": float(os.getenv("HTTP_TIMEOUT_SECONDS", "10")),
    "wizard_state_ttl_seconds": int(os.getenv("WIZARD_STATE_TTL_SECONDS", "1800")),
    "event_name": os.getenv("EVENT_NAME", "YC2025"),
    "contact_email": os.getenv("CONTACT_EMAIL", "info@yc2025.org"),
    "environment": os.getenv("ENVIRONMENT"),
}
