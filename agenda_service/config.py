import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logger = logging.getLogger(__name__)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT.lower() == "production"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./agenda.db")

# Service metadata (GET /)
SERVICE_NAME = "Agenda Image Generator"
SERVICE_VERSION = "1.0.0"
SERVICE_DESCRIPTION = "Microservice that renders agenda images from HTML/CSS"

# Cloudflare R2 Configuration
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "agenda-images")
# Public bucket domain, e.g. https://pub-xxxx.r2.dev or a custom domain
R2_PUBLIC_URL = os.getenv("R2_PUBLIC_URL", "")
R2_CACHE_CONTROL = os.getenv("R2_CACHE_CONTROL", "public, max-age=3600")

# Headless browser
CHROMIUM_EXECUTABLE_PATH = os.getenv("CHROMIUM_EXECUTABLE_PATH") or None
RENDER_TIMEOUT_MS = int(os.getenv("RENDER_TIMEOUT_MS", "30000"))
# Extra wait before the screenshot so web fonts and styles settle (HTTP endpoint only)
IMAGE_SETTLE_DELAY_MS = int(os.getenv("IMAGE_SETTLE_DELAY_MS", "2000"))

# Daily agenda notifications
AGENDA_WEBHOOK_URL = os.getenv("AGENDA_WEBHOOK_URL")
AGENDA_WEBHOOK_TIMEOUT = float(os.getenv("AGENDA_WEBHOOK_TIMEOUT", "10.0"))
AGENDA_DEFAULT_COUNTRY_CODE = os.getenv("AGENDA_DEFAULT_COUNTRY_CODE", "+57")
# Used when an organization's timezone cannot be resolved
AGENDA_FALLBACK_UTC_OFFSET_HOURS = int(os.getenv("AGENDA_FALLBACK_UTC_OFFSET_HOURS", "-5"))

# HTTP
MAX_REQUEST_BODY_BYTES = int(os.getenv("MAX_REQUEST_BODY_BYTES", str(10 * 1024 * 1024)))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def validate_runtime_config() -> None:
    """Warn about missing storage settings; refuse to start without them in production."""
    missing = [
        name
        for name, value in (
            ("R2_ACCOUNT_ID", R2_ACCOUNT_ID),
            ("R2_ACCESS_KEY_ID", R2_ACCESS_KEY_ID),
            ("R2_SECRET_ACCESS_KEY", R2_SECRET_ACCESS_KEY),
            ("R2_PUBLIC_URL", R2_PUBLIC_URL),
        )
        if not value
    ]
    if not missing:
        return

    if IS_PRODUCTION:
        raise RuntimeError(f"Missing required storage settings: {', '.join(missing)}")

    logger.warning(f"⚠️ Storage settings not configured ({', '.join(missing)}) - uploads will fail")
