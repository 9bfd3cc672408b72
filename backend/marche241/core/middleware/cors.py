"""Dynamic CORS origin validation configuration."""

import re

from marche241.core.config import settings

# Production pattern: marche241.ga and all subdomains
ALLOWED_ORIGIN_PATTERN = re.compile(r"^https://([a-z0-9-]+\.)?marche241\.ga$")


def get_cors_config() -> dict:
    """Return CORS middleware kwargs for FastAPI."""
    return {
        "allow_origins": settings.allowed_origins_list,
        "allow_origin_regex": (
            None if settings.ENVIRONMENT == "development" else ALLOWED_ORIGIN_PATTERN.pattern
        ),
        "allow_credentials": False,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": [
            "Authorization",
            "Content-Type",
            "X-Request-Id",
        ],
    }
