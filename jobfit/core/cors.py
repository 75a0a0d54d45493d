from __future__ import annotations

from typing import Any

from jobfit.core.config import settings

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE"]
ALLOWED_HEADERS = ["Content-Type", "X-API-Key"]
# The browser needs this to read the export filename.
EXPOSED_HEADERS = ["Content-Disposition"]


def cors_allowed_origins() -> list[str]:
    return [origin.rstrip("/") for origin in settings.cors_allowed_origins]


def cors_allow_origin_regex() -> str | None:
    regex = (settings.cors_allow_origin_regex or "").strip()
    return regex or None


def cors_options() -> dict[str, Any]:
    return {
        "allow_origins": cors_allowed_origins(),
        "allow_origin_regex": cors_allow_origin_regex(),
        "allow_credentials": True,
        "allow_methods": ALLOWED_METHODS,
        "allow_headers": ALLOWED_HEADERS,
        "expose_headers": EXPOSED_HEADERS,
    }
