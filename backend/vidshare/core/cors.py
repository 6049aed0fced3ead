"""Cross-origin policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def _allowed_origins(raw: str | None) -> list[str]:
    """Split ``CORS_ORIGINS``; an empty result or ``["*"]`` means any origin."""
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


def init_app(app: Flask) -> None:
    """Apply Flask-Cors to every route under ``API_BASE_PREFIX``.

    Notes
    -----
    Browsers only send the ``accessToken``/``refreshToken`` cookies
    cross-origin when credentials are allowed, and credentials cannot be
    combined with a wildcard origin. A wildcard policy therefore serves
    Bearer-header clients only.
    """
    origins = _allowed_origins(app.config.get("CORS_ORIGINS"))
    any_origin = origins in ([], ["*"])
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": "*" if any_origin else origins}},
        supports_credentials=not any_origin,
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
