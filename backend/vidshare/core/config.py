"""Environment-driven settings, one class per deployment target."""

from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Selects the settings class: development, testing or production
ENV_VAR: Final[str] = "APP_ENV"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

# A local .env is optional
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read an on/off switch from the environment.

    Parameters
    ----------
    name: str
        Variable name.
    default: bool, optional
        Returned when the variable is not set at all.

    Returns
    -------
    bool
        Whether the value is one of ``1``, ``true``, ``yes``, ``y`` or ``on``
        (case-insensitive).
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def parse_duration(raw: str) -> timedelta:
    """Parse a compact duration such as ``"15m"``, ``"7d"`` or ``"3600"``.

    Bare numbers are seconds. Supported suffixes are ``s``, ``m``, ``h`` and
    ``d``.

    :param raw: Duration expression.
    :type raw: str
    :returns: Parsed duration.
    :rtype: datetime.timedelta
    :raises ValueError: If the expression is not understood or is zero.
    """
    match = _DURATION_RE.match(raw or "")
    if match is None:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount, unit = int(match.group(1)), match.group(2).lower()
    if amount <= 0:
        raise ValueError(f"Duration must be positive: {raw!r}")
    return timedelta(**{_DURATION_UNITS[unit]: amount})


def env_duration(name: str, default: str) -> timedelta:
    """Read a duration from the environment, falling back to ``default``."""
    return parse_duration(os.getenv(name) or default)


class BaseConfig:
    """Settings every environment inherits.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Mount point of the versioned API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development placeholder.
    ACCESS_TOKEN_SECRET: str
        Signing key for access tokens.
    REFRESH_TOKEN_SECRET: str
        Signing key for refresh tokens. Must differ from the access secret.
    ACCESS_TOKEN_EXPIRES / REFRESH_TOKEN_EXPIRES: timedelta
        Token lifetimes parsed from ``ACCESS_TOKEN_EXPIRY`` (default ``15m``)
        and ``REFRESH_TOKEN_EXPIRY`` (default ``7d``).
    JWT_*: various
        ``flask-jwt-extended`` settings. Tokens are read from the
        ``accessToken`` cookie first and the ``Authorization`` header second.
    SQLALCHEMY_DATABASE_URI: str
        SQLAlchemy URL, read from ``DATABASE_URL``.
    CLOUDINARY_*: str | None
        Object-store credentials. The media uploader stays unconfigured when
        the cloud name is missing.
    UPLOAD_TMP_DIR: str
        Directory where multipart files are stashed before upload.
    LOG_LEVEL: str
        Level name for the root logger.
    CORS_ORIGINS: str
        Comma-separated browser origins allowed to call the API.
    PROXY_FIX_HOPS: int
        Trusted reverse proxies in front of the app (``0`` disables ProxyFix).
    ENV_NAME: str
        Short environment label (``development``, ``testing``, ``production``).

    Notes
    -----
    Class attributes are evaluated once at import, after ``.env`` is loaded.
    """

    ENV_NAME = "base"
    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-secret")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "dev-only-access-secret")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "dev-only-refresh-secret")
    ACCESS_TOKEN_EXPIRES = env_duration("ACCESS_TOKEN_EXPIRY", "15m")
    REFRESH_TOKEN_EXPIRES = env_duration("REFRESH_TOKEN_EXPIRY", "7d")

    # flask-jwt-extended
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_EXPIRES
    JWT_REFRESH_TOKEN_EXPIRES = REFRESH_TOKEN_EXPIRES
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_COOKIE_NAME = "accessToken"
    JWT_REFRESH_COOKIE_NAME = "refreshToken"
    JWT_COOKIE_SECURE = env_bool("COOKIE_SECURE", True)
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_SESSION_COOKIE = True

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./vidshare.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Media
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
    MEDIA_UPLOAD_TIMEOUT = float(os.getenv("MEDIA_UPLOAD_TIMEOUT", "60"))
    UPLOAD_TMP_DIR = os.getenv("UPLOAD_TMP_DIR", tempfile.gettempdir())
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_BYTES", str(512 * 1024 * 1024)))

    # Flask
    PROPAGATE_EXCEPTIONS = False
    PROXY_FIX_HOPS = int(os.getenv("PROXY_FIX_HOPS", "1"))

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on, cookies allowed over plain HTTP."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    ENV_NAME = "development"
    JWT_COOKIE_SECURE = env_bool("COOKIE_SECURE", False)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """Settings for the pytest suite.

    Notes
    -----
    - ``TESTING`` on, debug off, only warnings logged.
    - In-memory SQLite unless ``TEST_DATABASE_URL`` points elsewhere.
    - Keeps the error boundary active so tests observe envelopes, not
      tracebacks.
    """

    ENV_NAME = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    ACCESS_TOKEN_SECRET = "test-access-secret"
    REFRESH_TOKEN_SECRET = "test-refresh-secret"
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    JWT_COOKIE_SECURE = False
    CLOUDINARY_CLOUD_NAME = None
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Production: no debug, no SQL echo, Secure cookies only."""

    ENV_NAME = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    JWT_COOKIE_SECURE = True


CONFIGS: Mapping[str, type[BaseConfig]] = {
    cls.ENV_NAME: cls for cls in (DevelopmentConfig, TestingConfig, ProductionConfig)
}


def get_config() -> type[BaseConfig]:
    """Pick the settings class named by ``APP_ENV``.

    Unknown or missing values select :class:`DevelopmentConfig`.
    """
    selected = (os.getenv(ENV_VAR) or "development").strip().lower()
    return CONFIGS.get(selected, DevelopmentConfig)
