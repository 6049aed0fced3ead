"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData, event
from sqlalchemy.engine import Engine

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

MEDIA_UPLOADER_KEY = "media_uploader"


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@dataclass(frozen=True, slots=True)
class TokenIdentity:
    """
    Identity handed to flask-jwt-extended when minting a token.

    Carrying the token type lets the encode key loader pick the signing
    secret, since the loader only receives the identity object.

    :param user_id: Subject written to the ``sub`` claim.
    :type user_id: str
    :param token_type: ``"access"`` or ``"refresh"``.
    :type token_type: str
    """

    user_id: str
    token_type: str


def _secret_for(token_type: str | None) -> str:
    if token_type == "refresh":
        return str(current_app.config["REFRESH_TOKEN_SECRET"])
    return str(current_app.config["ACCESS_TOKEN_SECRET"])


@jwt.user_identity_loader
def _user_identity(identity: Any) -> str:
    if isinstance(identity, TokenIdentity):
        return identity.user_id
    return str(identity)


@jwt.encode_key_loader
def _encode_key(identity: Any) -> str:
    token_type = identity.token_type if isinstance(identity, TokenIdentity) else "access"
    return _secret_for(token_type)


@jwt.decode_key_loader
def _decode_key(jwt_header: dict[str, Any], jwt_data: dict[str, Any]) -> str:
    # Claims are unverified at this point; a forged type only selects the
    # wrong secret and fails signature verification.
    return _secret_for(jwt_data.get("type"))


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the media uploader.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`vidshare.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    The Cloudinary uploader is registered only when ``CLOUDINARY_CLOUD_NAME``
    is configured; tests install a stub under the same extension key.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from vidshare import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    cloud_name = app.config.get("CLOUDINARY_CLOUD_NAME")
    if not cloud_name:
        app.extensions.pop(MEDIA_UPLOADER_KEY, None)
        return

    from vidshare.infra.media.cloudinary_uploader import CloudinaryUploader

    app.extensions[MEDIA_UPLOADER_KEY] = CloudinaryUploader(
        cloud_name=cloud_name,
        api_key=app.config.get("CLOUDINARY_API_KEY") or "",
        api_secret=app.config.get("CLOUDINARY_API_SECRET") or "",
        timeout=float(app.config.get("MEDIA_UPLOAD_TIMEOUT", 60)),
    )


def get_media_uploader():
    """Return the media uploader registered on the current app."""
    uploader = current_app.extensions.get(MEDIA_UPLOADER_KEY)
    if uploader is None:
        raise RuntimeError("Media uploader is not configured. Set CLOUDINARY_CLOUD_NAME.")
    return uploader
