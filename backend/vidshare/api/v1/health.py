"""Liveness probe with a database round trip."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidshare.api.deps import respond, timing
from vidshare.core.extensions import db

bp = Blueprint("health", __name__)


def _database_reachable() -> bool:
    try:
        db.session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        current_app.logger.exception("health.database_unreachable")
        return False
    finally:
        db.session.rollback()


@bp.get("")
@timing
def healthcheck():
    """Always 200; ``db`` reports ``ok`` or ``fail``."""
    return respond(
        {
            "status": "OK",
            "db": "ok" if _database_reachable() else "fail",
            "version": current_app.config.get("APP_VERSION", "dev"),
        },
        "Server is running smoothly",
    )
