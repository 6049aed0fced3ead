"""JSON logs on stdout, correlated by a per-request id."""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
# Checked in order; the first non-empty, well-formed value wins
INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")
_SAFE_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

# Attributes present on every LogRecord; anything else came from ``extra=``.
_RESERVED = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "request_id"}

access_log = logging.getLogger("vidshare.access")


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Fixed keys are ``time``, ``level``, ``name``, ``message`` and
    ``request_id``; every ``extra={...}`` field is copied alongside them.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "time": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records emitted while a request is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _inbound_request_id() -> str | None:
    for header in INBOUND_ID_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value and _SAFE_ID.match(value):
            return value
    return None


def ensure_request_id() -> str:
    """
    Return the id of the current request, assigning one on first use.

    A client-supplied ``X-Request-ID``/``X-Correlation-ID`` is reused when it
    looks like an identifier; otherwise a random hex id is generated. Outside
    a request every call returns a fresh id.
    """
    if not has_request_context():
        return uuid4().hex
    request_id = g.get("request_id")
    if request_id is None:
        request_id = _inbound_request_id() or uuid4().hex
        g.request_id = request_id
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Send every logger through a single JSON handler on stdout."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper() if isinstance(level, str) else level)
    logging.captureWarnings(True)


def init_app(app: Flask) -> None:
    """Assign request ids, echo them in ``X-Request-ID`` and log completions."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _start_request() -> None:
        # g outlives the request when an app context was already pushed
        g.pop("request_id", None)
        g.request_started = time.perf_counter()
        ensure_request_id()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.pop("request_started", None)
        if started is not None:
            access_log.debug(
                "request.completed",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "status": response.status_code,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response


__all__ = ["JSONFormatter", "configure_logging", "ensure_request_id", "init_app"]
