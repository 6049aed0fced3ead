"""HTTP layer: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask, g


def _join(*parts: str) -> str:
    return "/" + "/".join(p.strip("/") for p in parts if p.strip("/"))


def mount(app: Flask, prefix: str, blueprints: Iterable[tuple[Blueprint, str]]) -> None:
    """Register each ``(blueprint, subpath)`` at ``prefix/subpath``."""
    for blueprint, subpath in blueprints:
        app.register_blueprint(blueprint, url_prefix=_join(prefix, subpath))


def init_app(app: Flask) -> None:
    from vidshare.api.v1 import API_VERSION, REGISTRY

    @app.before_request
    def _forget_previous_caller() -> None:
        # g survives between test-client requests sharing one app context
        g.pop("request_context", None)

    mount(app, _join(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION), REGISTRY)


__all__ = ["init_app", "mount"]
