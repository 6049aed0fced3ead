# tests/unit/core/test_proxy.py
from __future__ import annotations

from flask import Flask, request
from vidshare.core import proxy
from werkzeug.middleware.proxy_fix import ProxyFix


def _app(**config) -> Flask:
    app = Flask(__name__)
    app.config.update(config)

    @app.get("/scheme")
    def scheme():
        return {"scheme": request.scheme, "remote": request.remote_addr}

    proxy.init_app(app)
    return app


def test_forwarded_headers_are_trusted():
    app = _app()
    assert isinstance(app.wsgi_app, ProxyFix)

    resp = app.test_client().get(
        "/scheme", headers={"X-Forwarded-Proto": "https", "X-Forwarded-For": "203.0.113.7"}
    )

    assert resp.get_json() == {"scheme": "https", "remote": "203.0.113.7"}


def test_zero_hops_disables_proxy_fix():
    app = _app(PROXY_FIX_HOPS=0)
    assert not isinstance(app.wsgi_app, ProxyFix)
    resp = app.test_client().get("/scheme", headers={"X-Forwarded-Proto": "https"})
    assert resp.get_json()["scheme"] == "http"
