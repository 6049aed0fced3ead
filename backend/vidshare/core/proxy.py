"""Trust ``X-Forwarded-*`` headers set by the reverse proxy in front of gunicorn."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`~werkzeug.middleware.proxy_fix.ProxyFix`.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``request.scheme`` and ``remote_addr`` should
        reflect the original client.

    Notes
    -----
    ``PROXY_FIX_HOPS`` is the number of trusted proxies (``1`` by default);
    ``0`` leaves the WSGI app untouched. Secure cookies rely on the scheme
    being reported correctly behind TLS termination.
    """
    hops = int(app.config.get("PROXY_FIX_HOPS", 1))
    if hops <= 0:
        return
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)
