"""``create_app``: settings, logging, extensions, routes and commands."""

from __future__ import annotations

from flask import Flask

from vidshare.core.config import BaseConfig, get_config
from vidshare.core.logger import configure_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_overrides: str | None = "config.py",
) -> Flask:
    """
    Build a configured application.

    :param config: Settings object or import path. Defaults to the class
        selected by ``APP_ENV``.
    :param instance_overrides: Optional file in the instance folder loaded
        on top of ``config``; ``None`` skips it.
    """
    from vidshare import cli
    from vidshare.api import init_app as init_api
    from vidshare.core import cors, errors, extensions, logger, proxy

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config if config is not None else get_config())
    if instance_overrides:
        app.config.from_pyfile(instance_overrides, silent=True)

    # Response envelopes keep their declared key order
    app.json.sort_keys = False  # type: ignore[attr-defined]

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    proxy.init_app(app)
    extensions.init_app(app)
    logger.init_app(app)
    cors.init_app(app)
    init_api(app)
    errors.init_app(app)
    cli.init_app(app)
    return app
