"""Process entry point: configuration, logging and the HTTP listener."""

import os
import sys
from typing import NoReturn

from flask import Flask
from werkzeug.serving import make_server

from beget_webhook._logging import configure_logging, get_logger
from beget_webhook.app import create_app
from beget_webhook.config import Settings, load_settings
from beget_webhook.exceptions import ConfigError
from beget_webhook.providers.beget import BegetProvider

logger = get_logger(__name__)


def build_provider(settings: Settings) -> BegetProvider:
    """Create the Beget provider from settings."""
    return BegetProvider(
        login=settings.beget_login,
        password=settings.beget_password,
        api_url=settings.api_url,
        timeout=settings.timeout,
    )


def _fatal(message: str, **fields: object) -> NoReturn:
    logger.critical(message, extra=fields)
    sys.exit(1)


def create_wsgi_app() -> Flask:
    """WSGI factory for external servers.

    Example::

        gunicorn "beget_webhook.server:create_wsgi_app()"

    Raises:
        ConfigError: If the credentials are missing.
    """
    settings = load_settings()
    configure_logging(settings.log_level, settings.tz, settings.log_color)
    return create_app(build_provider(settings))


def main() -> None:
    """Run the webhook server until interrupted.

    Exits with status 1 when credentials are missing or the port cannot
    be bound; the listener is never started without both credentials.
    """
    try:
        settings = load_settings()
    except ConfigError as exc:
        # Settings failed to load, so only TZ is honoured for the fatal line
        configure_logging(tz_name=os.environ.get("TZ"))
        _fatal(str(exc))

    configure_logging(settings.log_level, settings.tz, settings.log_color)

    provider = build_provider(settings)
    app = create_app(provider)

    try:
        server = make_server(settings.host, settings.port, app, threaded=True)
    except OSError as exc:
        provider.close()
        _fatal("Server failed", error=exc)

    logger.info("Server started", extra={"port": settings.port})
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopping")
    finally:
        server.server_close()
        provider.close()
