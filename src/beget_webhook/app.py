"""Flask application exposing the ACME DNS-01 webhook endpoints.

Routes:

- ``/healthz``: liveness, always 200 whatever the method.
- ``POST /present``: publish ``{"fqdn", "value"}`` as a TXT record.
- ``POST /cleanup``: remove the TXT records of ``{"fqdn"}``.

The DNS provider is injected through :func:`create_app` and stored in
``app.extensions`` so handlers share no module-level state.
"""

from flask import Flask, Response, current_app, request
from werkzeug.exceptions import MethodNotAllowed

from beget_webhook._logging import get_logger
from beget_webhook.exceptions import ProviderError
from beget_webhook.models import ChallengeRequest
from beget_webhook.providers.base import DnsProvider

logger = get_logger(__name__)

PROVIDER_EXTENSION = "dns_provider"
HEALTHZ_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


def create_app(provider: DnsProvider) -> Flask:
    """Build the webhook application.

    Args:
        provider: DNS provider used by /present and /cleanup.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.extensions[PROVIDER_EXTENSION] = provider

    app.add_url_rule("/healthz", view_func=healthz, methods=HEALTHZ_METHODS)
    # No automatic OPTIONS: every non-POST method must get a 405
    app.add_url_rule(
        "/present", view_func=present, methods=["POST"], provide_automatic_options=False
    )
    app.add_url_rule(
        "/cleanup", view_func=cleanup, methods=["POST"], provide_automatic_options=False
    )

    app.register_error_handler(MethodNotAllowed, _method_not_allowed)
    return app


def _provider() -> DnsProvider:
    return current_app.extensions[PROVIDER_EXTENSION]


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _method_not_allowed(exc: MethodNotAllowed) -> Response:
    response = _text("Method not allowed", 405)
    if exc.valid_methods:
        response.headers["Allow"] = ", ".join(exc.valid_methods)
    return response


def _parse_body() -> ChallengeRequest | None:
    """Decode the request body, or return None if it is not a JSON object."""
    try:
        return ChallengeRequest.from_body(request.get_data())
    except ValueError:
        return None


def healthz() -> tuple[str, int]:
    return "", 200


def present() -> Response | tuple[str, int]:
    """Publish the challenge value as the TXT record of ``fqdn``."""
    body = _parse_body()
    if body is None:
        logger.warning("Invalid JSON body")
        return _text("Invalid JSON", 400)

    if not body.fqdn or not body.value:
        logger.warning(
            "Missing required fields",
            extra={"fqdn": body.fqdn or "", "value": body.value or ""},
        )
        return _text("Missing required fields", 400)

    target = body.target
    logger.info("Setting TXT record", extra={"target": target, "value": body.value})
    try:
        _provider().set_txt_record(target, body.value)
    except ProviderError as exc:
        logger.error(
            "Failed to set TXT record",
            extra={
                "error": str(exc),
                "detail": exc.detail,
                "error_code": getattr(exc, "error_code", None),
                "target": target,
            },
        )
        return _text("Set failed", 500)

    return "", 200


def cleanup() -> Response | tuple[str, int]:
    """Remove every TXT record of ``fqdn``."""
    body = _parse_body()
    if body is None:
        logger.warning("Invalid JSON body")
        return _text("Invalid JSON", 400)

    if not body.fqdn:
        logger.warning("Missing required field", extra={"fqdn": body.fqdn or ""})
        return _text("Missing required field", 400)

    target = body.target
    logger.info("Clearing TXT record", extra={"target": target})
    try:
        _provider().clear_txt_record(target)
    except ProviderError as exc:
        logger.error(
            "Failed to clear TXT record",
            extra={
                "error": str(exc),
                "detail": exc.detail,
                "error_code": getattr(exc, "error_code", None),
                "target": target,
            },
        )
        return _text("Clear failed", 500)

    return "", 200
