"""Webhook and DNS provider exceptions."""


class WebhookError(Exception):
    """Base exception for beget_webhook."""

    pass


class ConfigError(WebhookError):
    """Required configuration is missing or invalid at startup.

    Args:
        message: Human-readable summary.
        missing: Names of the environment variables that failed validation.
    """

    def __init__(self, message: str, missing: list[str] | None = None):
        self.missing = missing or []
        super().__init__(message)


class ProviderError(WebhookError):
    """Error talking to the DNS provider API.

    The exception message is deliberately generic; the original cause
    (network error, provider error text) is kept in ``detail`` so it can
    be logged without being returned to HTTP callers.

    Args:
        message: Generic error message.
        detail: Original error detail, for logs only.
    """

    def __init__(self, message: str, detail: str | None = None):
        self.detail = detail
        super().__init__(message)


class ProviderRequestError(ProviderError):
    """The request never produced a response (connection failure, timeout)."""

    def __init__(self, detail: str | None = None):
        super().__init__("request failed", detail)


class ProviderStatusError(ProviderError):
    """The provider answered with a non-200 HTTP status."""

    def __init__(self, status_code: int, detail: str | None = None):
        self.status_code = status_code
        super().__init__(f"status {status_code}", detail)


class ProviderResponseError(ProviderError):
    """The provider answered 200 but the body is not valid JSON."""

    def __init__(self, detail: str | None = None):
        super().__init__("invalid response body", detail)


class ProviderApiError(ProviderError):
    """The provider envelope reported ``status: "error"``."""

    def __init__(self, detail: str | None = None, error_code: str | None = None):
        self.error_code = error_code
        super().__init__("API error", detail)
