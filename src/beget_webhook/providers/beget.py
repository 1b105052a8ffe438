"""Beget DNS provider for ACME DNS-01 challenges."""

import json
from typing import Any

import httpx

from beget_webhook._logging import Timer, get_logger
from beget_webhook.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from beget_webhook.exceptions import (
    ProviderApiError,
    ProviderRequestError,
    ProviderResponseError,
    ProviderStatusError,
)
from beget_webhook.models import ChangeRecordsParams, ProviderResponse, RecordSet, TxtRecord
from beget_webhook.providers.base import DnsProvider

logger = get_logger(__name__)

USER_AGENT = "Beget-DNS-ACME-Hook/1.0"


class BegetProvider(DnsProvider):
    """DNS provider for the Beget DNS API.

    Every API method is a GET to ``{api_url}/{method}`` with the account
    credentials and a JSON-encoded ``input_data`` in the query string.
    One ``httpx.Client`` is shared by all calls; it is safe to use from
    several request threads at once.

    Args:
        login: Beget account login.
        password: Beget account (or API) password.
        api_url: Base URL of the DNS API (default: "https://api.beget.com/api/dns").
        timeout: HTTP timeout in seconds, applied to each phase of a
            request (default: 30). Redirects are followed.
        http_client: Preconfigured client to use instead of building one.
    """

    def __init__(
        self,
        login: str,
        password: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        self.login = login
        self._password = password
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> "BegetProvider":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def call_api(self, method: str, params: dict[str, Any]) -> ProviderResponse:
        """Call a Beget DNS API method.

        Args:
            method: API method name, e.g. "changeRecords".
            params: JSON-serializable input data for the method.

        Returns:
            The decoded response envelope.

        Raises:
            ProviderRequestError: Connection failure or timeout.
            ProviderStatusError: Non-200 HTTP status.
            ProviderResponseError: Body is not valid JSON.
            ProviderApiError: Envelope status is "error".
        """
        query = {
            "login": self.login,
            "passwd": self._password,
            "input_format": "json",
            "output_format": "json",
            "input_data": json.dumps(params, separators=(",", ":")),
        }

        try:
            with Timer() as t:
                response = self._http.get(
                    f"{self.api_url}/{method}",
                    params=query,
                    headers={"User-Agent": USER_AGENT},
                )
        except httpx.RequestError as exc:
            # Never log the URL: it carries the credentials
            raise ProviderRequestError(detail=str(exc) or type(exc).__name__) from exc

        logger.debug(
            "Beget API call finished",
            extra={
                "method": method,
                "status_code": response.status_code,
                "elapsed_ms": round(t.elapsed_ms, 1),
            },
        )

        if response.status_code != 200:
            raise ProviderStatusError(response.status_code, detail=response.text[:200] or None)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderResponseError(detail=str(exc)) from exc

        envelope = ProviderResponse.from_json(data)
        if envelope.is_error:
            raise ProviderApiError(detail=envelope.error_text, error_code=envelope.error_code)
        return envelope

    def set_txt_record(self, domain: str, value: str) -> None:
        """Replace the TXT records of ``domain`` with a single value.

        Args:
            domain: Full record name.
            value: The challenge value.

        Raises:
            ProviderError: If the API call fails.
        """
        params = ChangeRecordsParams(
            fqdn=domain,
            records=RecordSet(txt=[TxtRecord(value=value, priority=0)]),
        )
        self.call_api("changeRecords", params.model_dump(by_alias=True))

    def clear_txt_record(self, domain: str) -> None:
        """Replace the TXT records of ``domain`` with an empty set.

        This removes every TXT value of the name, not only the challenge.

        Args:
            domain: Full record name.

        Raises:
            ProviderError: If the API call fails.
        """
        params = ChangeRecordsParams(fqdn=domain, records=RecordSet(txt=[]))
        self.call_api("changeRecords", params.model_dump(by_alias=True))
