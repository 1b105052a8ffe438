"""Pydantic models for webhook requests and Beget DNS API payloads."""

import json
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Enums
# =============================================================================


class ResponseStatus(StrEnum):
    """Envelope statuses returned by the Beget API."""

    ERROR = "error"


# =============================================================================
# Webhook request
# =============================================================================

_decoder = json.JSONDecoder()


class ChallengeRequest(BaseModel):
    """Body of a /present or /cleanup request.

    ``value`` is only required for /present. Unknown fields are ignored
    and ``null`` is treated the same as a missing field.
    """

    fqdn: str | None = None
    value: str | None = None

    @classmethod
    def from_body(cls, raw: bytes) -> "ChallengeRequest":
        """Decode a request body.

        Only the first JSON value is read; anything after it is ignored.
        A ``null`` body decodes to an empty request. Field names match
        without regard to case, an exact-case key winning over others.

        Args:
            raw: Request body bytes.

        Returns:
            ChallengeRequest instance.

        Raises:
            ValueError: If the body is not JSON, not an object, or a
                field is not a string.
        """
        data, _ = _decoder.raw_decode(raw.decode().lstrip())
        if data is None:
            return cls()
        if isinstance(data, dict):
            folded = {k.lower(): v for k, v in data.items() if k.lower() in cls.model_fields}
            folded.update({k: v for k, v in data.items() if k in cls.model_fields})
            data = folded
        return cls.model_validate(data)

    @property
    def target(self) -> str:
        """The fqdn with a single trailing dot removed."""
        return (self.fqdn or "").removesuffix(".")


# =============================================================================
# Beget API payloads
# =============================================================================


class TxtRecord(BaseModel):
    """A single TXT record entry."""

    value: str
    priority: int = 0


class RecordSet(BaseModel):
    """Records of a name, keyed by type as the provider expects."""

    txt: list[TxtRecord] = Field(default_factory=list, alias="TXT")

    model_config = {"populate_by_name": True}


class ChangeRecordsParams(BaseModel):
    """Input data for the ``changeRecords`` method.

    The provider replaces the full record set of each listed type, so an
    empty TXT list removes every TXT record of the name.
    """

    fqdn: str
    records: RecordSet


class ProviderResponse(BaseModel):
    """Response envelope of the Beget API.

    Only ``status`` decides the outcome and only the literal ``"error"``
    means failure. Unknown fields are ignored, a missing or non-string
    status counts as success, and a JSON body that is not an object
    decodes to an empty (successful) envelope.
    """

    status: str | None = None
    error_text: str | None = None
    error_code: str | None = None
    answer: Any = None

    @field_validator("status", "error_text", mode="before")
    @classmethod
    def _drop_non_string(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("error_code", mode="before")
    @classmethod
    def _stringify_code(cls, value: Any) -> str | None:
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, int | str):
            return str(value)
        return None

    @classmethod
    def from_json(cls, data: Any) -> "ProviderResponse":
        """Build an envelope from any decoded JSON value.

        Args:
            data: Result of ``json.loads`` on the response body.

        Returns:
            ProviderResponse instance.
        """
        if not isinstance(data, dict):
            return cls()
        return cls.model_validate(data)

    @property
    def is_error(self) -> bool:
        """Whether the provider reported an error."""
        return self.status == ResponseStatus.ERROR
