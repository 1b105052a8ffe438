"""Abstract base class for DNS providers."""

from abc import ABC, abstractmethod


class DnsProvider(ABC):
    """Abstract interface for DNS providers.

    DNS providers publish and remove the TXT records used for ACME
    DNS-01 challenge validation. Implementations raise
    :class:`~beget_webhook.exceptions.ProviderError` on failure.
    """

    @abstractmethod
    def set_txt_record(self, domain: str, value: str) -> None:
        """Publish a TXT record for an ACME challenge.

        Replaces the TXT record set of ``domain`` with the single value.

        Args:
            domain: Full record name, e.g. "_acme-challenge.example.com".
            value: The challenge value to publish.

        Raises:
            ProviderError: If the provider call fails.
        """
        ...

    @abstractmethod
    def clear_txt_record(self, domain: str) -> None:
        """Remove the TXT records of ``domain``.

        Args:
            domain: Full record name, e.g. "_acme-challenge.example.com".

        Raises:
            ProviderError: If the provider call fails.
        """
        ...

    def close(self) -> None:
        """Release resources held by the provider."""
