"""DNS providers for ACME challenge validation."""

from beget_webhook.providers.base import DnsProvider
from beget_webhook.providers.beget import BegetProvider

__all__ = ["BegetProvider", "DnsProvider"]
