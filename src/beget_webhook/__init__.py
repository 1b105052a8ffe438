"""Beget ACME webhook - DNS-01 challenge TXT records through the Beget DNS API."""

from beget_webhook.app import create_app
from beget_webhook.providers.beget import BegetProvider

__all__ = ["BegetProvider", "create_app"]
__version__ = "0.1.0"
