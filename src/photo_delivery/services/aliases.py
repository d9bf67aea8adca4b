"""Alias ledger interface shared by the uploader and the redirect service."""

from typing import Protocol
from urllib.parse import quote


class AliasLedger(Protocol):
    """Durable mapping from a short alias to a storage folder id."""

    def get(self, alias: str) -> str | None:
        """Return the folder id registered for an alias, if any."""

    def set(self, alias: str, folder_id: str) -> None:
        """Register or overwrite the folder id for an alias."""


def short_link(base_url: str, alias: str) -> str:
    """Build the branded redirect URL for an alias."""
    return f"{base_url.rstrip('/')}/view/{quote(alias, safe='')}"
