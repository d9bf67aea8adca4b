"""Google Sheets API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from photo_delivery.adapters.google_auth import TokenProvider

SHEETS_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"


class SheetsClient(Protocol):
    """Interface for Google Sheets interactions."""

    async def get_values(self, spreadsheet_id: str, cell_range: str) -> list[list[str]]:
        """Return the cell values for a range, row by row."""

    async def batch_update(
        self, spreadsheet_id: str, requests: list[dict[str, object]]
    ) -> dict[str, object]:
        """Apply a batch of spreadsheet update requests."""


@dataclass
class HttpxSheetsClient(SheetsClient):
    """Sheets client implemented with httpx."""

    token_provider: TokenProvider
    http_client: httpx.AsyncClient
    timeout: float = 15
    base_url: str = SHEETS_BASE_URL

    @classmethod
    def create(
        cls, token_provider: TokenProvider, timeout: float = 15
    ) -> "HttpxSheetsClient":
        """Create a Sheets client with a managed httpx session."""
        return cls(
            token_provider=token_provider,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def get_values(self, spreadsheet_id: str, cell_range: str) -> list[list[str]]:
        """Read a range using the values.get API."""
        url = f"{self.base_url}/{spreadsheet_id}/values/{quote(cell_range, safe='!:')}"
        response = await self.http_client.get(
            url, headers=await self._headers(), timeout=self.timeout
        )
        response.raise_for_status()
        payload = response.json()
        return [[str(cell) for cell in row] for row in payload.get("values", [])]

    async def batch_update(
        self, spreadsheet_id: str, requests: list[dict[str, object]]
    ) -> dict[str, object]:
        """Send a spreadsheets.batchUpdate call."""
        url = f"{self.base_url}/{spreadsheet_id}:batchUpdate"
        response = await self.http_client.post(
            url,
            headers=await self._headers(),
            json={"requests": requests},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _headers(self) -> dict[str, str]:
        token = await self.token_provider.access_token()
        return {"Authorization": f"Bearer {token}"}
