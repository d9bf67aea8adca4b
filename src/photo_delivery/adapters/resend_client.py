"""Resend transactional email client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

RESEND_BASE_URL = "https://api.resend.com"


class EmailClient(Protocol):
    """Interface for sending transactional email."""

    async def send(  # noqa: PLR0913
        self,
        *,
        sender: str,
        to: str,
        subject: str,
        html: str,
        attachments: list[dict[str, str]],
    ) -> dict[str, object]:
        """Send an email and return the provider response."""


@dataclass
class HttpxResendClient(EmailClient):
    """Resend client implemented with httpx."""

    api_key: str
    http_client: httpx.AsyncClient
    timeout: float = 20
    base_url: str = RESEND_BASE_URL

    @classmethod
    def create(cls, api_key: str, timeout: float = 20) -> "HttpxResendClient":
        """Create a Resend client with a managed httpx session."""
        return cls(api_key=api_key, http_client=httpx.AsyncClient(), timeout=timeout)

    async def send(  # noqa: PLR0913
        self,
        *,
        sender: str,
        to: str,
        subject: str,
        html: str,
        attachments: list[dict[str, str]],
    ) -> dict[str, object]:
        """Send an email using the Resend emails API."""
        response = await self.http_client.post(
            f"{self.base_url}/emails",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "from": sender,
                "to": [to],
                "subject": subject,
                "html": html,
                "attachments": attachments,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
