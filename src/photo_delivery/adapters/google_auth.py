"""Google service-account access tokens."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

GOOGLE_SCOPES = (
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
)

# Errors a Sheets or Drive call can raise, token refresh included.
GOOGLE_API_ERRORS = (
    httpx.HTTPError,
    GoogleAuthError,
    OSError,
    KeyError,
    TypeError,
    ValueError,
)


class TokenProvider(Protocol):
    """Source of OAuth bearer tokens for Google APIs."""

    async def access_token(self) -> str:
        """Return a valid access token."""


@dataclass
class ServiceAccountTokenProvider(TokenProvider):
    """Token provider backed by a service-account key file.

    The key file is read on first use and the token is refreshed whenever
    google-auth reports it as expired.
    """

    credentials_file: Path
    scopes: tuple[str, ...] = GOOGLE_SCOPES
    _credentials: service_account.Credentials | None = None

    async def access_token(self) -> str:
        """Return a fresh access token, refreshing it off the event loop."""
        if self._credentials is None:
            self._credentials = (
                service_account.Credentials.from_service_account_file(
                    str(self.credentials_file), scopes=list(self.scopes)
                )
            )
        if not self._credentials.valid:
            await asyncio.to_thread(self._credentials.refresh, Request())
        return self._credentials.token
