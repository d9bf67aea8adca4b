"""Google Drive API client."""

import json
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

import httpx

from photo_delivery.adapters.google_auth import TokenProvider

DRIVE_BASE_URL = "https://www.googleapis.com/drive/v3"
DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class DriveClient(Protocol):
    """Interface for Google Drive interactions."""

    async def create_folder(self, name: str, parent_id: str) -> str:
        """Create a folder under a parent and return its id."""

    async def share_with_anyone(self, file_id: str, role: str = "reader") -> None:
        """Grant link access to anyone for a file or folder."""

    async def upload_file(
        self, name: str, parent_id: str, content: bytes, mime_type: str
    ) -> str:
        """Upload a file into a folder and return its id."""


@dataclass
class HttpxDriveClient(DriveClient):
    """Drive client implemented with httpx."""

    token_provider: TokenProvider
    http_client: httpx.AsyncClient
    timeout: float = 15
    upload_timeout: float = 120
    base_url: str = DRIVE_BASE_URL
    upload_url: str = DRIVE_UPLOAD_URL

    @classmethod
    def create(
        cls,
        token_provider: TokenProvider,
        timeout: float = 15,
        upload_timeout: float = 120,
    ) -> "HttpxDriveClient":
        """Create a Drive client with a managed httpx session."""
        return cls(
            token_provider=token_provider,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
            upload_timeout=upload_timeout,
        )

    async def create_folder(self, name: str, parent_id: str) -> str:
        """Create a folder with files.create."""
        response = await self.http_client.post(
            f"{self.base_url}/files",
            params={"fields": "id", "supportsAllDrives": "true"},
            headers=await self._headers(),
            json={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return str(response.json()["id"])

    async def share_with_anyone(self, file_id: str, role: str = "reader") -> None:
        """Create an ``anyone`` permission on a file."""
        response = await self.http_client.post(
            f"{self.base_url}/files/{file_id}/permissions",
            params={"supportsAllDrives": "true"},
            headers=await self._headers(),
            json={"role": role, "type": "anyone"},
            timeout=self.timeout,
        )
        response.raise_for_status()

    async def upload_file(
        self, name: str, parent_id: str, content: bytes, mime_type: str
    ) -> str:
        """Upload a file with a multipart/related request."""
        boundary = f"photo-delivery-{uuid4().hex}"
        body = _multipart_related(
            boundary, {"name": name, "parents": [parent_id]}, content, mime_type
        )
        headers = await self._headers()
        headers["Content-Type"] = f"multipart/related; boundary={boundary}"
        response = await self.http_client.post(
            self.upload_url,
            params={
                "uploadType": "multipart",
                "fields": "id",
                "supportsAllDrives": "true",
            },
            headers=headers,
            content=body,
            timeout=self.upload_timeout,
        )
        response.raise_for_status()
        return str(response.json()["id"])

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _headers(self) -> dict[str, str]:
        token = await self.token_provider.access_token()
        return {"Authorization": f"Bearer {token}"}


def _multipart_related(
    boundary: str, metadata: dict[str, object], content: bytes, mime_type: str
) -> bytes:
    """Build a Drive multipart upload body (metadata part, then media part)."""
    delimiter = f"--{boundary}\r\n".encode()
    return b"".join(
        [
            delimiter,
            b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
            json.dumps(metadata).encode("utf-8"),
            b"\r\n",
            delimiter,
            f"Content-Type: {mime_type}\r\n\r\n".encode(),
            content,
            f"\r\n--{boundary}--\r\n".encode(),
        ]
    )
