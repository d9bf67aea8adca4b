"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest

from photo_delivery.adapters.drive_client import DriveClient
from photo_delivery.adapters.resend_client import EmailClient
from photo_delivery.adapters.sheets_client import SheetsClient
from photo_delivery.config import DeliverySettings, RedirectSettings
from photo_delivery.containers import RedirectContainer
from photo_delivery.domain.delivery import DeliveryLogEntry
from photo_delivery.domain.models import DeliveryRequest, PhotographerContext
from photo_delivery.services.aliases import AliasLedger
from photo_delivery.services.delivery import DeliveryOrchestrator
from photo_delivery.services.notifications import Notifier
from photo_delivery.services.outcomes import DeliveryLog, OutcomeRecorder
from photo_delivery.services.recipients import RecipientResolver
from photo_delivery.services.uploads import AssetUploader

TEMPLATE = (
    "<p>Hi {{recipientName}}, model {{folderNumber}} by "
    "{{photographerName}} ({{photographerHandle}}): "
    '<a href="{{driveLink}}">photos</a></p>'
)

SHEET_ROWS = [
    ["", "zoe@x.com", "Zoe", "001"],
    ["", "bo@x.com", "Bo", "017"],
    ["", "cy@x.com", "Cy", "020"],
    ["", "a@x.com", "Ana", "042"],
]


def http_status_error(
    status_code: int, payload: dict[str, object] | None = None
) -> httpx.HTTPStatusError:
    """Build an httpx status error with a JSON body."""
    request = httpx.Request("POST", "https://provider.test")
    response = httpx.Response(status_code, json=payload or {}, request=request)
    return httpx.HTTPStatusError("provider error", request=request, response=response)


@dataclass
class FakeTokenProvider:
    """Token provider returning a static token."""

    token: str = "google-token"

    async def access_token(self) -> str:
        return self.token


@dataclass
class FakeSheetsClient(SheetsClient):
    """Fake Sheets client serving fixed rows and recording updates."""

    rows: list[list[str]] = field(default_factory=lambda: [*SHEET_ROWS])
    reads: int = 0
    batch_requests: list[dict[str, object]] = field(default_factory=list)
    read_error: Exception | None = None
    update_error: Exception | None = None

    async def get_values(self, spreadsheet_id: str, cell_range: str) -> list[list[str]]:
        self.reads += 1
        if self.read_error is not None:
            raise self.read_error
        return self.rows

    async def batch_update(
        self, spreadsheet_id: str, requests: list[dict[str, object]]
    ) -> dict[str, object]:
        if self.update_error is not None:
            raise self.update_error
        self.batch_requests.extend(requests)
        return {"spreadsheetId": spreadsheet_id, "replies": [{}]}


@dataclass
class FakeDriveClient(DriveClient):
    """Fake Drive client handing out sequential folder ids."""

    folders: list[tuple[str, str]] = field(default_factory=list)
    shared: list[str] = field(default_factory=list)
    uploads: list[tuple[str, str, str]] = field(default_factory=list)
    create_error: Exception | None = None
    share_error: Exception | None = None
    fail_upload_name: str | None = None

    async def create_folder(self, name: str, parent_id: str) -> str:
        if self.create_error is not None:
            raise self.create_error
        self.folders.append((name, parent_id))
        return f"F{len(self.folders)}"

    async def share_with_anyone(self, file_id: str, role: str = "reader") -> None:
        if self.share_error is not None:
            raise self.share_error
        self.shared.append(file_id)

    async def upload_file(
        self, name: str, parent_id: str, content: bytes, mime_type: str
    ) -> str:
        if name == self.fail_upload_name:
            raise http_status_error(500, {"error": {"message": "backend error"}})
        self.uploads.append((name, parent_id, mime_type))
        return f"file-{len(self.uploads)}"


@dataclass
class FakeEmailClient(EmailClient):
    """Fake email client recording sends."""

    sent: list[dict[str, object]] = field(default_factory=list)
    response: dict[str, object] = field(default_factory=lambda: {"id": "email-1"})
    error: Exception | None = None

    async def send(  # noqa: PLR0913
        self,
        *,
        sender: str,
        to: str,
        subject: str,
        html: str,
        attachments: list[dict[str, str]],
    ) -> dict[str, object]:
        if self.error is not None:
            raise self.error
        self.sent.append(
            {
                "sender": sender,
                "to": to,
                "subject": subject,
                "html": html,
                "attachments": attachments,
            }
        )
        return self.response


@dataclass
class InMemoryAliasLedger(AliasLedger):
    """In-memory alias ledger for tests."""

    mapping: dict[str, str] = field(default_factory=dict)

    def get(self, alias: str) -> str | None:
        return self.mapping.get(alias)

    def set(self, alias: str, folder_id: str) -> None:
        self.mapping[alias] = folder_id


@dataclass
class InMemoryDeliveryLog(DeliveryLog):
    """In-memory delivery log for tests."""

    items: list[DeliveryLogEntry] = field(default_factory=list)
    error: Exception | None = None

    def append(self, entry: DeliveryLogEntry) -> None:
        if self.error is not None:
            raise self.error
        self.items.append(entry)

    def entries(self) -> list[DeliveryLogEntry]:
        return list(self.items)


@dataclass
class Pipeline:
    """Orchestrator plus the fakes behind it."""

    orchestrator: DeliveryOrchestrator
    sheets: FakeSheetsClient
    drive: FakeDriveClient
    email: FakeEmailClient
    ledger: InMemoryAliasLedger
    delivery_log: InMemoryDeliveryLog


@pytest.fixture
def photographer() -> PhotographerContext:
    return PhotographerContext(name="Lu Ortega", handle="@lu.shoots")


@pytest.fixture
def email_assets(tmp_path: Path) -> tuple[Path, Path]:
    template_path = tmp_path / "emailTemplate.html"
    template_path.write_text(TEMPLATE, encoding="utf-8")
    signature_path = tmp_path / "firma.png"
    signature_path.write_bytes(b"\x89PNG\r\n\x1a\nsignature")
    return template_path, signature_path


@pytest.fixture
def model_folder(tmp_path: Path) -> Path:
    folder = tmp_path / "images" / "042"
    folder.mkdir(parents=True)
    (folder / "a.jpg").write_bytes(b"\xff\xd8\xff\xe0first")
    (folder / "b.png").write_bytes(b"\x89PNG\r\n\x1a\nsecond")
    (folder / "notes.txt").write_text("not an image", encoding="utf-8")
    return folder


@pytest.fixture
def delivery_request(
    model_folder: Path, photographer: PhotographerContext
) -> DeliveryRequest:
    return DeliveryRequest(
        model_id="042",
        asset_paths=[model_folder / "a.jpg", model_folder / "b.png"],
        photographer=photographer,
    )


@pytest.fixture
def pipeline(email_assets: tuple[Path, Path]) -> Pipeline:
    template_path, signature_path = email_assets
    sheets = FakeSheetsClient()
    drive = FakeDriveClient()
    email = FakeEmailClient()
    ledger = InMemoryAliasLedger()
    delivery_log = InMemoryDeliveryLog()
    orchestrator = DeliveryOrchestrator(
        resolver=RecipientResolver(
            sheets_client=sheets,
            spreadsheet_id="sheet-1",
            cell_range="Sheet1!A2:D1000",
        ),
        uploader=AssetUploader(
            drive_client=drive,
            alias_ledger=ledger,
            parent_folder_id="parent-1",
            redirect_base_url="https://links.example.com",
        ),
        notifier=Notifier(
            email_client=email,
            template_path=template_path,
            signature_path=signature_path,
            from_address="photos@example.com",
            sender_name="Photo Team",
            subject_template="Your photos are ready, {recipient_name}!",
        ),
        recorder=OutcomeRecorder(
            sheets_client=sheets,
            delivery_log=delivery_log,
            spreadsheet_id="sheet-1",
        ),
        alias_ledger=ledger,
    )
    return Pipeline(
        orchestrator=orchestrator,
        sheets=sheets,
        drive=drive,
        email=email,
        ledger=ledger,
        delivery_log=delivery_log,
    )


@pytest.fixture
def delivery_settings(tmp_path: Path) -> DeliverySettings:
    return DeliverySettings(
        spreadsheet_id="sheet-1",
        drive_parent_folder_id="parent-1",
        google_credentials_file=tmp_path / "credentials.json",
        resend_api_key="resend-key",
        resend_from="photos@example.com",
        ledger_path=tmp_path / "redirects.json",
        delivery_log_path=tmp_path / "delivery_log.jsonl",
    )


@pytest.fixture
def redirect_settings(tmp_path: Path) -> RedirectSettings:
    return RedirectSettings(
        redirect_api_secret="s3cret",
        ledger_path=tmp_path / "redirects.json",
        linktree_url="https://linktr.ee/example",
    )


@pytest.fixture
def redirect_ledger() -> InMemoryAliasLedger:
    return InMemoryAliasLedger()


@pytest.fixture
def redirect_container(
    redirect_settings: RedirectSettings, redirect_ledger: InMemoryAliasLedger
) -> RedirectContainer:
    async def close_resources() -> None:
        return None

    return RedirectContainer(
        settings=redirect_settings,
        alias_ledger=redirect_ledger,
        close_resources=close_resources,
    )
