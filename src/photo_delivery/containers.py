"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import Client, create_client

from photo_delivery.adapters.drive_client import DriveClient, HttpxDriveClient
from photo_delivery.adapters.google_auth import ServiceAccountTokenProvider
from photo_delivery.adapters.json_alias_ledger import JsonFileAliasLedger
from photo_delivery.adapters.jsonl_delivery_log import JsonlDeliveryLog
from photo_delivery.adapters.resend_client import EmailClient, HttpxResendClient
from photo_delivery.adapters.sheets_client import HttpxSheetsClient, SheetsClient
from photo_delivery.adapters.supabase_alias_ledger import SupabaseAliasLedger
from photo_delivery.adapters.supabase_delivery_log import SupabaseDeliveryLog
from photo_delivery.config import DeliverySettings, RedirectSettings, StoreBackend
from photo_delivery.services.aliases import AliasLedger
from photo_delivery.services.delivery import DeliveryOrchestrator
from photo_delivery.services.notifications import Notifier
from photo_delivery.services.outcomes import DeliveryLog, OutcomeRecorder
from photo_delivery.services.recipients import RecipientResolver
from photo_delivery.services.uploads import AssetUploader


@dataclass
class DeliveryContainer:
    """Holds dependencies for the delivery pipeline."""

    settings: DeliverySettings
    sheets_client: SheetsClient
    drive_client: DriveClient
    email_client: EmailClient
    alias_ledger: AliasLedger
    delivery_log: DeliveryLog
    orchestrator: DeliveryOrchestrator
    close_resources: Callable[[], Awaitable[None]]


@dataclass
class RedirectContainer:
    """Holds dependencies for the redirect service."""

    settings: RedirectSettings
    alias_ledger: AliasLedger
    close_resources: Callable[[], Awaitable[None]]


def _supabase_client(url: str | None, key: str | None) -> Client:
    if not url or not key:
        raise ValueError("supabase_url and supabase_service_key are required")
    return create_client(url, key)


def build_alias_ledger(
    backend: StoreBackend,
    path: Path,
    supabase_url: str | None = None,
    supabase_service_key: str | None = None,
) -> AliasLedger:
    """Create the configured alias ledger implementation."""
    if backend == "supabase":
        return SupabaseAliasLedger(_supabase_client(supabase_url, supabase_service_key))
    return JsonFileAliasLedger(path)


def build_delivery_log(
    backend: StoreBackend,
    path: Path,
    supabase_url: str | None = None,
    supabase_service_key: str | None = None,
) -> DeliveryLog:
    """Create the configured delivery log implementation."""
    if backend == "supabase":
        return SupabaseDeliveryLog(_supabase_client(supabase_url, supabase_service_key))
    return JsonlDeliveryLog(path)


def build_delivery_container(
    settings: DeliverySettings | None = None,
) -> DeliveryContainer:
    """Create the default delivery pipeline container."""
    resolved_settings = settings or DeliverySettings()
    token_provider = ServiceAccountTokenProvider(
        resolved_settings.google_credentials_file
    )
    sheets_client = HttpxSheetsClient.create(
        token_provider, timeout=resolved_settings.sheets_timeout_seconds
    )
    drive_client = HttpxDriveClient.create(
        token_provider,
        timeout=resolved_settings.drive_timeout_seconds,
        upload_timeout=resolved_settings.upload_timeout_seconds,
    )
    email_client = HttpxResendClient.create(
        resolved_settings.resend_api_key,
        timeout=resolved_settings.email_timeout_seconds,
    )
    alias_ledger = build_alias_ledger(
        resolved_settings.ledger_backend,
        resolved_settings.ledger_path,
        resolved_settings.supabase_url,
        resolved_settings.supabase_service_key,
    )
    delivery_log = build_delivery_log(
        resolved_settings.delivery_log_backend,
        resolved_settings.delivery_log_path,
        resolved_settings.supabase_url,
        resolved_settings.supabase_service_key,
    )
    orchestrator = DeliveryOrchestrator(
        resolver=RecipientResolver(
            sheets_client=sheets_client,
            spreadsheet_id=resolved_settings.spreadsheet_id,
            cell_range=resolved_settings.sheet_range,
        ),
        uploader=AssetUploader(
            drive_client=drive_client,
            alias_ledger=alias_ledger,
            parent_folder_id=resolved_settings.drive_parent_folder_id,
            redirect_base_url=resolved_settings.redirect_base_url,
            folder_url_template=resolved_settings.folder_url_template,
        ),
        notifier=Notifier(
            email_client=email_client,
            template_path=resolved_settings.email_template_path,
            signature_path=resolved_settings.signature_path,
            from_address=resolved_settings.resend_from,
            sender_name=resolved_settings.sender_name,
            subject_template=resolved_settings.email_subject,
        ),
        recorder=OutcomeRecorder(
            sheets_client=sheets_client,
            delivery_log=delivery_log,
            spreadsheet_id=resolved_settings.spreadsheet_id,
            sheet_id=resolved_settings.sheet_id,
            first_data_row=resolved_settings.sheet_first_data_row,
            status_columns=resolved_settings.sheet_status_columns,
            success_color=resolved_settings.success_color,
            failure_color=resolved_settings.failure_color,
        ),
        alias_ledger=alias_ledger,
    )

    async def close_resources() -> None:
        await sheets_client.close()
        await drive_client.close()
        await email_client.close()

    return DeliveryContainer(
        settings=resolved_settings,
        sheets_client=sheets_client,
        drive_client=drive_client,
        email_client=email_client,
        alias_ledger=alias_ledger,
        delivery_log=delivery_log,
        orchestrator=orchestrator,
        close_resources=close_resources,
    )


def build_redirect_container(
    settings: RedirectSettings | None = None,
) -> RedirectContainer:
    """Create the default redirect service container."""
    resolved_settings = settings or RedirectSettings()
    alias_ledger = build_alias_ledger(
        resolved_settings.ledger_backend,
        resolved_settings.ledger_path,
        resolved_settings.supabase_url,
        resolved_settings.supabase_service_key,
    )

    async def close_resources() -> None:
        return None

    return RedirectContainer(
        settings=resolved_settings,
        alias_ledger=alias_ledger,
        close_resources=close_resources,
    )
