"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_ENV_CONFIG = SettingsConfigDict(
    env_file=(f".env.{_ENVIRONMENT}", ".env"),
    extra="ignore",
)

StoreBackend = Literal["file", "supabase"]


class DeliverySettings(BaseSettings):
    """Settings for the delivery pipeline, loaded from environment variables."""

    spreadsheet_id: str
    sheet_range: str = "Sheet1!A2:D1000"
    sheet_id: int = 0
    sheet_first_data_row: int = 1
    sheet_status_columns: int = 4
    success_color: str = "#8ed4a0"
    failure_color: str = "#d48e8e"

    drive_parent_folder_id: str
    google_credentials_file: Path = Path("credentials.json")

    resend_api_key: str
    resend_from: str
    sender_name: str = "Photo Delivery"
    email_subject: str = "Your photos are ready, {recipient_name}!"
    email_template_path: Path = Path("emailTemplate.html")
    signature_path: Path = Path("firma.png")

    images_root: Path = Path("images")
    photographers_file: Path = Path("fotografos.txt")
    redirect_base_url: str = "http://localhost:3000"
    folder_url_template: str = "https://drive.google.com/drive/folders/{folder_id}"

    ledger_backend: StoreBackend = "file"
    ledger_path: Path = Path("redirects.json")
    delivery_log_backend: StoreBackend = "file"
    delivery_log_path: Path = Path("delivery_log.jsonl")
    supabase_url: str | None = None
    supabase_service_key: str | None = None

    sheets_timeout_seconds: float = 15
    drive_timeout_seconds: float = 15
    upload_timeout_seconds: float = 120
    email_timeout_seconds: float = 20

    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = _ENV_CONFIG


class RedirectSettings(BaseSettings):
    """Settings for the redirect service."""

    redirect_api_secret: str
    ledger_backend: StoreBackend = "file"
    ledger_path: Path = Path("redirects.json")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    folder_url_template: str = "https://drive.google.com/drive/folders/{folder_id}"
    linktree_url: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = _ENV_CONFIG


def hex_to_rgb(color: str) -> dict[str, float]:
    """Convert a ``#rrggbb`` color to the Sheets API 0-1 RGB object."""
    value = int(color.lstrip("#"), 16)
    return {
        "red": ((value >> 16) & 255) / 255,
        "green": ((value >> 8) & 255) / 255,
        "blue": (value & 255) / 255,
    }
