"""Upload a model's photo set to Drive and register its short alias."""

import logging
from dataclasses import dataclass
from pathlib import Path

from photo_delivery.adapters.drive_client import DriveClient
from photo_delivery.adapters.google_auth import GOOGLE_API_ERRORS
from photo_delivery.domain.errors import LedgerError, UploadError
from photo_delivery.domain.models import DeliveryFolder
from photo_delivery.services.aliases import AliasLedger, short_link
from photo_delivery.services.assets import detect_mime_type

_logger = logging.getLogger(__name__)


@dataclass
class AssetUploader:
    """Create a public Drive folder for a model and fill it with assets."""

    drive_client: DriveClient
    alias_ledger: AliasLedger
    parent_folder_id: str
    redirect_base_url: str
    folder_url_template: str = "https://drive.google.com/drive/folders/{folder_id}"

    async def upload(self, model_id: str, asset_paths: list[Path]) -> DeliveryFolder:
        """Create the folder, share it, register the alias and upload each file.

        Files uploaded before a failure stay in the remote folder.
        """
        try:
            _logger.info("Creating Drive folder for model %s", model_id)
            folder_id = await self.drive_client.create_folder(
                model_id, self.parent_folder_id
            )
        except GOOGLE_API_ERRORS as exc:
            raise UploadError(f"Failed to create folder {model_id}: {exc}") from exc

        is_public = await self._share(folder_id)

        try:
            self.alias_ledger.set(model_id, folder_id)
        except LedgerError as exc:
            raise UploadError(str(exc)) from exc

        _logger.info("Uploading %s files for model %s", len(asset_paths), model_id)
        for path in asset_paths:
            try:
                content = path.read_bytes()
                await self.drive_client.upload_file(
                    path.name, folder_id, content, detect_mime_type(content)
                )
            except GOOGLE_API_ERRORS as exc:
                raise UploadError(f"Failed to upload {path.name}: {exc}") from exc
            _logger.info("Uploaded %s", path.name)

        return DeliveryFolder(
            folder_id=folder_id,
            public_link=self.folder_url_template.format(folder_id=folder_id),
            short_alias=model_id,
            short_link=short_link(self.redirect_base_url, model_id),
            is_public=is_public,
        )

    async def _share(self, folder_id: str) -> bool:
        """Grant anyone-with-link read access; failures leave the folder private."""
        try:
            await self.drive_client.share_with_anyone(folder_id, role="reader")
        except GOOGLE_API_ERRORS as exc:
            _logger.warning("Failed to make folder %s public: %s", folder_id, exc)
            return False
        return True
