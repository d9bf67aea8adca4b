"""Delivery orchestration: resolve, upload, notify, record."""

import json
import logging
from dataclasses import dataclass

from photo_delivery.domain.delivery import (
    DeliveryOutcome,
    DeliveryResult,
    DeliveryStage,
    DeliveryStatus,
)
from photo_delivery.domain.errors import (
    AlreadyDeliveredError,
    EmptySourceError,
    LedgerError,
    NotFoundError,
    SendError,
    SourceUnavailableError,
    UploadError,
)
from photo_delivery.domain.models import (
    DeliveryFolder,
    DeliveryRequest,
    RecipientRecord,
)
from photo_delivery.services.aliases import AliasLedger
from photo_delivery.services.notifications import Notifier
from photo_delivery.services.outcomes import OutcomeRecorder
from photo_delivery.services.recipients import RecipientResolver
from photo_delivery.services.uploads import AssetUploader

_RESOLVE_ERRORS = (
    NotFoundError,
    EmptySourceError,
    SourceUnavailableError,
    AlreadyDeliveredError,
    LedgerError,
)

_logger = logging.getLogger(__name__)


@dataclass
class DeliveryOrchestrator:
    """Run one delivery request through the pipeline, strictly in order.

    Resolution failures end the attempt before any side effect and are not
    recorded. Upload and send failures are recorded as failed outcomes.
    Recording failures are reported on the result and never change its
    status. No stage is retried.
    """

    resolver: RecipientResolver
    uploader: AssetUploader
    notifier: Notifier
    recorder: OutcomeRecorder
    alias_ledger: AliasLedger

    async def deliver(
        self, request: DeliveryRequest, force_resubmit: bool = False
    ) -> DeliveryResult:
        """Deliver a model's photo set and return the final pipeline state."""
        model_id = request.model_id
        try:
            if not request.asset_paths:
                raise NotFoundError(f"No assets to deliver for model {model_id}")
            recipient = await self.resolver.resolve(model_id)
            if not force_resubmit:
                self._ensure_not_delivered(model_id)
        except _RESOLVE_ERRORS as exc:
            _logger.error("Resolving failed for model %s: %s", model_id, exc)
            return DeliveryResult(
                model_id=model_id,
                stage=DeliveryStage.FAILED_RESOLVING,
                status=None,
                message=str(exc),
                failed_stage=DeliveryStage.RESOLVING,
            )

        try:
            folder = await self.uploader.upload(model_id, request.asset_paths)
        except UploadError as exc:
            _logger.error("Uploading failed for model %s: %s", model_id, exc)
            return await self._record(
                request,
                recipient,
                None,
                DeliveryStatus.FAILED,
                str(exc),
                failed_stage=DeliveryStage.UPLOADING,
            )

        try:
            response = await self.notifier.notify(
                recipient, model_id, folder.short_link, request.photographer
            )
        except SendError as exc:
            _logger.error("Notifying failed for model %s: %s", model_id, exc)
            return await self._record(
                request,
                recipient,
                folder,
                DeliveryStatus.FAILED,
                str(exc),
                failed_stage=DeliveryStage.NOTIFYING,
            )

        return await self._record(
            request,
            recipient,
            folder,
            DeliveryStatus.SUCCESS,
            json.dumps(response, default=str),
        )

    def _ensure_not_delivered(self, model_id: str) -> None:
        existing = self.alias_ledger.get(model_id)
        if existing is not None:
            raise AlreadyDeliveredError(
                f"Model {model_id} was already delivered to folder {existing}; "
                "use force_resubmit to deliver it again"
            )

    async def _record(  # noqa: PLR0913
        self,
        request: DeliveryRequest,
        recipient: RecipientRecord,
        folder: DeliveryFolder | None,
        status: DeliveryStatus,
        message: str,
        failed_stage: DeliveryStage | None = None,
    ) -> DeliveryResult:
        outcome = DeliveryOutcome(
            status=status,
            model_id=request.model_id,
            recipient=recipient,
            photographer=request.photographer,
            message=message,
        )
        record_errors = await self.recorder.record(outcome)
        return DeliveryResult(
            model_id=request.model_id,
            stage=DeliveryStage.DONE,
            status=status,
            message=message,
            failed_stage=failed_stage,
            recipient=recipient,
            folder=folder,
            record_errors=record_errors,
        )
