"""Delivery pipeline states, outcomes and log entries."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from photo_delivery.domain.errors import RecordError
from photo_delivery.domain.models import (
    DeliveryFolder,
    PhotographerContext,
    RecipientRecord,
)


class DeliveryStage(StrEnum):
    """Orchestrator states."""

    RESOLVING = "resolving"
    UPLOADING = "uploading"
    NOTIFYING = "notifying"
    RECORDING = "recording"
    DONE = "done"
    FAILED_RESOLVING = "failed_resolving"


class DeliveryStatus(StrEnum):
    """Recorded outcome of a delivery attempt."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class DeliveryOutcome:
    """Everything the outcome recorder needs for one attempt."""

    status: DeliveryStatus
    model_id: str
    recipient: RecipientRecord
    photographer: PhotographerContext
    message: str


@dataclass(frozen=True)
class DeliveryResult:
    """Final state of one orchestrator run."""

    model_id: str
    stage: DeliveryStage
    status: DeliveryStatus | None
    message: str
    failed_stage: DeliveryStage | None = None
    recipient: RecipientRecord | None = None
    folder: DeliveryFolder | None = None
    record_errors: list[RecordError] = field(default_factory=list)


class RecipientRef(BaseModel):
    """Recipient block of a log entry."""

    name: str
    email: str


class PhotographerRef(BaseModel):
    """Photographer block of a log entry."""

    name: str
    handle: str


class DeliveryLogEntry(BaseModel):
    """Immutable audit log entry, one per delivery attempt."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    model_id: str = Field(
        validation_alias=AliasChoices("modelId", "modelNumber", "model_id"),
        serialization_alias="modelId",
    )
    recipient: RecipientRef
    photographer: PhotographerRef
    status: DeliveryStatus
    message: str

    @classmethod
    def from_outcome(cls, outcome: DeliveryOutcome) -> "DeliveryLogEntry":
        """Build a log entry from a delivery outcome."""
        return cls(
            model_id=outcome.model_id,
            recipient=RecipientRef(
                name=outcome.recipient.name, email=outcome.recipient.email
            ),
            photographer=PhotographerRef(
                name=outcome.photographer.name, handle=outcome.photographer.handle
            ),
            status=outcome.status,
            message=outcome.message,
        )
