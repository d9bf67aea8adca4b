"""Outcome recording: spreadsheet row status and the delivery log."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_delivery.adapters.sheets_client import SheetsClient
from photo_delivery.config import hex_to_rgb
from photo_delivery.domain.delivery import (
    DeliveryLogEntry,
    DeliveryOutcome,
    DeliveryStatus,
)
from photo_delivery.domain.errors import RecordError

_logger = logging.getLogger(__name__)


class DeliveryLog(Protocol):
    """Append-only store of delivery log entries."""

    def append(self, entry: DeliveryLogEntry) -> None:
        """Append one entry."""

    def entries(self) -> list[DeliveryLogEntry]:
        """Return all entries in append order."""


@dataclass
class OutcomeRecorder:
    """Mark the recipient row and log the attempt without ever raising."""

    sheets_client: SheetsClient
    delivery_log: DeliveryLog
    spreadsheet_id: str
    sheet_id: int = 0
    first_data_row: int = 1
    status_columns: int = 4
    success_color: str = "#8ed4a0"
    failure_color: str = "#d48e8e"

    async def record(self, outcome: DeliveryOutcome) -> list[RecordError]:
        """Color the row and append the log entry; return any write failures."""
        errors: list[RecordError] = []

        try:
            await self._color_row(outcome)
        except Exception as exc:
            errors.append(
                RecordError(f"Failed to color sheet row for {outcome.model_id}: {exc}")
            )

        try:
            self.delivery_log.append(DeliveryLogEntry.from_outcome(outcome))
        except Exception as exc:
            errors.append(
                RecordError(
                    f"Failed to write delivery log for {outcome.model_id}: {exc}"
                )
            )

        for error in errors:
            _logger.error("Recording stage: %s", error)
        return errors

    async def _color_row(self, outcome: DeliveryOutcome) -> None:
        color = (
            self.success_color
            if outcome.status is DeliveryStatus.SUCCESS
            else self.failure_color
        )
        grid_row = outcome.recipient.row_index + self.first_data_row
        await self.sheets_client.batch_update(
            self.spreadsheet_id,
            [
                {
                    "repeatCell": {
                        "range": {
                            "sheetId": self.sheet_id,
                            "startRowIndex": grid_row,
                            "endRowIndex": grid_row + 1,
                            "startColumnIndex": 0,
                            "endColumnIndex": self.status_columns,
                        },
                        "cell": {
                            "userEnteredFormat": {"backgroundColor": hex_to_rgb(color)}
                        },
                        "fields": "userEnteredFormat.backgroundColor",
                    }
                }
            ],
        )
