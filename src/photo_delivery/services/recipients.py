"""Recipient lookup against the delivery spreadsheet."""

import logging
from dataclasses import dataclass

from photo_delivery.adapters.google_auth import GOOGLE_API_ERRORS
from photo_delivery.adapters.sheets_client import SheetsClient
from photo_delivery.domain.errors import (
    EmptySourceError,
    NotFoundError,
    SourceUnavailableError,
)
from photo_delivery.domain.models import RecipientRecord

_EMAIL_COLUMN = 1
_NAME_COLUMN = 2
_MODEL_COLUMN = 3

_logger = logging.getLogger(__name__)


@dataclass
class RecipientResolver:
    """Resolve a model id to the first matching spreadsheet row."""

    sheets_client: SheetsClient
    spreadsheet_id: str
    cell_range: str

    async def resolve(self, model_id: str) -> RecipientRecord:
        """Read the sheet and return the first row whose model column matches."""
        try:
            rows = await self.sheets_client.get_values(
                self.spreadsheet_id, self.cell_range
            )
        except GOOGLE_API_ERRORS as exc:
            raise SourceUnavailableError(
                f"Failed to read recipient sheet: {exc}"
            ) from exc

        if not rows:
            raise EmptySourceError("Recipient sheet has no rows")

        for index, row in enumerate(rows):
            if _cell(row, _MODEL_COLUMN) == model_id:
                _logger.info("Resolved model %s to sheet row %s", model_id, index)
                return RecipientRecord(
                    email=_cell(row, _EMAIL_COLUMN),
                    name=_cell(row, _NAME_COLUMN),
                    row_index=index,
                )

        raise NotFoundError(f"Model {model_id} not found in recipient sheet")


def _cell(row: list[str], column: int) -> str:
    """Return a cell value, treating cells past the row end as empty."""
    if column < len(row):
        return row[column]
    return ""
