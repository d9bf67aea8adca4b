"""Tests for recipient resolution."""

import asyncio

import httpx
import pytest
from google.auth.exceptions import RefreshError

from photo_delivery.domain.errors import (
    EmptySourceError,
    NotFoundError,
    SourceUnavailableError,
)
from photo_delivery.services.recipients import RecipientResolver
from tests.conftest import FakeSheetsClient


def _resolver(sheets: FakeSheetsClient) -> RecipientResolver:
    return RecipientResolver(
        sheets_client=sheets, spreadsheet_id="sheet-1", cell_range="Sheet1!A2:D1000"
    )


def test_resolve_returns_matching_row() -> None:
    record = asyncio.run(_resolver(FakeSheetsClient()).resolve("042"))

    assert record.email == "a@x.com"
    assert record.name == "Ana"
    assert record.row_index == 3


def test_resolve_first_match_wins() -> None:
    sheets = FakeSheetsClient(
        rows=[["", "first@x.com", "First", "7"], ["", "second@x.com", "Second", "7"]]
    )

    record = asyncio.run(_resolver(sheets).resolve("7"))

    assert record.email == "first@x.com"
    assert record.row_index == 0


def test_resolve_reads_source_on_every_call() -> None:
    sheets = FakeSheetsClient()
    resolver = _resolver(sheets)

    asyncio.run(resolver.resolve("001"))
    asyncio.run(resolver.resolve("001"))

    assert sheets.reads == 2


def test_resolve_skips_short_rows() -> None:
    sheets = FakeSheetsClient(rows=[["", "x@x.com"], ["", "a@x.com", "Ana", "042"]])

    record = asyncio.run(_resolver(sheets).resolve("042"))

    assert record.row_index == 1


def test_resolve_missing_model_raises_not_found() -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(_resolver(FakeSheetsClient()).resolve("999"))


def test_resolve_empty_sheet_raises_empty_source() -> None:
    with pytest.raises(EmptySourceError):
        asyncio.run(_resolver(FakeSheetsClient(rows=[])).resolve("042"))


def test_resolve_transport_error_raises_source_unavailable() -> None:
    sheets = FakeSheetsClient(read_error=httpx.ReadTimeout("timed out"))

    with pytest.raises(SourceUnavailableError):
        asyncio.run(_resolver(sheets).resolve("042"))


def test_resolve_token_failure_raises_source_unavailable() -> None:
    sheets = FakeSheetsClient(read_error=RefreshError("invalid_grant"))

    with pytest.raises(SourceUnavailableError, match="invalid_grant"):
        asyncio.run(_resolver(sheets).resolve("042"))


def test_resolve_compares_model_cell_exactly() -> None:
    sheets = FakeSheetsClient(rows=[["", "a@x.com", "Ana", " 042"]])

    with pytest.raises(NotFoundError):
        asyncio.run(_resolver(sheets).resolve("042"))
