"""Tests for photographer roster parsing and asset discovery."""

import pytest

from photo_delivery.domain.errors import NotFoundError
from photo_delivery.services.assets import detect_mime_type, discover_assets
from photo_delivery.services.roster import find_photographer, parse_roster


def test_parse_roster_skips_blank_and_malformed_lines() -> None:
    roster = parse_roster("1 | Lu Ortega | @lu.shoots\n\nbroken line\n2|Max|@max\n")

    assert [entry.id for entry in roster] == ["1", "2"]
    assert roster[0].name == "Lu Ortega"
    assert roster[1].context().handle == "@max"


def test_find_photographer_unknown_id() -> None:
    roster = parse_roster("1 | Lu | @lu")

    with pytest.raises(NotFoundError):
        find_photographer(roster, "7")


def test_discover_assets_filters_images(model_folder) -> None:
    assets = discover_assets(model_folder.parent, "042")

    assert [path.name for path in assets] == ["a.jpg", "b.png"]


def test_discover_assets_missing_folder(tmp_path) -> None:
    with pytest.raises(NotFoundError):
        discover_assets(tmp_path, "042")


def test_discover_assets_empty_folder(tmp_path) -> None:
    (tmp_path / "042").mkdir()
    (tmp_path / "042" / "readme.txt").write_text("x", encoding="utf-8")

    with pytest.raises(NotFoundError):
        discover_assets(tmp_path, "042")


def test_detect_mime_type() -> None:
    assert detect_mime_type(b"\xff\xd8\xff\xe0") == "image/jpeg"
    assert detect_mime_type(b"\x89PNG\r\n\x1a\n") == "image/png"
    assert detect_mime_type(b"GIF89a....") == "image/gif"
    assert detect_mime_type(b"RIFF0000WEBPVP8 ") == "image/webp"
    assert detect_mime_type(b"unknown") == "image/jpeg"


def test_discover_assets_sorted_by_name(tmp_path) -> None:
    folder = tmp_path / "042"
    folder.mkdir()
    for name in ("c.jpg", "a.JPEG", "b.gif"):
        (folder / name).write_bytes(b"\xff\xd8\xff")

    assets = discover_assets(tmp_path, "042")

    assert [path.name for path in assets] == ["a.JPEG", "b.gif", "c.jpg"]
