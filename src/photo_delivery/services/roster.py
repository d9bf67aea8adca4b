"""Photographer roster loading."""

from pathlib import Path

from photo_delivery.domain.errors import NotFoundError
from photo_delivery.domain.models import Photographer


def parse_roster(raw: str) -> list[Photographer]:
    """Parse ``id | name | handle`` lines into roster entries."""
    photographers: list[Photographer] = []
    for line in raw.splitlines():
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split("|")]
        if len(parts) < 3 or not parts[0]:
            continue
        photographers.append(Photographer(id=parts[0], name=parts[1], handle=parts[2]))
    return photographers


def load_roster(path: Path) -> list[Photographer]:
    """Load the roster file from disk."""
    return parse_roster(path.read_text(encoding="utf-8"))


def find_photographer(
    photographers: list[Photographer], photographer_id: str
) -> Photographer:
    """Return the roster entry with the given id."""
    for photographer in photographers:
        if photographer.id == photographer_id:
            return photographer
    raise NotFoundError(f"Unknown photographer id: {photographer_id}")
