"""Domain models for photo delivery."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PhotographerContext:
    """Photographer credited in the delivery email and log."""

    name: str
    handle: str


@dataclass(frozen=True)
class Photographer:
    """Roster entry selectable by id."""

    id: str
    name: str
    handle: str

    def context(self) -> PhotographerContext:
        """Return the session context for this photographer."""
        return PhotographerContext(name=self.name, handle=self.handle)


@dataclass(frozen=True)
class DeliveryRequest:
    """A single request to deliver a model's photo set."""

    model_id: str
    asset_paths: list[Path]
    photographer: PhotographerContext


@dataclass(frozen=True)
class RecipientRecord:
    """Contact details resolved from the recipient spreadsheet."""

    email: str
    name: str
    row_index: int


@dataclass(frozen=True)
class DeliveryFolder:
    """Remote storage folder created for a delivery."""

    folder_id: str
    public_link: str
    short_alias: str
    short_link: str
    is_public: bool = True
