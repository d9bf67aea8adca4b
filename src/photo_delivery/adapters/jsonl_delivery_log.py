"""JSON-lines delivery log."""

import json
from dataclasses import dataclass
from pathlib import Path

from photo_delivery.domain.delivery import DeliveryLogEntry
from photo_delivery.services.outcomes import DeliveryLog


@dataclass
class JsonlDeliveryLog(DeliveryLog):
    """Delivery log written as one JSON object per line.

    Appends open the file in append mode and never rewrite earlier entries.
    Files in the older single-array format can still be read.
    """

    path: Path

    def append(self, entry: DeliveryLogEntry) -> None:
        """Append one entry as a JSON line."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(entry.model_dump_json(by_alias=True) + "\n")

    def entries(self) -> list[DeliveryLogEntry]:
        """Return all logged entries in file order."""
        if not self.path.exists():
            return []
        raw = self.path.read_text(encoding="utf-8")
        if raw.lstrip().startswith("["):
            return [DeliveryLogEntry.model_validate(item) for item in json.loads(raw)]
        return [
            DeliveryLogEntry.model_validate_json(line)
            for line in raw.splitlines()
            if line.strip()
        ]
