"""JSON file-backed alias ledger."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from photo_delivery.domain.errors import LedgerError
from photo_delivery.services.aliases import AliasLedger


@dataclass
class JsonFileAliasLedger(AliasLedger):
    """Alias ledger stored as a single JSON object file.

    The file is re-read on every call so a separate process writing to it is
    picked up without a restart. Writes go through a temporary file and an
    atomic rename; there is no locking, the last writer wins.
    """

    path: Path

    def get(self, alias: str) -> str | None:
        """Return the folder id for an alias."""
        return self._load().get(alias)

    def set(self, alias: str, folder_id: str) -> None:
        """Merge an alias into the file, overwriting any previous mapping."""
        mapping = self._load()
        mapping[alias] = folder_id
        self._write(mapping)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            message = f"Failed to read alias ledger {self.path}: {exc}"
            raise LedgerError(message) from exc
        if not isinstance(data, dict):
            raise LedgerError(f"Alias ledger {self.path} is not a JSON object")
        return {str(key): str(value) for key, value in data.items()}

    def _write(self, mapping: dict[str, str]) -> None:
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(mapping, indent=2), encoding="utf-8")
            os.replace(temp_path, self.path)
        except OSError as exc:
            message = f"Failed to write alias ledger {self.path}: {exc}"
            raise LedgerError(message) from exc
