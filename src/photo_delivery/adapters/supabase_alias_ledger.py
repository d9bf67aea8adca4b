"""Supabase-backed alias ledger."""

from dataclasses import dataclass

from supabase import Client

from photo_delivery.domain.errors import LedgerError
from photo_delivery.services.aliases import AliasLedger


@dataclass
class SupabaseAliasLedger(AliasLedger):
    """Alias ledger stored in a two-column table keyed by model id."""

    client: Client
    table_name: str = "redirects"

    def get(self, alias: str) -> str | None:
        """Return the folder id for an alias, if present."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("model_id, folder_id")
                .eq("model_id", alias)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise LedgerError(f"Failed to read alias {alias}: {exc}") from exc
        if response.data:
            return str(response.data[0]["folder_id"])
        return None

    def set(self, alias: str, folder_id: str) -> None:
        """Upsert the folder id for an alias."""
        try:
            self.client.table(self.table_name).upsert(
                {"model_id": alias, "folder_id": folder_id},
                on_conflict="model_id",
            ).execute()
        except Exception as exc:
            raise LedgerError(f"Failed to register alias {alias}: {exc}") from exc
