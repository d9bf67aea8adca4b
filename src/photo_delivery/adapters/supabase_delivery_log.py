"""Supabase repository for delivery log entries."""

from dataclasses import dataclass

from supabase import Client

from photo_delivery.domain.delivery import DeliveryLogEntry
from photo_delivery.domain.errors import RecordError
from photo_delivery.services.outcomes import DeliveryLog


@dataclass
class SupabaseDeliveryLog(DeliveryLog):
    """Supabase-backed delivery log."""

    client: Client
    table_name: str = "delivery_log"

    def append(self, entry: DeliveryLogEntry) -> None:
        """Insert a delivery log row."""
        try:
            self.client.table(self.table_name).insert(
                {
                    "logged_at": entry.timestamp.isoformat(),
                    "model_id": entry.model_id,
                    "recipient_name": entry.recipient.name,
                    "recipient_email": entry.recipient.email,
                    "photographer_name": entry.photographer.name,
                    "photographer_handle": entry.photographer.handle,
                    "status": entry.status.value,
                    "message": entry.message,
                }
            ).execute()
        except Exception as exc:
            raise RecordError(f"Failed to insert delivery log row: {exc}") from exc

    def entries(self) -> list[DeliveryLogEntry]:
        """Return all delivery log rows, oldest first."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .order("logged_at", desc=False)
            .execute()
        )
        return [
            DeliveryLogEntry.model_validate(
                {
                    "timestamp": row["logged_at"],
                    "modelId": row["model_id"],
                    "recipient": {
                        "name": row["recipient_name"],
                        "email": row["recipient_email"],
                    },
                    "photographer": {
                        "name": row["photographer_name"],
                        "handle": row["photographer_handle"],
                    },
                    "status": row["status"],
                    "message": row["message"],
                }
            )
            for row in response.data or []
        ]
