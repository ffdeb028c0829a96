"""Supabase repository for persisted tracker state."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutritrack.services.state import StateRepository


@dataclass
class SupabaseStateRepository(StateRepository):
    """Stores key-value slots in the ``app_state`` table."""

    client: Client
    table: str = "app_state"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite a slot."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
