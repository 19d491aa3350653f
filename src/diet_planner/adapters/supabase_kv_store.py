"""Supabase-backed key-value store."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from diet_planner.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores string values in a ``key``/``value`` table.

    The Supabase client is synchronous, so calls run in a worker thread.
    """

    client: Client
    table: str = "kv_store"

    async def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return await asyncio.to_thread(self._get_item, key)

    async def set_item(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        await asyncio.to_thread(self._set_item, key, value)

    async def remove_item(self, key: str) -> None:
        """Delete a key."""
        await asyncio.to_thread(self._remove_item, key)

    def _get_item(self, key: str) -> str | None:
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def _set_item(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

    def _remove_item(self, key: str) -> None:
        self.client.table(self.table).delete().eq("key", key).execute()
