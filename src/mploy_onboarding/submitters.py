"""
Profile Submitters.

The onboarding engine hands a finished AssembledProfile to a
ProfileSubmitter and never retries on its own. SupabaseProfileSubmitter
writes the document onto the user's row in the profiles table.
"""

import logging
from typing import TYPE_CHECKING, Protocol

from supabase import Client, create_client

from .config import settings

if TYPE_CHECKING:
    from .records import AssembledProfile

logger = logging.getLogger(__name__)

# Singleton client instance
_client: Client | None = None


class ProfileSubmitter(Protocol):
    """Persists an assembled profile and returns its profile id."""

    async def submit(self, record: "AssembledProfile") -> str:
        ...


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _client


class SupabaseProfileSubmitter:
    """Writes the assembled document onto users/{user_id}."""

    def __init__(self, user_id: str, client: Client | None = None, table: str | None = None):
        if not user_id:
            raise ValueError("User ID is required")
        self.user_id = user_id
        self._client = client
        self.table = table or settings.profiles_table

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    async def submit(self, record: "AssembledProfile") -> str:
        doc = record.to_document()
        response = (
            self.client.table(self.table)
            .update(doc)
            .eq("id", self.user_id)
            .execute()
        )
        if not response.data:
            raise LookupError(f"No {self.table} row for user {self.user_id}")

        logger.info(f"Saved {record.kind.value} profile for user {self.user_id} ({record.status})")
        return str(response.data[0].get("id", self.user_id))
