"""
Profile Repository.

Reads and upserts rows of the ``profiles`` table.  Rows are keyed by the
Supabase auth user id; callers pass the id of the current session only.
"""

from __future__ import annotations

from typing import Optional

from lore.database import DatabaseManager
from lore.logger import StructuredLogger
from lore.models.profile import Profile
from lore.repositories.base_repository import BaseRepository

_PROFILE_COLUMNS: str = "full_name, display_name, bio, avatar_url"


class ProfileRepository(BaseRepository):
    """Data access layer for ``Profile`` rows."""

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        table: str = "profiles",
    ) -> None:
        super().__init__(db, logger)
        self.TABLE = table

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        """Fetch the profile row for *user_id*.

        Returns ``None`` when no row exists yet.  Remote errors propagate.
        """
        def _select() -> Optional[Profile]:
            response = (
                self.supabase.table(self.TABLE)
                .select(_PROFILE_COLUMNS)
                .eq("id", user_id)
                .maybe_single()
                .execute()
            )
            # postgrest returns None instead of a response for zero rows.
            if response is None or not response.data:
                return None
            return Profile(id=user_id, **response.data)

        return self._execute(_select, operation_name=f"get_by_id ({self.TABLE})")

    def upsert(self, profile: Profile) -> None:
        """Insert or update the full row for ``profile.id``."""
        payload = profile.to_upsert_payload()

        def _upsert() -> None:
            self.supabase.table(self.TABLE).upsert(payload).execute()

        self._execute(_upsert, operation_name=f"upsert ({self.TABLE})")
        self._logger.info(
            "Profile upserted: %s", profile.id,
            extra={"event": "PROFILE_UPSERT", "user_id": profile.id},
        )

    def update_avatar_url(self, user_id: str, avatar_url: str, updated_at: str) -> None:
        """Upsert only ``avatar_url`` and ``updated_at`` for *user_id*.

        Other columns of an existing row are left untouched.
        """
        payload = {"id": user_id, "avatar_url": avatar_url, "updated_at": updated_at}

        def _upsert() -> None:
            self.supabase.table(self.TABLE).upsert(payload).execute()

        self._execute(_upsert, operation_name=f"update_avatar_url ({self.TABLE})")
