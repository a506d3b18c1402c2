"""
Remote Client Manager.

Owns the single Supabase client used for auth, the ``profiles`` table
and the avatar storage bucket.  Data access is performed through the
Repository pattern; this module only manages the *connection*.

Unlike a cache-backed store there is no offline mode: without a URL
and key the manager refuses to start.

Usage (dependency injection at app startup)::

    from lore.database import DatabaseManager
    from lore.logger import get_logger

    db = DatabaseManager(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        logger=get_logger("database"),
    )
"""

from __future__ import annotations

from typing import Optional

from supabase import Client as SupabaseClient, create_client

from lore.logger import StructuredLogger


class DatabaseManager:
    """Holds the Supabase client shared by every repository and service.

    Parameters
    ----------
    supabase_url:
        The Supabase project URL (e.g. ``https://xyz.supabase.co``).
    supabase_key:
        The Supabase anonymous (public) key.
    logger:
        A ``StructuredLogger`` instance for structured JSON log output.
    client:
        Pre-built client, used by tests to inject a fake.

    Raises
    ------
    ValueError
        If the URL or key is empty, or the SDK rejects their format.
    """

    def __init__(
        self,
        supabase_url: str,
        supabase_key: str,
        logger: StructuredLogger,
        client: Optional[SupabaseClient] = None,
    ) -> None:
        self._logger: StructuredLogger = logger

        if client is not None:
            self._supabase: SupabaseClient = client
            return

        if not supabase_url or not supabase_key:
            raise ValueError("Supabase URL and key are required.")

        try:
            self._supabase = create_client(supabase_url, supabase_key)
        except Exception as exc:
            self._logger.error(
                "Supabase client initialization failed: %s", exc, exc_info=True,
            )
            raise ValueError(f"Invalid Supabase configuration: {exc}") from exc
        self._logger.info("Supabase client initialized.")

    @property
    def supabase(self) -> SupabaseClient:
        """Return the initialised Supabase client."""
        return self._supabase

