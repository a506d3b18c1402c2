"""
Base Repository.

Provides shared infrastructure for all repositories:
- DatabaseManager reference (Supabase client)
- Logger reference
- A wrapper that logs remote failures with the operation name before
  re-raising them to the calling service
"""

from __future__ import annotations

from typing import Callable, TypeVar

from supabase import Client as SupabaseClient

from lore.database import DatabaseManager
from lore.logger import StructuredLogger

T = TypeVar("T")


class BaseRepository:
    """Base class for all repositories. Receives dependencies via __init__."""

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        self._db = db
        self._logger = logger

    @property
    def supabase(self) -> SupabaseClient:
        """Returns the Supabase client for cloud operations."""
        return self._db.supabase

    def _execute(self, op: Callable[[], T], *, operation_name: str) -> T:
        """Run *op*, logging and re-raising any remote failure.

        Repositories never swallow errors; whether a failure is shown to
        the user or only logged is the calling service's decision.
        """
        try:
            return op()
        except Exception as exc:
            self._logger.debug(
                "Supabase call failed for %s: %s", operation_name, exc,
            )
            raise
