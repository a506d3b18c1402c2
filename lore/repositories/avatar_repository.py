"""
Avatar Repository.

Uploads avatar images to a Supabase storage bucket, issues their public
URLs, and downloads a stored avatar back for display.  Replaced blobs
are never deleted.
"""

from __future__ import annotations

from typing import Optional

import httpx

from lore.database import DatabaseManager
from lore.logger import StructuredLogger
from lore.repositories.base_repository import BaseRepository

AVATAR_DOWNLOAD_TIMEOUT: float = 15.0


class AvatarRepository(BaseRepository):
    """Data access layer for the avatar storage bucket.

    Parameters
    ----------
    db:
        Holder of the Supabase client.
    logger:
        Structured logger instance.
    bucket:
        Storage bucket name.
    http_client:
        Client used to fetch public avatar URLs.  When omitted each
        download uses a one-off ``httpx`` request.
    """

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        bucket: str = "avatars",
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(db, logger)
        self.BUCKET = bucket
        self._http = http_client

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Store *content* under *path*.  Remote errors propagate."""
        def _upload() -> None:
            self.supabase.storage.from_(self.BUCKET).upload(
                path, content, {"content-type": content_type},
            )

        self._execute(_upload, operation_name=f"upload ({self.BUCKET})")
        self._logger.info(
            "Avatar uploaded: %s/%s (%d bytes)", self.BUCKET, path, len(content),
        )

    def get_public_url(self, path: str) -> str:
        """Return the public URL for *path*.  Does not check existence."""
        return self._execute(
            lambda: str(self.supabase.storage.from_(self.BUCKET).get_public_url(path)),
            operation_name=f"get_public_url ({self.BUCKET})",
        )

    def download(self, url: str) -> bytes:
        """Fetch the image at a public avatar *url*.

        Raises ``httpx.HTTPError`` on transport failures and non-2xx
        responses.
        """
        def _get() -> bytes:
            if self._http is not None:
                response = self._http.get(url, follow_redirects=True)
            else:
                response = httpx.get(
                    url, timeout=AVATAR_DOWNLOAD_TIMEOUT, follow_redirects=True,
                )
            response.raise_for_status()
            return response.content

        return self._execute(_get, operation_name=f"download ({self.BUCKET})")
