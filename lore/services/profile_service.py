"""
Profile Editor Service.

Backs the profile screen for one signed-in user: loading the row,
uploading an avatar, saving the edited fields and signing out.  The
editor is bound to the session it was created with and never reads or
writes another user's row.

Avatar URLs are written to the row as soon as the upload succeeds, so
an upload is not lost if the user leaves without pressing "Update".
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from lore.logger import StructuredLogger
from lore.models.auth_models import AuthResult
from lore.models.profile import AvatarUploadResult, Profile, ProfileSaveResult
from lore.models.session import Session
from lore.repositories.avatar_repository import AvatarRepository
from lore.repositories.profile_repository import ProfileRepository
from lore.services.auth_service import AuthService
from lore.services.base_service import BaseService
from lore.utils.audit import log_audit_event
from lore.utils.files import avatar_object_name, guess_mime_type

PROFILE_SAVED_MESSAGE: str = "Profile updated successfully!"
NO_AVATAR_SELECTED_MESSAGE: str = "You must select an image to upload."


class ProfileEditorService(BaseService):
    """Profile load / save / avatar upload for the session's user.

    Parameters
    ----------
    session:
        The authenticated session; its ``user_id`` keys every row access.
    profile_repo:
        ``profiles`` table access.
    avatar_repo:
        Avatar bucket access.
    auth_service:
        Used for sign-out only.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        session: Session,
        profile_repo: ProfileRepository,
        avatar_repo: AvatarRepository,
        auth_service: AuthService,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._session = session
        self._profile_repo = profile_repo
        self._avatar_repo = avatar_repo
        self._auth_service = auth_service
        self._loading: bool = False
        self._lock: threading.Lock = threading.Lock()

    @property
    def user_id(self) -> str:
        return self._session.user_id

    @property
    def email(self) -> str:
        return self._session.email

    # ------------------------------------------------------------------
    # Loading guard (shared by load, save and upload)
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    def begin_action(self) -> bool:
        """Enter the loading state; ``False`` if an action is in flight."""
        with self._lock:
            if self._loading:
                return False
            self._loading = True
            return True

    def finish_action(self) -> None:
        with self._lock:
            self._loading = False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def empty_profile(self) -> Profile:
        return Profile(id=self.user_id)

    def load(self) -> Profile:
        """Fetch the user's row.

        A remote error is logged and, like a missing row, yields an empty
        profile; nothing is shown to the user.
        """
        try:
            profile = self._profile_repo.get_by_id(self.user_id)
        except Exception as exc:
            self._logger.warning(
                "Profile fetch failed for %s: %s", self.user_id, exc,
                exc_info=True,
            )
            return self.empty_profile()
        if profile is None:
            self._logger.info("No profile row yet for %s.", self.user_id)
            return self.empty_profile()
        return profile

    def build_avatar_path(self, filename: str) -> str:
        return avatar_object_name(self.user_id, filename)

    def upload_avatar(self, file_path: Optional[Path]) -> AvatarUploadResult:
        """Upload *file_path* as the new avatar and persist its public URL.

        ``None`` (nothing selected) is rejected without a remote call.
        The previous blob is left in the bucket.
        """
        if file_path is None:
            return AvatarUploadResult(success=False, message=NO_AVATAR_SELECTED_MESSAGE)

        object_path = self.build_avatar_path(file_path.name)
        try:
            content = file_path.read_bytes()
            self._avatar_repo.upload(object_path, content, guess_mime_type(file_path))
            avatar_url = self._avatar_repo.get_public_url(object_path)
        except Exception as exc:
            self._logger.error(
                "Avatar upload failed for %s: %s", self.user_id, exc,
                exc_info=True,
            )
            return AvatarUploadResult(
                success=False,
                message=getattr(exc, "message", None) or str(exc),
                path=object_path,
            )

        log_audit_event(
            self._logger,
            action="AVATAR_UPLOAD",
            entity_type="Avatar",
            entity_id=object_path,
            user_id=self.user_id,
            details={"avatar_url": avatar_url},
        )

        persisted = True
        try:
            self._profile_repo.update_avatar_url(
                self.user_id, avatar_url, self._now().isoformat(),
            )
        except Exception as exc:
            persisted = False
            self._logger.warning(
                "Avatar URL not persisted for %s; it will be saved with the "
                "next profile update: %s", self.user_id, exc,
            )

        return AvatarUploadResult(
            success=True,
            avatar_url=avatar_url,
            path=object_path,
            persisted=persisted,
        )

    def fetch_avatar(self, avatar_url: str) -> Optional[bytes]:
        """Download the stored avatar for display.

        Returns ``None`` for an empty URL (no remote call) and on any
        download error, which is logged; the view then keeps the
        initial-letter placeholder.
        """
        if not avatar_url:
            return None
        try:
            return self._avatar_repo.download(avatar_url)
        except Exception as exc:
            self._logger.warning(
                "Avatar download failed for %s: %s", self.user_id, exc,
            )
            return None

    def save(
        self,
        full_name: str,
        display_name: str,
        bio: str,
        avatar_url: str,
    ) -> ProfileSaveResult:
        """Upsert the full row: all fields, the user id and a fresh timestamp."""
        profile = Profile(
            id=self.user_id,
            full_name=full_name,
            display_name=display_name,
            bio=bio,
            avatar_url=avatar_url,
            updated_at=self._now(),
        )
        try:
            self._profile_repo.upsert(profile)
        except Exception as exc:
            self._logger.error(
                "Profile upsert failed for %s: %s", self.user_id, exc,
                exc_info=True,
            )
            return ProfileSaveResult(
                success=False,
                message=getattr(exc, "message", None) or str(exc),
            )

        log_audit_event(
            self._logger,
            action="PROFILE_UPSERT",
            entity_type="Profile",
            entity_id=self.user_id,
            user_id=self.user_id,
        )
        return ProfileSaveResult(success=True, message=PROFILE_SAVED_MESSAGE)

    def sign_out(self) -> AuthResult:
        """Remote sign-out; the view changes via the session subscription."""
        return self._auth_service.logout(user_id=self.user_id)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)
