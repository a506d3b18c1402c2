"""
Business Logic Services Package.

Services depend on the Repository layer for data access and on the
Gemini client for generative features.  None of them import the UI.

The ``create_services()`` factory wires every repository and service
together, returning a typed dict that the views consume without
knowing the internal dependency graph.  State that belongs to a single
mounted view (the profile editor, a chat widget, the image analyzer)
is handed out through factories so each mount starts fresh.
"""

from __future__ import annotations

from typing import Callable, Optional, TypedDict

from lore.config import AppConfig
from lore.database import DatabaseManager
from lore.logger import get_logger
from lore.models.session import Session
from lore.repositories.avatar_repository import AvatarRepository
from lore.repositories.profile_repository import ProfileRepository
from lore.services.auth_form import AuthFormService
from lore.services.auth_service import AuthService
from lore.services.chat_service import ChatConversation
from lore.services.gemini_service import GeminiService
from lore.services.image_analysis import ImageAnalyzerService
from lore.services.profile_service import ProfileEditorService


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    # --- Shared ---
    auth_service: AuthService
    gemini_service: GeminiService
    profile_repo: ProfileRepository
    avatar_repo: AvatarRepository

    # --- Per-mount factories ---
    auth_form_factory: Callable[[], AuthFormService]
    profile_editor_factory: Callable[[Session], ProfileEditorService]
    chat_factory: Callable[[], ChatConversation]
    image_analyzer_factory: Callable[[], ImageAnalyzerService]


def create_services(
    db: DatabaseManager,
    config: AppConfig,
    gemini_service: Optional[GeminiService] = None,
) -> ServiceContainer:
    """
    Wire all repositories and services together.

    This is the single composition root for the service layer.  The
    application entry-point calls this once at startup and passes the
    returned dict to the views.

    Args:
        db: Initialised DatabaseManager with the Supabase client ready.
        config: Application configuration.
        gemini_service: Pre-built Gemini wrapper (tests); built from
            ``config`` when omitted.

    Returns:
        ServiceContainer mapping service names to instances or factories.
    """
    logger = get_logger("services")

    # ------------------------------------------------------------------
    # 1. Repositories (data-access layer)
    # ------------------------------------------------------------------
    profile_repo = ProfileRepository(db=db, logger=logger, table=config.PROFILES_TABLE)
    avatar_repo = AvatarRepository(db=db, logger=logger, bucket=config.AVATAR_BUCKET)

    # ------------------------------------------------------------------
    # 2. Shared services
    # ------------------------------------------------------------------
    auth_service = AuthService(db=db, logger=logger)
    gemini = gemini_service
    if gemini is None:
        gemini = GeminiService(
            api_key=config.GEMINI_API_KEY.get_secret_value(),
            model=config.GEMINI_MODEL,
            logger=logger,
        )

    # ------------------------------------------------------------------
    # 3. Per-mount factories
    # ------------------------------------------------------------------
    def auth_form_factory() -> AuthFormService:
        return AuthFormService(auth_service=auth_service, logger=logger)

    def profile_editor_factory(session: Session) -> ProfileEditorService:
        return ProfileEditorService(
            session=session,
            profile_repo=profile_repo,
            avatar_repo=avatar_repo,
            auth_service=auth_service,
            logger=logger,
        )

    def chat_factory() -> ChatConversation:
        return ChatConversation(gemini=gemini, logger=logger)

    def image_analyzer_factory() -> ImageAnalyzerService:
        return ImageAnalyzerService(gemini=gemini, logger=logger)

    return ServiceContainer(
        auth_service=auth_service,
        gemini_service=gemini,
        profile_repo=profile_repo,
        avatar_repo=avatar_repo,
        auth_form_factory=auth_form_factory,
        profile_editor_factory=profile_editor_factory,
        chat_factory=chat_factory,
        image_analyzer_factory=image_analyzer_factory,
    )
