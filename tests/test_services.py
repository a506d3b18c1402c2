"""Tests for the service container and per-mount factories."""

from unittest.mock import MagicMock

from lore.config import AppConfig
from lore.database import DatabaseManager
from lore.models.session import Session
from lore.services import create_services
from lore.services.gemini_service import GeminiService


def _config() -> AppConfig:
    return AppConfig(
        _env_file=None,
        PROFILES_TABLE="member_profiles",
        AVATAR_BUCKET="member-avatars",
    )


def test_factories_return_fresh_instances(db: DatabaseManager, session: Session) -> None:
    gemini = MagicMock(spec=GeminiService)
    services = create_services(db=db, config=_config(), gemini_service=gemini)

    assert services["gemini_service"] is gemini
    assert services["chat_factory"]() is not services["chat_factory"]()
    assert services["image_analyzer_factory"]() is not services["image_analyzer_factory"]()
    assert services["auth_form_factory"]() is not services["auth_form_factory"]()

    editor = services["profile_editor_factory"](session)
    assert editor.user_id == session.user_id


def test_repositories_use_configured_names(
    db: DatabaseManager, supabase_client: MagicMock,
) -> None:
    services = create_services(
        db=db, config=_config(), gemini_service=MagicMock(spec=GeminiService),
    )

    services["avatar_repo"].get_public_url("a.png")
    supabase_client.storage.from_.assert_called_with("member-avatars")
    assert services["profile_repo"].TABLE == "member_profiles"
