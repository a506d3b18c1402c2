"""Tests for the profile editor: load, save, avatar upload and sign-out."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest

from lore.database import DatabaseManager
from lore.logger import StructuredLogger
from lore.models.auth_models import AuthResult
from lore.models.session import Session
from lore.repositories.avatar_repository import AvatarRepository
from lore.repositories.profile_repository import ProfileRepository
from lore.services.auth_service import AuthService
from lore.services.profile_service import (
    NO_AVATAR_SELECTED_MESSAGE,
    PROFILE_SAVED_MESSAGE,
    ProfileEditorService,
)
from tests.fakes import USER_ID, FakeRemoteError

PUBLIC_URL = "https://test-project.supabase.co/storage/v1/object/public/avatars/x.png"


@pytest.fixture
def auth_service() -> MagicMock:
    return MagicMock(spec=AuthService)


@pytest.fixture
def http_client() -> MagicMock:
    return MagicMock(spec=httpx.Client)


@pytest.fixture
def editor(
    session: Session,
    db: DatabaseManager,
    logger: StructuredLogger,
    auth_service: MagicMock,
    http_client: MagicMock,
) -> ProfileEditorService:
    return ProfileEditorService(
        session=session,
        profile_repo=ProfileRepository(db=db, logger=logger),
        avatar_repo=AvatarRepository(db=db, logger=logger, http_client=http_client),
        auth_service=auth_service,
        logger=logger,
    )


@pytest.fixture
def table(supabase_client: MagicMock) -> MagicMock:
    return supabase_client.table.return_value


@pytest.fixture
def bucket(supabase_client: MagicMock) -> MagicMock:
    bucket = supabase_client.storage.from_.return_value
    bucket.get_public_url.return_value = PUBLIC_URL
    return bucket


def _select_chain(table: MagicMock) -> MagicMock:
    return table.select.return_value.eq.return_value.maybe_single.return_value.execute


# ============================================================================
# Load
# ============================================================================

def test_load_existing_row(
    editor: ProfileEditorService, table: MagicMock, supabase_client: MagicMock,
) -> None:
    _select_chain(table).return_value = SimpleNamespace(data={
        "full_name": "Ada Lovelace",
        "display_name": "ada",
        "bio": None,
        "avatar_url": PUBLIC_URL,
    })

    profile = editor.load()

    supabase_client.table.assert_called_with("profiles")
    table.select.assert_called_once_with("full_name, display_name, bio, avatar_url")
    table.select.return_value.eq.assert_called_once_with("id", USER_ID)
    assert profile.id == USER_ID
    assert profile.full_name == "Ada Lovelace"
    assert profile.bio == ""
    assert profile.avatar_url == PUBLIC_URL


@pytest.mark.parametrize("response", [None, SimpleNamespace(data=None)])
def test_load_missing_row_gives_empty_profile(
    editor: ProfileEditorService, table: MagicMock, response: object,
) -> None:
    _select_chain(table).return_value = response

    profile = editor.load()

    assert profile.id == USER_ID
    assert (profile.full_name, profile.display_name, profile.bio, profile.avatar_url) == (
        "", "", "", "",
    )


def test_load_error_is_logged_and_gives_empty_profile(
    editor: ProfileEditorService, table: MagicMock, log_stream,
) -> None:
    _select_chain(table).side_effect = FakeRemoteError("permission denied")

    profile = editor.load()

    assert profile.full_name == ""
    assert "permission denied" in log_stream.getvalue()


# ============================================================================
# Save
# ============================================================================

def test_save_sends_exactly_one_full_upsert(
    editor: ProfileEditorService, table: MagicMock,
) -> None:
    before = datetime.now(timezone.utc)

    result = editor.save("A", "B", "C", PUBLIC_URL)

    assert result.success
    assert result.message == PROFILE_SAVED_MESSAGE
    table.upsert.assert_called_once()
    payload = table.upsert.call_args.args[0]
    assert payload["id"] == USER_ID
    assert payload["full_name"] == "A"
    assert payload["display_name"] == "B"
    assert payload["bio"] == "C"
    assert payload["avatar_url"] == PUBLIC_URL
    updated_at = datetime.fromisoformat(payload["updated_at"].replace("Z", "+00:00"))
    assert before - timedelta(seconds=1) <= updated_at <= datetime.now(timezone.utc)


def test_save_failure_reports_remote_message(
    editor: ProfileEditorService, table: MagicMock,
) -> None:
    table.upsert.return_value.execute.side_effect = FakeRemoteError(
        'new row violates row-level security policy for table "profiles"',
    )

    result = editor.save("A", "B", "C", "")

    assert not result.success
    assert "row-level security" in result.message


# ============================================================================
# Avatar upload
# ============================================================================

def test_upload_without_file_is_rejected_without_remote_call(
    editor: ProfileEditorService, bucket: MagicMock,
) -> None:
    result = editor.upload_avatar(None)

    assert not result.success
    assert result.message == NO_AVATAR_SELECTED_MESSAGE
    bucket.upload.assert_not_called()


def test_upload_stores_blob_and_persists_url(
    editor: ProfileEditorService, bucket: MagicMock, table: MagicMock,
    supabase_client: MagicMock, tmp_path: Path,
) -> None:
    image = tmp_path / "portrait.final.PNG"
    image.write_bytes(b"\x89PNG fake")

    result = editor.upload_avatar(image)

    assert result.success
    assert result.avatar_url == PUBLIC_URL
    assert result.persisted
    supabase_client.storage.from_.assert_called_with("avatars")

    path, content, options = bucket.upload.call_args.args
    assert path.startswith(f"{USER_ID}-")
    assert path.endswith(".PNG")
    assert content == b"\x89PNG fake"
    assert options == {"content-type": "image/png"}
    bucket.get_public_url.assert_called_once_with(path)

    payload = table.upsert.call_args.args[0]
    assert payload["id"] == USER_ID
    assert payload["avatar_url"] == PUBLIC_URL
    assert "updated_at" in payload
    assert "full_name" not in payload


def test_upload_error_reports_message(
    editor: ProfileEditorService, bucket: MagicMock, table: MagicMock, tmp_path: Path,
) -> None:
    bucket.upload.side_effect = FakeRemoteError("The resource already exists")
    image = tmp_path / "me.jpg"
    image.write_bytes(b"jpeg")

    result = editor.upload_avatar(image)

    assert not result.success
    assert result.message == "The resource already exists"
    assert result.avatar_url is None
    table.upsert.assert_not_called()


def test_upload_succeeds_even_if_url_not_persisted(
    editor: ProfileEditorService, bucket: MagicMock, table: MagicMock, tmp_path: Path,
) -> None:
    table.upsert.return_value.execute.side_effect = FakeRemoteError("timeout")
    image = tmp_path / "me.jpg"
    image.write_bytes(b"jpeg")

    result = editor.upload_avatar(image)

    assert result.success
    assert result.avatar_url == PUBLIC_URL
    assert not result.persisted


def test_avatar_paths_are_distinct_per_upload(editor: ProfileEditorService) -> None:
    first = editor.build_avatar_path("photo.png")
    second = editor.build_avatar_path("photo.png")

    assert first != second
    assert first.startswith(f"{USER_ID}-") and first.endswith(".png")


# ============================================================================
# Avatar display
# ============================================================================

def test_stored_avatar_is_downloaded_for_display(
    editor: ProfileEditorService, table: MagicMock, http_client: MagicMock,
) -> None:
    _select_chain(table).return_value = SimpleNamespace(data={"avatar_url": PUBLIC_URL})
    http_client.get.return_value = httpx.Response(
        200, content=b"\x89PNG-bytes", request=httpx.Request("GET", PUBLIC_URL),
    )

    profile = editor.load()
    image = editor.fetch_avatar(profile.avatar_url)

    http_client.get.assert_called_once_with(PUBLIC_URL, follow_redirects=True)
    assert image == b"\x89PNG-bytes"


def test_no_avatar_url_means_no_download(
    editor: ProfileEditorService, http_client: MagicMock,
) -> None:
    assert editor.fetch_avatar("") is None
    http_client.get.assert_not_called()


def test_avatar_download_error_falls_back_to_placeholder(
    editor: ProfileEditorService, http_client: MagicMock,
) -> None:
    http_client.get.return_value = httpx.Response(
        404, request=httpx.Request("GET", PUBLIC_URL),
    )

    assert editor.fetch_avatar(PUBLIC_URL) is None


def test_avatar_transport_error_falls_back_to_placeholder(
    editor: ProfileEditorService, http_client: MagicMock,
) -> None:
    http_client.get.side_effect = httpx.ConnectError("offline")

    assert editor.fetch_avatar(PUBLIC_URL) is None


# ============================================================================
# Loading guard / sign-out
# ============================================================================

def test_loading_guard(editor: ProfileEditorService) -> None:
    assert editor.begin_action()
    assert not editor.begin_action()
    editor.finish_action()
    assert editor.begin_action()


def test_sign_out_delegates_to_auth_service(
    editor: ProfileEditorService, auth_service: MagicMock,
) -> None:
    auth_service.logout.return_value = AuthResult(success=True, user_id=USER_ID)

    result = editor.sign_out()

    assert result.success
    auth_service.logout.assert_called_once_with(user_id=USER_ID)
