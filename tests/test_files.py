"""Tests for avatar naming and data-URL helpers."""

from pathlib import Path

import pytest

from lore.utils.files import (
    avatar_object_name,
    file_extension,
    guess_mime_type,
    strip_data_url_prefix,
    to_data_url,
)


@pytest.mark.parametrize(
    "filename,expected",
    [("photo.png", "png"), ("archive.tar.gz", "gz"), ("README", "README")],
)
def test_file_extension(filename: str, expected: str) -> None:
    assert file_extension(filename) == expected


def test_avatar_object_name_with_token() -> None:
    assert avatar_object_name("user-1", "me.jpeg", token="abc123") == "user-1-abc123.jpeg"


def test_data_url_prefix_is_stripped() -> None:
    data_url = to_data_url(b"hello", "image/png")

    assert data_url == "data:image/png;base64,aGVsbG8="
    assert strip_data_url_prefix(data_url) == "aGVsbG8="


def test_unknown_extension_defaults_to_octet_stream() -> None:
    assert guess_mime_type(Path("blob.unknownext")) == "application/octet-stream"
    assert guess_mime_type(Path("photo.JPG")) == "image/jpeg"
