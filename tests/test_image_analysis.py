"""Tests for image validation, encoding and stale-result suppression."""

import base64
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lore.logger import StructuredLogger
from lore.models.analysis import AnalysisOutcome, AnalysisTicket
from lore.services.gemini_service import GeminiService
from lore.services.image_analysis import (
    ANALYSIS_FAILED_MESSAGE,
    INVALID_IMAGE_MESSAGE,
    ImageAnalyzerService,
)


@pytest.fixture
def gemini() -> MagicMock:
    gemini = MagicMock(spec=GeminiService)
    gemini.describe_image.return_value = "Three children on a porch, 1960s."
    return gemini


@pytest.fixture
def analyzer(gemini: MagicMock, logger: StructuredLogger) -> ImageAnalyzerService:
    return ImageAnalyzerService(gemini=gemini, logger=logger)


@pytest.fixture
def photo(tmp_path: Path) -> Path:
    path = tmp_path / "porch.png"
    path.write_bytes(b"\x89PNG porch")
    return path


def test_non_image_rejected_without_remote_call(
    analyzer: ImageAnalyzerService, gemini: MagicMock, tmp_path: Path,
) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("not a photo")

    result = analyzer.begin(notes)

    assert isinstance(result, AnalysisOutcome)
    assert result.error == INVALID_IMAGE_MESSAGE
    assert not result.success
    assert analyzer.generation == 0
    gemini.describe_image.assert_not_called()


def test_explicit_mime_type_overrides_guess(analyzer: ImageAnalyzerService, photo: Path) -> None:
    result = analyzer.begin(photo, mime_type="application/pdf")

    assert isinstance(result, AnalysisOutcome)
    assert result.error == INVALID_IMAGE_MESSAGE


def test_analyze_sends_stripped_base64(
    analyzer: ImageAnalyzerService, gemini: MagicMock, photo: Path,
) -> None:
    ticket = analyzer.begin(photo)
    assert isinstance(ticket, AnalysisTicket)
    assert ticket.mime_type == "image/png"

    outcome = analyzer.analyze(ticket)

    assert outcome.success
    assert outcome.text == "Three children on a porch, 1960s."
    gemini.describe_image.assert_called_once_with(
        base64.b64encode(b"\x89PNG porch").decode("ascii"), "image/png",
    )


def test_remote_failure_maps_to_generic_message(
    analyzer: ImageAnalyzerService, gemini: MagicMock, photo: Path, log_stream,
) -> None:
    gemini.describe_image.side_effect = RuntimeError("500 INTERNAL")
    ticket = analyzer.begin(photo)

    outcome = analyzer.analyze(ticket)

    assert outcome.error == ANALYSIS_FAILED_MESSAGE
    assert "500 INTERNAL" not in outcome.error
    assert "500 INTERNAL" in log_stream.getvalue()


def test_unreadable_file_maps_to_generic_message(
    analyzer: ImageAnalyzerService, gemini: MagicMock, tmp_path: Path,
) -> None:
    ticket = analyzer.begin(tmp_path / "deleted.jpg")

    outcome = analyzer.analyze(ticket)

    assert outcome.error == ANALYSIS_FAILED_MESSAGE
    gemini.describe_image.assert_not_called()


def test_stale_result_is_discarded(
    analyzer: ImageAnalyzerService, photo: Path, tmp_path: Path,
) -> None:
    second_photo = tmp_path / "wedding.jpg"
    second_photo.write_bytes(b"jpeg")

    first = analyzer.begin(photo)
    second = analyzer.begin(second_photo)
    assert (first.generation, second.generation) == (1, 2)

    late = analyzer.analyze(first)
    fresh = analyzer.analyze(second)

    assert not analyzer.is_current(late)
    assert analyzer.accept(late) is None
    assert analyzer.accept(fresh) is fresh


def test_rejection_does_not_supersede_pending_request(
    analyzer: ImageAnalyzerService, photo: Path, tmp_path: Path,
) -> None:
    ticket = analyzer.begin(photo)
    rejected = analyzer.begin(tmp_path / "doc.txt")

    assert analyzer.accept(rejected) is rejected
    assert analyzer.accept(analyzer.analyze(ticket)) is not None
