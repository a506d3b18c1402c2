"""
Image Analyzer Service.

Validates a selected photo, encodes it and asks Gemini for a
description.  Each accepted selection gets a new generation number;
``is_current`` lets the panel drop the result of any request that a
newer selection has superseded, so late replies never overwrite the
display out of order.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional, Union

from lore.logger import StructuredLogger
from lore.models.analysis import AnalysisOutcome, AnalysisTicket
from lore.services.base_service import BaseService
from lore.services.gemini_service import GeminiService
from lore.utils.files import guess_mime_type, strip_data_url_prefix, to_data_url

INVALID_IMAGE_MESSAGE: str = "Please upload a valid image file (PNG, JPG, etc.)."
ANALYSIS_FAILED_MESSAGE: str = "Failed to analyze the image. Please try again."


class ImageAnalyzerService(BaseService):
    """One-shot photo descriptions with stale-result suppression.

    Parameters
    ----------
    gemini:
        Performs the description request.
    logger:
        Structured logger instance.
    """

    def __init__(self, gemini: GeminiService, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._gemini = gemini
        self._generation: int = 0
        self._lock: threading.Lock = threading.Lock()

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def begin(
        self,
        file_path: Path,
        mime_type: Optional[str] = None,
    ) -> Union[AnalysisTicket, AnalysisOutcome]:
        """Validate a selection and issue a ticket for it.

        Non-image files are rejected with an ``AnalysisOutcome`` carrying
        ``INVALID_IMAGE_MESSAGE``; no request is made and the current
        generation is left untouched.
        """
        resolved_mime = mime_type or guess_mime_type(file_path)
        if not resolved_mime.startswith("image/"):
            self._logger.info("Rejected non-image selection: %s", resolved_mime)
            return AnalysisOutcome(error=INVALID_IMAGE_MESSAGE)

        with self._lock:
            self._generation += 1
            generation = self._generation
        return AnalysisTicket(
            generation=generation,
            file_path=file_path,
            mime_type=resolved_mime,
        )

    def analyze(self, ticket: AnalysisTicket) -> AnalysisOutcome:
        """Read, encode and describe the ticket's image.  Never raises.

        Every failure (file read, encoding, remote) is logged and mapped
        to ``ANALYSIS_FAILED_MESSAGE``.
        """
        try:
            data_url = to_data_url(ticket.file_path.read_bytes(), ticket.mime_type)
            text = self._gemini.describe_image(
                strip_data_url_prefix(data_url), ticket.mime_type,
            )
        except Exception as exc:
            self._logger.warning(
                "Error analyzing image (generation %d): %s", ticket.generation, exc,
                exc_info=True,
            )
            return AnalysisOutcome(generation=ticket.generation, error=ANALYSIS_FAILED_MESSAGE)
        return AnalysisOutcome(generation=ticket.generation, text=text)

    def is_current(self, outcome: AnalysisOutcome) -> bool:
        """``True`` if *outcome* belongs to the newest selection."""
        return outcome.generation == self.generation

    def accept(self, outcome: AnalysisOutcome) -> Optional[AnalysisOutcome]:
        """Return *outcome* if it may be displayed, ``None`` if superseded."""
        if outcome.generation is not None and not self.is_current(outcome):
            self._logger.info(
                "Discarding stale analysis (generation %d).", outcome.generation,
            )
            return None
        return outcome
