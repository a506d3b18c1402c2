"""
Image Analysis Models.

An ``AnalysisTicket`` is issued for every accepted image selection and
carries a monotonically increasing ``generation``.  Only the outcome
of the newest ticket may be displayed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class AnalysisTicket(BaseModel):
    generation: int
    file_path: Path
    mime_type: str

    model_config = {"frozen": True}


class AnalysisOutcome(BaseModel):
    """Result of one analysis request (or of a rejected selection).

    Exactly one of ``text`` and ``error`` is set.  ``generation`` is
    ``None`` for selections rejected before any request was issued.
    """

    generation: Optional[int] = None
    text: Optional[str] = None
    error: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def success(self) -> bool:
        return self.error is None
