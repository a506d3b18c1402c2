"""Shared utility functions and models for the Lore application.

Convenience re-exports so that consumers can import directly from
``lore.utils`` (e.g. ``from lore.utils import log_audit_event``).
"""

from lore.utils.audit import AuditEvent, log_audit_event
from lore.utils.files import (
    avatar_object_name,
    file_extension,
    guess_mime_type,
    strip_data_url_prefix,
    to_data_url,
)

__all__ = [
    "AuditEvent",
    "avatar_object_name",
    "file_extension",
    "guess_mime_type",
    "log_audit_event",
    "strip_data_url_prefix",
    "to_data_url",
]
