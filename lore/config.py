"""
Application Configuration.

Pydantic Settings model for the Lore application.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.

The auth-service URL, its public key and the generative-API key are
mandatory: constructing ``AppConfig`` without them aborts with a
descriptive error instead of starting a half-working application.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import ClassVar, Optional

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Supabase (auth + profiles table + avatar bucket) ---
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: SecretStr = SecretStr("")
    PROFILES_TABLE: str = "profiles"
    AVATAR_BUCKET: str = "avatars"

    # --- Gemini ---
    GEMINI_API_KEY: SecretStr = SecretStr("")
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "lore.log"
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
        "GEMINI_API_KEY",
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _require_remote_credentials(self) -> "AppConfig":
        """Abort construction when any remote-service credential is empty."""
        missing: list[str] = []
        for name in self.REQUIRED_FIELDS:
            value = getattr(self, name)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not str(value).strip():
                missing.append(name)

        if missing:
            if not Path(".env").exists():
                logging.getLogger("lore.config").warning(
                    "No .env file found — configuration loaded from "
                    "environment variables only."
                )
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        return self

    @property
    def log_level(self) -> int:
        """Numeric ``logging`` level for ``LOG_LEVEL`` (INFO when unknown)."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    On first call, creates an ``AppConfig`` instance (reading from ``.env``).
    Subsequent calls return the same instance.  A failed construction is
    not cached, so the next call raises the same validation error again.

    Prefer direct constructor injection of ``AppConfig`` in new code.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance
