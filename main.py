"""
Lore Desktop Application Entry Point.

Bootstraps the entire dependency graph via constructor injection and
launches the CustomTkinter GUI.  Every subsystem is wired here — no
module-level globals.

Usage::

    python main.py
"""

from __future__ import annotations

import sys
import traceback

from lore.auth import SessionContext
from lore.config import get_config
from lore.database import DatabaseManager
from lore.logger import configure_logging, get_logger
from lore.services import create_services
from lore.ui.app_shell import AppShell


def main() -> None:
    """Application entry point — wire dependencies and launch the GUI."""
    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables); fails fast
    # ------------------------------------------------------------------
    config = get_config()
    configure_logging(
        level=config.log_level,
        log_file=config.LOG_FILE,
        max_bytes=config.LOG_MAX_BYTES,
        backup_count=config.LOG_BACKUP_COUNT,
    )
    logger = get_logger("main")
    logger.info("Starting Lore...")

    # ------------------------------------------------------------------
    # 2. Database Manager (Supabase auth, rows and storage)
    # ------------------------------------------------------------------
    db = DatabaseManager(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        logger=get_logger("database"),
    )

    # ------------------------------------------------------------------
    # 3. Session context (single writer: the session controller)
    # ------------------------------------------------------------------
    context = SessionContext()

    # ------------------------------------------------------------------
    # 4. Service Container (repositories + services, single composition root)
    # ------------------------------------------------------------------
    services = create_services(db=db, config=config)

    # ------------------------------------------------------------------
    # 5. Launch the GUI (blocks until window closes)
    # ------------------------------------------------------------------
    logger.info("Launching GUI...")
    app = AppShell(
        context=context,
        services=services,
        logger=get_logger("ui"),
    )
    app.mainloop()
    logger.info("Lore shut down.")


def _show_fatal_error(exc: BaseException) -> None:
    """Display a fatal-error dialog so double-click users get feedback.

    Uses ``tkinter.messagebox`` (stdlib) rather than CustomTkinter so
    the dialog works even when CTk initialisation itself is the thing
    that failed.
    """
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        import tkinter
        from tkinter import messagebox

        root = tkinter.Tk()
        root.withdraw()
        messagebox.showerror(
            title="Lore — Fatal Error",
            message=(
                "Lore could not start.\n\n"
                f"{type(exc).__name__}: {exc}"
            ),
            detail=detail,
        )
        root.destroy()
    except Exception:
        # No display (headless, missing Tcl/Tk): stderr is all we have.
        sys.stderr.write(
            f"FATAL: {type(exc).__name__}: {exc}\n{detail}"
        )


def run() -> None:
    """Console-script entry point: ``main()`` plus the fatal-error dialog."""
    try:
        main()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        _show_fatal_error(exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
