"""Application Host Shell.

The top-level ``CTk`` window.  It owns the ``SessionController`` for
the lifetime of the window and renders exactly one of three screens,
chosen by ``SessionContext.view``:

- ``MARKETING``: landing page with the photo analyzer and chat widget
- ``AUTH``: login / sign-up form
- ``PROFILE``: the member's profile editor

All dependencies are injected via the constructor.  The shell contains
no business logic — screen choice is ``resolve_view``'s, and each
screen gets fresh per-mount services from the container's factories.
"""

from __future__ import annotations

from typing import Optional

import customtkinter as ctk

from lore import __version__ as _APP_VERSION
from lore.auth import SessionContext
from lore.logger import StructuredLogger
from lore.models.enums import ViewName
from lore.services import ServiceContainer
from lore.services.session_controller import SessionController
from lore.ui.auth_view import AuthView
from lore.ui.dispatch import root_dispatcher
from lore.ui.marketing_view import MarketingView
from lore.ui.profile_view import ProfileView
from lore.ui.theme import (
    MAIN_WINDOW_HEIGHT,
    MAIN_WINDOW_WIDTH,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    PAGE_BG,
)


class AppShell(ctk.CTk):
    """Host Shell — the main application window.

    Lifecycle
    ---------
    1. On construction: starts the ``SessionController``, which restores
       any existing session and subscribes to auth changes.
    2. Renders the screen for the current view.
    3. Whenever the resolved view changes, destroys the current screen
       and builds the next one.
    4. On window close: stops the controller (unsubscribes) and exits.

    Parameters
    ----------
    context:
        Session context shared with the controller.
    services:
        Fully-wired service container.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        context: SessionContext,
        services: ServiceContainer,
        logger: StructuredLogger,
    ) -> None:
        super().__init__()

        self._context = context
        self._services = services
        self._logger = logger
        self._current_frame: Optional[ctk.CTkFrame] = None
        self._current_view: Optional[ViewName] = None

        # Window defaults
        self.title(f"Lore {_APP_VERSION}")
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("green")
        self.configure(fg_color=PAGE_BG)
        self.geometry(f"{MAIN_WINDOW_WIDTH}x{MAIN_WINDOW_HEIGHT}")
        self.minsize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        # Graceful shutdown on window close
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        # Auth notifications may arrive on SDK threads; apply them on ours.
        self._controller = SessionController(
            auth_service=services["auth_service"],
            context=context,
            logger=logger,
            dispatch=root_dispatcher(self, logger),
        )
        self._context.add_listener(self._on_view_changed)
        self._controller.start()
        self._show(self._context.view)

    # ==================================================================
    # View transitions
    # ==================================================================

    def _on_view_changed(self, view: ViewName) -> None:
        self._show(view)

    def _show(self, view: ViewName) -> None:
        """Replace the current screen with the one for *view*."""
        if view == self._current_view:
            return
        if self._current_frame is not None:
            self._current_frame.destroy()
            self._current_frame = None

        self._current_frame = self._build(view)
        self._current_frame.pack(fill="both", expand=True)
        self._current_view = view
        self._logger.info("Switched to view: %s", view)

    def _build(self, view: ViewName) -> ctk.CTkFrame:
        if view == ViewName.PROFILE:
            return ProfileView(
                parent=self,
                editor=self._services["profile_editor_factory"](
                    self._context.require_session(),
                ),
                logger=self._logger,
            )
        if view == ViewName.AUTH:
            return AuthView(
                parent=self,
                form=self._services["auth_form_factory"](),
                logger=self._logger,
            )
        return MarketingView(
            parent=self,
            on_show_auth=self._controller.request_auth,
            conversation=self._services["chat_factory"](),
            analyzer=self._services["image_analyzer_factory"](),
            logger=self._logger,
        )

    # ==================================================================
    # Window close
    # ==================================================================

    def _on_close(self) -> None:
        """Unsubscribe from auth changes before destroying the window."""
        self._context.remove_listener(self._on_view_changed)
        self._controller.stop()
        self.destroy()
