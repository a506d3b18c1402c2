"""Profile View — Member Area.

Edits the signed-in user's ``profiles`` row: email (read-only), full
name, display name, bio and avatar.  Save and upload results are shown
in blocking dialogs; a failed initial load silently leaves the fields
empty.  The stored avatar is downloaded in the background and replaces
the initial-letter placeholder once it arrives.

**Thin UI Rule**: This module contains ZERO business logic.  It
gathers inputs, delegates to ``ProfileEditorService``, and displays
results.  Sign-out only calls the service; the switch back to the
marketing page arrives through the session subscription.
"""

from __future__ import annotations

import threading
from io import BytesIO
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import BinaryIO, Callable, Optional, TypeVar, Union

import customtkinter as ctk
from PIL import Image, UnidentifiedImageError

from lore.logger import StructuredLogger
from lore.models.profile import AvatarUploadResult, Profile, ProfileSaveResult
from lore.services.profile_service import ProfileEditorService
from lore.ui.dispatch import root_dispatcher
from lore.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    AVATAR_SIZE,
    CARD_BG,
    CARD_BORDER,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_LABEL,
    FONT_SMALL,
    INPUT_BG,
    INPUT_BORDER,
    INPUT_DISABLED_BG,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    PAGE_BG,
    SIGN_OUT_HOVER,
    SIGN_OUT_PRIMARY,
    TEXT_ON_ACCENT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)
from lore.utils.background import TaskOutcome, run_in_background

T = TypeVar("T")

_FORM_WIDTH: int = 520
_INPUT_HEIGHT: int = 40
_AVATAR_FILE_TYPES: list[tuple[str, str]] = [
    ("Images", "*.png *.jpg *.jpeg *.gif *.webp"),
    ("All files", "*.*"),
]


class ProfileView(ctk.CTkFrame):
    """Profile editor for the session's user.

    Parameters
    ----------
    parent:
        The root ``CTk`` window this frame belongs to.
    editor:
        ``ProfileEditorService`` bound to the current session.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        editor: ProfileEditorService,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=PAGE_BG)

        self._editor = editor
        self._logger = logger
        self._mounted: bool = True
        self._post_to_ui = root_dispatcher(parent, logger)
        self._avatar_url: str = ""
        self._avatar_image: Optional[ctk.CTkImage] = None

        self._build_ui()
        self._load_profile()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        scroll = ctk.CTkScrollableFrame(self, fg_color=PAGE_BG)
        scroll.pack(fill="both", expand=True)

        card = ctk.CTkFrame(
            scroll,
            width=_FORM_WIDTH,
            fg_color=CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color=CARD_BORDER,
        )
        card.pack(pady=PADDING_LG)

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        ctk.CTkLabel(
            inner, text="Lore", font=FONT_BRAND, text_color=ACCENT_PRIMARY,
        ).pack()
        ctk.CTkLabel(
            inner, text="Your Profile", font=FONT_HEADING, text_color=TEXT_PRIMARY,
        ).pack(pady=(0, PADDING_LG))

        # -- Avatar --
        self._avatar_label = ctk.CTkLabel(
            inner,
            text=self._initials(),
            font=FONT_HEADING,
            text_color=TEXT_ON_ACCENT,
            width=AVATAR_SIZE,
            height=AVATAR_SIZE,
            fg_color=ACCENT_PRIMARY,
            corner_radius=AVATAR_SIZE // 2,
        )
        self._avatar_label.pack(pady=(0, PADDING_SM))

        self._upload_button = ctk.CTkButton(
            inner,
            text="Upload Avatar",
            font=FONT_SMALL,
            fg_color="transparent",
            border_width=1,
            border_color=INPUT_BORDER,
            hover_color=INPUT_DISABLED_BG,
            text_color=TEXT_PRIMARY,
            corner_radius=CORNER_RADIUS,
            command=self._handle_upload,
        )
        self._upload_button.pack(pady=(0, PADDING_LG))

        # -- Fields --
        self._email_entry = self._add_entry(inner, "EMAIL")
        self._email_entry.insert(0, self._editor.email)
        self._email_entry.configure(state="disabled", fg_color=INPUT_DISABLED_BG)

        self._full_name_entry = self._add_entry(inner, "FULL NAME")
        self._display_name_entry = self._add_entry(inner, "DISPLAY NAME")

        ctk.CTkLabel(
            inner, text="BIO", font=FONT_LABEL, text_color=TEXT_SECONDARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))
        self._bio_box = ctk.CTkTextbox(
            inner,
            height=100,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            border_width=2,
            text_color=TEXT_PRIMARY,
            wrap="word",
            corner_radius=CORNER_RADIUS,
        )
        self._bio_box.pack(fill="x", pady=(0, PADDING_LG))

        # -- Actions --
        self._update_button = ctk.CTkButton(
            inner,
            text="Update",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_ON_ACCENT,
            height=44,
            corner_radius=CORNER_RADIUS,
            command=self._handle_save,
        )
        self._update_button.pack(fill="x", pady=(0, PADDING_SM))

        ctk.CTkButton(
            inner,
            text="Sign Out",
            font=FONT_BUTTON,
            fg_color=SIGN_OUT_PRIMARY,
            hover_color=SIGN_OUT_HOVER,
            text_color=TEXT_ON_ACCENT,
            height=44,
            corner_radius=CORNER_RADIUS,
            command=self._handle_sign_out,
        ).pack(fill="x")

    def _add_entry(self, parent: ctk.CTkFrame, label: str) -> ctk.CTkEntry:
        ctk.CTkLabel(
            parent, text=label, font=FONT_LABEL, text_color=TEXT_SECONDARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))
        entry = ctk.CTkEntry(
            parent,
            width=_FORM_WIDTH - 72,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            height=_INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        entry.pack(fill="x", pady=(0, PADDING_MD))
        return entry

    def _initials(self) -> str:
        return (self._editor.email[:1] or "?").upper()

    # ------------------------------------------------------------------
    # Background helper
    # ------------------------------------------------------------------

    def _run_action(
        self,
        name: str,
        work: Callable[[], T],
        on_done: Callable[[T], None],
    ) -> bool:
        """Run *work* on a worker thread under the editor's loading guard.

        The guard is always released on the main thread, even when *work*
        raises; *on_done* only runs on success and while this view is
        still mounted.  Returns ``False`` if another action is in flight.
        """
        if not self._editor.begin_action():
            return False
        self._set_busy(True)

        def _finish(task: TaskOutcome[T]) -> None:
            self._editor.finish_action()
            if not self._mounted:
                return
            self._set_busy(False)
            if not task.ok:
                messagebox.showerror("Profile", str(task.error), parent=self)
                return
            on_done(task.value)

        run_in_background(name, work, _finish, self._post_to_ui, self._logger)
        return True

    def _set_busy(self, busy: bool) -> None:
        state = "disabled" if busy else "normal"
        self._update_button.configure(state=state, text="Loading..." if busy else "Update")
        self._upload_button.configure(
            state=state, text="Uploading..." if busy else "Upload Avatar",
        )

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def _load_profile(self) -> None:
        self._run_action("profile-load", self._editor.load, self._apply_profile)

    def _apply_profile(self, profile: Profile) -> None:
        self._set_entry(self._full_name_entry, profile.full_name)
        self._set_entry(self._display_name_entry, profile.display_name)
        self._bio_box.delete("1.0", "end")
        self._bio_box.insert("1.0", profile.bio)
        self._avatar_url = profile.avatar_url
        self._load_remote_avatar(profile.avatar_url)

    @staticmethod
    def _set_entry(entry: ctk.CTkEntry, value: str) -> None:
        entry.delete(0, "end")
        entry.insert(0, value)

    # ------------------------------------------------------------------
    # Avatar upload
    # ------------------------------------------------------------------

    def _handle_upload(self) -> None:
        selected = filedialog.askopenfilename(
            title="Choose an avatar",
            filetypes=_AVATAR_FILE_TYPES,
        )
        file_path = Path(selected) if selected else None
        self._run_action(
            "avatar-upload",
            lambda: self._editor.upload_avatar(file_path),
            lambda result: self._on_upload_done(result, file_path),
        )

    def _on_upload_done(
        self,
        result: AvatarUploadResult,
        file_path: Optional[Path],
    ) -> None:
        if not result.success:
            messagebox.showerror("Upload Avatar", result.message, parent=self)
            return
        self._avatar_url = result.avatar_url or ""
        if file_path is None or not self._show_avatar(file_path):
            self._load_remote_avatar(self._avatar_url)
        if not result.persisted:
            messagebox.showwarning(
                "Upload Avatar",
                "Your new avatar was uploaded. Press Update to save it to your profile.",
                parent=self,
            )

    def _load_remote_avatar(self, avatar_url: str) -> None:
        """Download the stored avatar and show it; the initial stays on failure."""
        if not avatar_url:
            return
        run_in_background(
            "avatar-download",
            lambda: self._editor.fetch_avatar(avatar_url),
            lambda task: self._on_avatar_downloaded(task, avatar_url),
            self._post_to_ui,
            self._logger,
        )

    def _on_avatar_downloaded(
        self,
        task: TaskOutcome[Optional[bytes]],
        avatar_url: str,
    ) -> None:
        # A newer upload replaces the URL while the download is in flight.
        if not self._mounted or avatar_url != self._avatar_url or not task.value:
            return
        self._show_avatar(BytesIO(task.value))

    def _show_avatar(self, source: Union[Path, BinaryIO]) -> bool:
        try:
            with Image.open(source) as img:
                img.thumbnail((AVATAR_SIZE, AVATAR_SIZE))
                thumbnail = img.copy()
        except (OSError, UnidentifiedImageError) as exc:
            self._logger.warning("Could not render avatar preview: %s", exc)
            return False
        self._avatar_image = ctk.CTkImage(
            light_image=thumbnail, dark_image=thumbnail, size=thumbnail.size,
        )
        self._avatar_label.configure(image=self._avatar_image, text="")
        return True

    # ------------------------------------------------------------------
    # Save / sign out
    # ------------------------------------------------------------------

    def _handle_save(self) -> None:
        full_name = self._full_name_entry.get()
        display_name = self._display_name_entry.get()
        bio = self._bio_box.get("1.0", "end-1c")
        avatar_url = self._avatar_url
        self._run_action(
            "profile-save",
            lambda: self._editor.save(full_name, display_name, bio, avatar_url),
            self._on_save_done,
        )

    def _on_save_done(self, result: ProfileSaveResult) -> None:
        if result.success:
            messagebox.showinfo("Profile", result.message, parent=self)
        else:
            messagebox.showerror("Profile", result.message, parent=self)

    def _handle_sign_out(self) -> None:
        threading.Thread(
            target=self._editor.sign_out,
            name="sign-out",
            daemon=True,
        ).start()

    def destroy(self) -> None:
        self._mounted = False
        super().destroy()
