"""UI-thread dispatch bound to the root window.

Workers schedule through the toplevel window rather than the frame that
started them: a frame can be destroyed (e.g. the auth form on SIGNED_IN)
before its worker returns, while the root lives until the app exits.
"""

from __future__ import annotations

import tkinter as tk

from lore.logger import StructuredLogger
from lore.utils.background import Dispatcher, guarded_dispatcher


def root_dispatcher(widget: tk.Misc, logger: StructuredLogger) -> Dispatcher:
    """Return a dispatcher running callbacks on *widget*'s toplevel main loop."""
    root = widget.winfo_toplevel()
    return guarded_dispatcher(
        lambda callback: root.after(0, callback),
        logger,
        ignored=(tk.TclError, RuntimeError),
    )
