"""Non-blocking single-key input for the live timer."""

from __future__ import annotations

import select
import sys
import termios
import tty


class KeyboardHandler:
    """Reads keypresses from a terminal in cbreak mode.

    Usable as a context manager; the terminal mode is restored on exit. When
    stdin is not a terminal no key is ever reported.
    """

    def __init__(self):
        self.fd: int | None = None
        self.old_settings = None
        self._setup()

    def __enter__(self) -> KeyboardHandler:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _setup(self) -> None:
        if not sys.stdin.isatty():
            return
        self.fd = sys.stdin.fileno()
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            self.old_settings = None

    @property
    def active(self) -> bool:
        return self.old_settings is not None

    def get_key(self) -> str | None:
        """Return the pending key lowercased, or None without waiting."""
        if not self.active:
            return None
        ready, _, _ = select.select([sys.stdin], [], [], 0)
        if ready:
            return sys.stdin.read(1).lower()
        return None

    def stop(self) -> None:
        """Restore the saved terminal mode."""
        if self.active:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
