"""Terminal control helpers for the interactive picker.

Owns raw-mode lifecycle and alternate-screen switching. The picker talks to
``/dev/tty`` directly because stdin carries the candidate stream and stdout
carries the final selection.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

TTY_PATH = "/dev/tty"


class TerminalController:
    """Manage terminal mode transitions on one tty file descriptor."""

    def __init__(self, tty_fd: int) -> None:
        """Capture tty state and bind the tty file descriptor."""
        self.tty_fd = tty_fd
        self._saved_tty_state = termios.tcgetattr(tty_fd)

    @classmethod
    @contextlib.contextmanager
    def open_tty(cls, path: str = TTY_PATH):
        """Open the controlling terminal and yield a controller for it."""
        fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
        try:
            yield cls(fd)
        finally:
            os.close(fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.tty_fd, termios.TCSAFLUSH)
        os.write(self.tty_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor and restore the main screen and tty state."""
        os.write(self.tty_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the tty, with an 80x24 fallback."""
        try:
            size = os.get_terminal_size(self.tty_fd)
        except OSError:
            size = shutil.get_terminal_size((80, 24))
        return max(1, size.columns), max(1, size.lines)

    def draw(self, lines: list[str]) -> None:
        """Repaint the screen from the top-left with ``lines``."""
        out = ["\x1b[H"]
        for idx, line in enumerate(lines):
            if idx:
                out.append("\r\n")
            out.append(line)
            out.append("\x1b[0m\x1b[K")
        out.append("\x1b[J")
        os.write(self.tty_fd, "".join(out).encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TTY_PATH", "TerminalController"]
