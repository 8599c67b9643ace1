"""Terminal interface using Blessed for display and keyboard input."""

import logging
import os
import select
import signal
import sys
import termios
from contextlib import contextmanager
from typing import Optional

import blessed

from .constants import EditorConstants
from .view import fit_to_width

logger = logging.getLogger(__name__)


class TerminalError(Exception):
    """Base class for terminal failures."""


class TerminalUnavailableError(TerminalError):
    """Raised when raw mode cannot be entered (no interactive terminal)."""


class RenderError(TerminalError):
    """Raised when writing to the terminal fails mid-session."""


class TerminalInterface:
    """Owns raw mode and the screen.

    ``open()`` and ``close()`` bracket the session; use ``session()`` so the
    terminal is restored on every exit path.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, in_stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.in_stream = in_stream or sys.stdin
        self.is_open = False
        self.is_fullscreen = False
        self._raw_mode = None  # Entered blessed raw() context
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self._previous_winch_handler = None

    def open(self):
        """Enter raw input mode and the fullscreen screen buffer."""
        if self.is_open:
            return
        if not (self.in_stream.isatty() and self.term.is_a_tty):
            raise TerminalUnavailableError("standard input and output must be an interactive terminal")
        try:
            self._resize_pipe_r, self._resize_pipe_w = os.pipe()
            self._previous_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
            # Raw rather than cbreak: Ctrl-Q (XON) and Ctrl-C arrive as plain keys
            raw_mode = self.term.raw()
            raw_mode.__enter__()
            self._raw_mode = raw_mode
            self.is_open = True
            self._write(self.term.enter_fullscreen + self.term.hide_cursor + self.term.clear)
            self.is_fullscreen = True
        except (OSError, termios.error, ValueError, TerminalError) as e:
            self.close()
            raise TerminalUnavailableError(f"cannot enter raw mode: {e}") from e
        logger.debug("Terminal opened (%dx%d)", *self.size())

    def close(self):
        """Leave fullscreen and restore the original terminal mode.

        Safe to call more than once and after a partial ``open()``.
        """
        if self.is_fullscreen:
            self.is_fullscreen = False
            try:
                self._write(self.term.normal_cursor + self.term.exit_fullscreen)
            except RenderError as e:
                logger.warning("Could not leave fullscreen: %s", e)
        if self._raw_mode is not None:
            try:
                self._raw_mode.__exit__(None, None, None)
            except (OSError, termios.error) as e:
                logger.warning("Could not restore terminal mode: %s", e)
            finally:
                self._raw_mode = None
        if self._previous_winch_handler is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch_handler)
            self._previous_winch_handler = None
        for fd in (self._resize_pipe_r, self._resize_pipe_w):
            if fd is not None:
                os.close(fd)
        self._resize_pipe_r = self._resize_pipe_w = None
        if self.is_open:
            self.is_open = False
            logger.debug("Terminal closed")

    @contextmanager
    def session(self):
        """Raw mode for the duration of the ``with`` block."""
        self.open()
        try:
            yield self
        finally:
            self.close()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        if self._resize_pipe_w is not None:
            # Wakes up select() in get_key
            os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _write(self, text: str):
        try:
            print(text, end='', flush=True)
        except OSError as e:
            raise RenderError(f"write to terminal failed: {e}") from e

    def write_line(self, text: str):
        """Print a line of plain output; raw mode needs an explicit carriage return."""
        self._write(text + '\r\n')

    def size(self) -> tuple[int, int]:
        """Current (width, height) in cells; re-read on every call."""
        return (self.term.width, self.term.height)

    def render(self, rows: list[str], cursor: tuple[int, int],
               title: Optional[str] = None, status: Optional[str] = None):
        """Clear the screen, draw the frame and place the cursor.

        Args:
            rows: Document lines for the body, top to bottom
            cursor: (row, col) of the cursor relative to the body
            title: Text for the top bar; the body starts below it when given
            status: Text for the bottom bar
        """
        width, height = self.size()
        body_top = 1 if title is not None else 0
        out = [self.term.home, self.term.clear]

        if title is not None:
            out.append(self.term.move(0, 0) + self.term.reverse + fit_to_width(title, width) + self.term.normal)

        for y, line in enumerate(rows):
            # Pad or truncate to exactly the terminal width, in cells
            out.append(self.term.move(body_top + y, 0) + fit_to_width(line, width))

        if status is not None:
            out.append(self.term.move(height - 1, 0) + self.term.reverse + fit_to_width(status, width) + self.term.normal)

        cursor_y, cursor_x = cursor
        out.append(self.term.move(body_top + cursor_y, cursor_x) + self.term.normal_cursor)
        self._write(''.join(out))

    def get_key(self, timeout: Optional[float] = None):
        """Wait for the next keypress.

        Returns a blessed Keystroke, the resize token when the window size
        changed, or None on timeout or when the terminal is not open.
        """
        if self._raw_mode is None:
            return None
        while True:
            # blessed may already hold buffered keys that select cannot see
            key = self.term.inkey(timeout=0)
            if key:
                return key
            ready, _, _ = select.select([self.in_stream, self._resize_pipe_r], [], [], timeout)
            if not ready:
                return None
            if self._resize_pipe_r in ready:
                os.read(self._resize_pipe_r, 1024)
                return EditorConstants.RESIZE_TOKEN
