"""Main editor controller: the keystroke loop."""

import logging
from enum import Enum
from typing import Optional

from .terminal import TerminalInterface
from .model import Document
from .view import Viewport, has_chrome
from .keyboard import KeyboardHandler, KeyEvent
from .constants import EditorConstants
from .commands import CommandRegistry

logger = logging.getLogger(__name__)


class EditorState(Enum):
    RUNNING = "running"
    EXITING = "exiting"


class Editor:
    """Application controller.

    Each keystroke is applied in full (mutation, scroll, repaint) before
    the next one is read. The terminal session is released on every way
    out of ``run()``, including exceptions.
    """

    def __init__(self, document: Document, terminal: Optional[TerminalInterface] = None,
                 keyboard: Optional[KeyboardHandler] = None):
        """Initialize the editor components."""
        self.document = document
        self.terminal = terminal or TerminalInterface()
        self.keyboard = keyboard or KeyboardHandler(self.terminal)
        self.viewport = Viewport()
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.state = EditorState.RUNNING

    @property
    def running(self) -> bool:
        return self.state == EditorState.RUNNING

    def request_exit(self):
        """Leave the loop after the current keystroke."""
        self.state = EditorState.EXITING

    def run(self) -> int:
        """Run the main editor loop and return the exit status."""
        with self.terminal.session():
            self.state = EditorState.RUNNING
            self._draw()
            while self.running:
                # The only blocking point
                key_event = self.keyboard.get_key_event(timeout=None)
                if key_event is None:
                    continue
                self._handle_key_event(key_event)
                if self.running:
                    self._draw()
        logger.debug("Editor exited cleanly")
        return EditorConstants.EXIT_OK

    def _handle_key_event(self, key_event: KeyEvent):
        """Apply one keyboard event to the document or the editor state.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        logger.debug("Key %s %r", key_event.key_type.value, key_event.value)
        if self.command_registry.execute(self, key_event):
            logger.debug("Document modified, %d lines", self.document.line_count())

    def _draw(self):
        """Draw the current editor state to terminal."""
        # Size is queried every frame so resizes take effect immediately
        width, height = self.terminal.size()
        frame = self.viewport.frame(self.document, width, height)
        title = status = None
        if has_chrome(height):
            title = self._title_text()
            status = self._status_text(width)
        self.terminal.render(
            frame.rows,
            (frame.cursor_y, frame.cursor_x),
            title=title,
            status=status,
        )

    def _title_text(self) -> str:
        return EditorConstants.TITLE_TEXT.format(filename=self.document.path or "[no name]")

    def _status_text(self, width: int) -> str:
        cursor = self.document.cursor_position
        left = EditorConstants.STATUS_TEXT.format(
            line_count=self.document.line_count(),
            row=cursor.row + 1,
            column=cursor.column + 1,
            modified=EditorConstants.MODIFIED_MARKER if self.document.modified else "",
        )
        hint = EditorConstants.QUIT_HINT
        padding = width - len(left) - len(hint) - 1
        if padding < 1:
            return left
        return left + " " * padding + hint
