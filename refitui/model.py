import logging
from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Base class for errors raised while loading a document."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class DocumentNotFoundError(DocumentError):
    """Raised when the document path does not exist."""


class DocumentReadError(DocumentError):
    """Raised when the document exists but cannot be read or decoded."""


@dataclass
class CursorPosition:
    row: int = 0
    column: int = 0


def split_lines(content: str) -> list[str]:
    """Split file contents into lines.

    A trailing newline does not start an extra line and a carriage return
    before each newline is dropped, so CRLF files load as their logical
    lines. Empty content yields a single empty line.
    """
    if not content:
        return [""]
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    return lines or [""]


class Document:
    """In-memory text as a list of lines plus the logical cursor.

    All writes to the text go through the methods below; the cursor is
    kept inside the document bounds after every call.
    """

    def __init__(self, lines: Optional[list[str]] = None, path: Optional[str] = None):
        self._lines: list[str] = list(lines) if lines else [""]
        self.path = path
        self.cursor_position = CursorPosition()
        self.modified = False

    @classmethod
    def load(cls, path: str) -> "Document":
        """Read the whole file at ``path`` and split it into lines."""
        try:
            with open(path, 'r', encoding=EditorConstants.FILE_ENCODING, newline='') as f:
                content = f.read()
        except FileNotFoundError:
            raise DocumentNotFoundError(path, "No such file") from None
        except IsADirectoryError:
            raise DocumentReadError(path, "Is a directory") from None
        except PermissionError:
            raise DocumentReadError(path, "Permission denied") from None
        except UnicodeDecodeError as e:
            raise DocumentReadError(path, f"Not valid UTF-8 text ({e.reason} at byte {e.start})") from None
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from None

        lines = split_lines(content)
        logger.debug("Loaded %s: %d lines, %d characters", path, len(lines), len(content))
        return cls(lines, path=path)

    # --- Read accessors ---

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> str:
        return self._lines[row]

    def line_length(self, row: int) -> int:
        return len(self._lines[row])

    # --- Mutations ---

    def insert_char(self, ch: str):
        """Insert ``ch`` at the cursor and advance the cursor by one."""
        row = self.cursor_position.row
        col = self.cursor_position.column
        text = self._lines[row]
        self._lines[row] = text[:col] + ch + text[col:]
        self.cursor_position.column = col + len(ch)
        self.modified = True

    def split_line(self):
        """Break the current line at the cursor; cursor goes to the start of the new line."""
        row = self.cursor_position.row
        col = self.cursor_position.column
        text = self._lines[row]
        self._lines[row:row + 1] = [text[:col], text[col:]]
        self.cursor_position.row = row + 1
        self.cursor_position.column = 0
        self.modified = True

    def delete_char_before(self):
        """Backspace: delete the previous character or join with the previous line.

        Does nothing at the very start of the document.
        """
        row = self.cursor_position.row
        col = self.cursor_position.column
        if col > 0:
            text = self._lines[row]
            self._lines[row] = text[:col - 1] + text[col:]
            self.cursor_position.column = col - 1
            self.modified = True
        elif row > 0:
            self._join_with_previous_line()

    def _join_with_previous_line(self):
        row = self.cursor_position.row
        join_point = len(self._lines[row - 1])
        self._lines[row - 1] += self._lines[row]
        del self._lines[row]
        self.cursor_position.row = row - 1
        self.cursor_position.column = join_point
        self.modified = True

    # --- Cursor movement (clamped, never wraps) ---

    def move_up(self):
        if self.cursor_position.row > 0:
            self.cursor_position.row -= 1
            self._clamp_column()

    def move_down(self):
        if self.cursor_position.row < len(self._lines) - 1:
            self.cursor_position.row += 1
            self._clamp_column()

    def move_left(self):
        # No wrap to the end of the previous line
        if self.cursor_position.column > 0:
            self.cursor_position.column -= 1

    def move_right(self):
        # No wrap to the start of the next line
        if self.cursor_position.column < self.line_length(self.cursor_position.row):
            self.cursor_position.column += 1

    def _clamp_column(self):
        length = self.line_length(self.cursor_position.row)
        if self.cursor_position.column > length:
            self.cursor_position.column = length
