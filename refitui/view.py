from typing import NamedTuple, Optional

from wcwidth import wcwidth

from .model import CursorPosition, Document
from .constants import EditorConstants


def display_text(text: str) -> str:
    """Replace characters that would move the terminal cursor on their own.

    Tabs become a space and other control characters a placeholder, so
    nothing but ordinary glyphs reaches the terminal.
    """
    if text.isprintable():
        return text
    out = []
    for ch in text:
        if ch.isprintable():
            out.append(ch)
        elif ch == '\t':
            out.append(EditorConstants.TAB_PLACEHOLDER)
        else:
            out.append(EditorConstants.CONTROL_CHAR_PLACEHOLDER)
    return ''.join(out)


def char_cells(ch: str) -> int:
    # wcwidth gives 2 for wide (CJK, emoji), 0 for combining marks
    return max(0, wcwidth(ch))


def cell_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies once displayed."""
    return sum(char_cells(ch) for ch in display_text(text))


def fit_to_width(text: str, width: int) -> str:
    """Display form of ``text`` cut and padded to exactly ``width`` cells.

    A wide character that would straddle the right edge is dropped and
    its cell left blank.
    """
    out = []
    used = 0
    for ch in display_text(text):
        cells = char_cells(ch)
        if used + cells > width:
            break
        out.append(ch)
        used += cells
    return ''.join(out) + ' ' * max(0, width - used)


def body_height(height: int) -> int:
    """Number of terminal rows available for document text.

    The title and status bars take two rows; terminals too short to fit
    them give every row to the text.
    """
    if height >= EditorConstants.MIN_HEIGHT_FOR_CHROME:
        return height - EditorConstants.CHROME_ROWS
    return max(1, height)


def has_chrome(height: int) -> bool:
    return height >= EditorConstants.MIN_HEIGHT_FOR_CHROME


def visible_rows(document: Document, top_row: int, height: int) -> list[str]:
    """Return up to ``height`` lines starting at ``top_row``.

    Fewer lines are returned near the end of the document; the caller
    renders the remaining rows blank.
    """
    if height <= 0:
        return []
    end = min(document.line_count(), top_row + height)
    return [document.line(row) for row in range(top_row, end)]


def reconcile(cursor_row: int, height: int, line_count: int, current_top: int) -> int:
    """Return the top row that keeps ``cursor_row`` inside the view.

    Depends only on the cursor, the view height and the current top, so
    calling it again with the same inputs gives the same answer.
    """
    height = max(1, height)
    new_top = current_top
    if cursor_row < current_top:
        new_top = cursor_row
    elif cursor_row >= current_top + height:
        new_top = cursor_row - height + 1
    # Never scroll past the point where the last line sits at the bottom
    max_top = max(0, line_count - height)
    return max(0, min(new_top, max_top))


def screen_cursor(cursor: CursorPosition, top_row: int, width: int,
                  line: Optional[str] = None) -> tuple[int, int]:
    """Translate document coordinates to (screen_row, screen_col) within the body.

    With the cursor's ``line`` given, the column counts terminal cells of
    the text before the cursor, so wide characters take two. Lines are not
    wrapped: a cursor past the right edge is pinned to the last column.
    """
    screen_row = cursor.row - top_row
    column = cursor.column if line is None else cell_width(line[:cursor.column])
    screen_col = min(column, max(0, width - 1))
    return (screen_row, screen_col)


class Frame(NamedTuple):
    rows: list[str]
    cursor_y: int
    cursor_x: int


class Viewport:
    """Holds the scroll offset and derives what is on screen from it."""

    def __init__(self):
        self.top_row = 0

    def reconcile(self, document: Document, height: int) -> int:
        self.top_row = reconcile(
            document.cursor_position.row,
            body_height(height),
            document.line_count(),
            self.top_row,
        )
        return self.top_row

    def frame(self, document: Document, width: int, height: int) -> Frame:
        """Compute rows and cursor for a terminal of the given size."""
        # Height may have changed since the last keystroke
        self.reconcile(document, height)
        rows = visible_rows(document, self.top_row, body_height(height))
        cursor_y, cursor_x = screen_cursor(
            document.cursor_position, self.top_row, width,
            line=document.line(document.cursor_position.row),
        )
        return Frame(rows, cursor_y, cursor_x)
