"""Constants and configuration for the refitui viewer."""

class EditorConstants:
    """Central configuration constants for the viewer."""

    PROGRAM_NAME = "refitui"

    # Screen layout
    TITLE_TEXT = " Welcome to refitui: {filename}"
    STATUS_TEXT = " line-count={line_count}  {row}:{column}{modified}"
    MODIFIED_MARKER = "  [modified]"
    QUIT_HINT = "Ctrl-Q quit"
    CHROME_ROWS = 2  # Title bar + status bar
    MIN_HEIGHT_FOR_CHROME = 3  # Below this, all rows show text

    # Rendering
    CONTROL_CHAR_PLACEHOLDER = "?"  # Shown for non-printable characters
    TAB_PLACEHOLDER = " "

    # Key bindings
    QUIT_KEY = "q"  # Used with Ctrl

    # Input
    RESIZE_TOKEN = "<RESIZE>"  # Synthetic token returned when SIGWINCH fires
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # File loading
    FILE_ENCODING = "utf-8"

    # Logging
    LOG_FILE_NAME = "refitui.log"
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Exit codes
    EXIT_OK = 0
    EXIT_FAILURE = 1
    EXIT_USAGE = 2
    EXIT_INTERRUPTED = 130
