"""refitui CLI entry point.

Allows running via `python -m refitui` and provides the console script
defined in `pyproject.toml`.

Usage:
    refitui [--debug] <path>

Controls:
    Arrow keys: Move the cursor
    Type to insert text
    Enter: Split the line
    Backspace: Delete the character before the cursor
    Ctrl-Q: Quit (edits are not saved)
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .constants import EditorConstants
from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "usage: refitui [-h] [-V] [--debug] [--keytest] <path>"

HELP = f"""{USAGE}

Basic terminal text viewer.

positional arguments:
  path            file to open

options:
  -h, --help      show this help message and exit
  -V, --version   show the version and exit
  --debug         write a debug log to the user log directory
  --keytest       show how key presses are parsed (ESC quits)

keys: arrows move, Enter splits a line, Backspace deletes, Ctrl-Q quits"""


def _error(message: str) -> None:
    print(f"{EditorConstants.PROGRAM_NAME}: {message}", file=sys.stderr)


def _usage_error(message: str) -> int:
    print(USAGE, file=sys.stderr)
    _error(f"error: {message}")
    return EditorConstants.EXIT_USAGE


def _escape(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> int:
    """Run an interactive keyboard test using the editor's input stack.

    Quit with ESC.
    """
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    term = TerminalInterface()
    kb = KeyboardHandler(term)

    with term.session():
        term.write_line("Keyboard test mode - press keys to see parsed events.")
        term.write_line("Quit with ESC.")
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={_escape(ev.value)}", f"raw='{_escape(ev.raw)}'"]
            if ev.is_ctrl:
                parts.append("flags=ctrl")
            term.write_line(' '.join(parts))
    print("Exiting keyboard test.")
    return EditorConstants.EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    # Small hand-rolled parser: one path plus a few flags
    args = list(sys.argv[1:] if argv is None else argv)
    debug = False
    keytest = False
    paths: list[str] = []
    while args:
        arg = args.pop(0)
        if arg == '--':
            paths.extend(args)
            break
        if arg in ("--help", "-h"):
            print(HELP)
            return EditorConstants.EXIT_OK
        if arg in ("--version", "-V"):
            print(get_version_string())
            return EditorConstants.EXIT_OK
        if arg == "--debug":
            debug = True
        elif arg in ('--keytest', '--keyboard-test'):
            keytest = True
        elif arg.startswith('-') and arg != '-':
            return _usage_error(f"unrecognized option: {arg}")
        else:
            paths.append(arg)

    # Lazy imports keep --help/--version free of terminal setup
    from .log import configure_logging
    from .terminal import TerminalUnavailableError, RenderError

    try:
        configure_logging(debug=debug)
    except OSError as e:
        _error(f"warning: cannot write debug log: {e}")

    if keytest:
        try:
            return run_keyboard_test()
        except TerminalUnavailableError as e:
            _error(str(e))
            return EditorConstants.EXIT_FAILURE

    if not paths:
        return _usage_error("the following arguments are required: path")
    if len(paths) > 1:
        return _usage_error(f"expected one path, got {len(paths)}")

    from .model import Document, DocumentError
    from .editor import Editor

    # Load before touching the terminal so load errors need no cleanup
    try:
        document = Document.load(paths[0])
    except DocumentError as e:
        logger.info("Load failed: %s", e)
        _error(str(e))
        return EditorConstants.EXIT_FAILURE

    editor = Editor(document)
    try:
        return editor.run()
    except TerminalUnavailableError as e:
        _error(str(e))
        return EditorConstants.EXIT_FAILURE
    except RenderError as e:
        logger.exception("Render failed")
        _error(str(e))
        return EditorConstants.EXIT_FAILURE
    except KeyboardInterrupt:
        return EditorConstants.EXIT_INTERRUPTED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
