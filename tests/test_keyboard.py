"""Test keyboard input handling."""

import pytest
from blessed.keyboard import Keystroke
from keystrokes import key
from refitui.constants import EditorConstants
from refitui.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("desc,value", [
    ('up', 'up'),
    ('down', 'down'),
    ('left', 'left'),
    ('right', 'right'),
    ('backspace', 'backspace'),
    ('pgup', 'page_up'),
])
def test_named_sequences(handler, desc, value):
    event = handler.parse_key(key(desc))
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_raw_ctrl_q(handler):
    event = handler.parse_key('\x11')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'
    assert event.is_ctrl


def test_named_ctrl_q(handler):
    event = handler.parse_key(Keystroke('\x11', name='KEY_CTRL_Q'))
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'
    assert event.raw == '\x11'


@pytest.mark.parametrize("raw", ['\r', '\n', key('enter')])
def test_enter_variants(handler, raw):
    event = handler.parse_key(raw)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'enter'


@pytest.mark.parametrize("raw", ['\x7f', '\x08', key('backspace')])
def test_backspace_variants(handler, raw):
    event = handler.parse_key(raw)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'backspace'


def test_space(handler):
    event = handler.parse_key(key(' '))
    assert event.key_type == KeyType.REGULAR
    assert event.value == ' '
    assert event.is_printable


def test_regular_characters(handler):
    for ch in ('a', 'Z', '<', '>', 'é'):
        event = handler.parse_key(key(ch))
        assert event.key_type == KeyType.REGULAR
        assert event.value == ch
        assert event.is_printable


def test_escape(handler):
    assert handler.parse_key('\x1b').value == 'escape'
    assert handler.parse_key(key('escape')).value == 'escape'


def test_unbound_sequences_are_special(handler):
    event = handler.parse_key(key('sleft'))
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'sleft'
    assert handler.parse_key(key('f5')).value == 'f5'


def test_unnamed_escape_sequence(handler):
    event = handler.parse_key('\x1b[99~')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'unknown'


def test_resize_token(handler):
    event = handler.parse_key(EditorConstants.RESIZE_TOKEN)
    assert event == KeyEvent(key_type=KeyType.SPECIAL, value='resize', raw=EditorConstants.RESIZE_TOKEN)


def test_tab_is_not_printable(handler):
    event = handler.parse_key('\t')
    assert not event.is_printable


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key(key('down'))
    terminal.add_key(key('x'))

    assert handler.get_key_event().value == 'down'
    assert handler.get_key_event().value == 'x'
    assert handler.get_key_event(timeout=0) is None


def test_empty_keystroke_is_a_timeout():
    terminal = MockTerminal()
    terminal.add_key(Keystroke(''))
    assert KeyboardHandler(terminal).get_key_event(timeout=0) is None
