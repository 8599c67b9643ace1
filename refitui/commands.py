"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .constants import EditorConstants

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.document.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.document.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.document.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.document.move_down()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands modify the document."""
        self._edit(editor, key_event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.document.delete_char_before()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.document.split_line()


class InsertTextCommand(EditCommand):
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        # Control characters and multi-character tokens are not text
        if not key_event.is_printable:
            return False
        return super().execute(editor, key_event)

    def _edit(self, editor, key_event):
        editor.document.insert_char(key_event.value)


class SystemCommand(EditorCommand):
    """Base class for commands that act on the editor rather than the text."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_exit()


class RedrawCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        # Nothing to change; the loop repaints at the new size
        pass


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System commands
        self.register((KeyType.CTRL, EditorConstants.QUIT_KEY), QuitCommand())
        self.register((KeyType.SPECIAL, 'resize'), RedrawCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Unbound keys are ignored.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return self._insert_text.execute(editor, key_event)

        return False
