"""Command pattern implementation of the modal key bindings.

``CommandRegistry`` is the transition table of the input state machine:
it maps ``(mode, key type, key value)`` to a command, with one fallback
command per mode for keys that have no explicit binding.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from . import motion
from .context import EditorContext, Mode
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


def is_printable(ch: str) -> bool:
    return len(ch) == 1 and 32 <= ord(ch) <= 126


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """


class NoOpCommand(EditorCommand):
    def execute(self, editor, key_event):
        pass


class MotionCommand(EditorCommand):
    """Moves the cursor with one of the functions in ``hed.motion``."""

    def __init__(self, move: Callable[[EditorContext], None]):
        self.move = move

    def execute(self, editor, key_event):
        self.move(editor.ctx)


class ChangeModeCommand(EditorCommand):
    def __init__(self, mode: Mode):
        self.mode = mode

    def execute(self, editor, key_event):
        editor.change_mode(self.mode)


class EditCommand(EditorCommand):
    """Base class for commands that change the document."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.edit.delete_left()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.edit.delete_right()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.edit.split_line(autoindent=True)


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        if key_event.key_type == KeyType.REGULAR and (is_printable(char) or char == '\t'):
            editor.edit.insert_char(char)
        else:
            editor.ctx.set_message(
                f"non-printable key '{key_event.describe()}' in insert mode", error=True)


class OpenLineBelowCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.edit.open_line_below()


class SetMarkCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.edit.set_mark()


class CutRegionCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.edit.cut_region()


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.edit.paste_clipboard()


class RepeatSearchCommand(EditorCommand):
    def __init__(self, forward: bool = True):
        self.forward = forward

    def execute(self, editor, key_event):
        if self.forward:
            editor.search.repeat_forward()
        else:
            editor.search.repeat_backward()


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.save_file()


class ExitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.request_exit()


class InvalidKeyCommand(EditorCommand):
    """Fallback for Normal mode: report the key, change nothing."""

    def execute(self, editor, key_event):
        editor.ctx.set_message(
            f"invalid key '{key_event.describe()}' in {editor.ctx.mode.value} mode", error=True)


class GotoPrefixCommand(EditorCommand):
    """The 'g' prefix: reads the next key and acts on 'g g'."""

    def execute(self, editor, key_event):
        second = editor.keyboard.get_key_event(timeout=None)
        if second is None:
            return
        if second.key_type == KeyType.REGULAR and second.value == 'g':
            motion.file_top(editor.ctx)
        elif second.key_type == KeyType.SPECIAL and second.value == 'escape':
            return
        else:
            editor.ctx.set_message(
                f"invalid key 'g {second.describe()}' in normal mode", error=True)


class PromptCommand(EditorCommand):
    """Base class for keys typed on the Command/Search line.

    These keep the search highlight and the quit counter alive, so the
    after-action reset is skipped.
    """

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        editor.skip_after_action = True
        self._prompt(editor, key_event)

    @abstractmethod
    def _prompt(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Handle the key."""


class PromptSubmitCommand(PromptCommand):
    def _prompt(self, editor, key_event):
        editor.submit_prompt()


class PromptCancelCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.change_mode(Mode.NORMAL)


class PromptBackspaceCommand(PromptCommand):
    def _prompt(self, editor, key_event):
        ctx = editor.ctx
        if ctx.cmdx > 0:
            ctx.cmdline = ctx.cmdline[:ctx.cmdx - 1] + ctx.cmdline[ctx.cmdx:]
            ctx.cmdx -= 1
        elif not ctx.cmdline:
            editor.change_mode(Mode.NORMAL)
        if ctx.mode == Mode.SEARCH:
            editor.search.search_forward(ctx.cmdline, move_cursor=False)


class PromptInsertCommand(PromptCommand):
    def _prompt(self, editor, key_event):
        ctx = editor.ctx
        char = key_event.value
        if key_event.key_type == KeyType.REGULAR and is_printable(char):
            ctx.cmdline = ctx.cmdline[:ctx.cmdx] + char + ctx.cmdline[ctx.cmdx:]
            ctx.cmdx += 1
        if ctx.mode == Mode.SEARCH:
            editor.search.search_forward(ctx.cmdline, move_cursor=False)


class PromptCursorCommand(PromptCommand):
    """Moves the command-line cursor: -1/+1 steps, or 'home'/'end'."""

    def __init__(self, where):
        self.where = where

    def _prompt(self, editor, key_event):
        ctx = editor.ctx
        if self.where == 'home':
            ctx.cmdx = 0
        elif self.where == 'end':
            ctx.cmdx = len(ctx.cmdline)
        else:
            ctx.cmdx = max(0, min(len(ctx.cmdline), ctx.cmdx + self.where))


Binding = Tuple[KeyType, str]


class CommandRegistry:
    """Registry mapping (mode, key) pairs to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[Mode, KeyType, str], EditorCommand] = {}
        self._fallbacks: Dict[Mode, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default key bindings."""
        N, I = Mode.NORMAL, Mode.INSERT
        regular = KeyType.REGULAR
        special = KeyType.SPECIAL

        arrows = {
            'left': MotionCommand(motion.cursor_left),
            'right': MotionCommand(motion.cursor_right),
            'up': MotionCommand(motion.cursor_up),
            'down': MotionCommand(motion.cursor_down),
        }
        for name, command in arrows.items():
            self.register(N, (special, name), command)
            self.register(I, (special, name), command)

        # Normal mode movement
        self.register(N, (regular, 'h'), arrows['left'])
        self.register(N, (regular, 'l'), arrows['right'])
        self.register(N, (regular, 'k'), arrows['up'])
        self.register(N, (regular, 'j'), arrows['down'])
        self.register(N, (regular, 'o'), MotionCommand(motion.forward_word))
        self.register(N, (regular, 'n'), MotionCommand(motion.backward_word))
        self.register(N, (regular, 'a'), MotionCommand(motion.line_begin))
        self.register(N, (regular, ';'), MotionCommand(motion.line_end))
        self.register(N, (regular, 'g'), GotoPrefixCommand())
        self.register(N, (regular, 'G'), MotionCommand(motion.file_bottom))
        self.register(N, (KeyType.CTRL, 'f'), MotionCommand(motion.page_down))
        self.register(N, (KeyType.CTRL, 'r'), MotionCommand(motion.page_up))

        # Normal mode editing
        self.register(N, (regular, 'i'), ChangeModeCommand(Mode.INSERT))
        self.register(N, (regular, 'w'), DeleteCharCommand())
        self.register(N, (regular, ','), OpenLineBelowCommand())
        self.register(N, (regular, 'd'), SetMarkCommand())
        self.register(N, (regular, 'f'), CutRegionCommand())
        self.register(N, (regular, 'c'), PasteCommand())

        # Search, command line and system
        self.register(N, (regular, '/'), ChangeModeCommand(Mode.SEARCH))
        self.register(N, (regular, 'b'), RepeatSearchCommand(forward=True))
        self.register(N, (regular, 'B'), RepeatSearchCommand(forward=False))
        self.register(N, (KeyType.ALT, 'm'), ChangeModeCommand(Mode.COMMAND))
        self.register(N, (KeyType.ALT, 's'), SaveCommand())
        self.register(N, (regular, '`'), ExitCommand())

        for name in ('backspace', 'enter', 'escape'):
            self.register(N, (special, name), NoOpCommand())
        self.set_fallback(N, InvalidKeyCommand())

        # Insert mode
        self.register(I, (special, 'backspace'), BackspaceCommand())
        self.register(I, (special, 'enter'), InsertNewlineCommand())
        self.register(I, (regular, '\t'), InsertTextCommand())
        self.register(I, (special, 'escape'), ChangeModeCommand(Mode.NORMAL))
        self.set_fallback(I, InsertTextCommand())

        # Command and search line editing
        for mode in (Mode.COMMAND, Mode.SEARCH):
            self.register(mode, (special, 'enter'), PromptSubmitCommand())
            self.register(mode, (special, 'backspace'), PromptBackspaceCommand())
            self.register(mode, (special, 'escape'), PromptCancelCommand())
            self.register(mode, (KeyType.CTRL, 'h'), PromptCursorCommand(-1))
            self.register(mode, (KeyType.CTRL, 'l'), PromptCursorCommand(+1))
            self.register(mode, (KeyType.ALT, 'left'), PromptCursorCommand('home'))
            self.register(mode, (KeyType.ALT, 'right'), PromptCursorCommand('end'))
            self.set_fallback(mode, PromptInsertCommand())

    def register(self, mode: Mode, key: Binding, command: EditorCommand):
        """Register a command for a key combination in one mode."""
        key_type, value = key
        self._commands[(mode, key_type, value)] = command

    def set_fallback(self, mode: Mode, command: EditorCommand):
        """Command run for keys with no binding in ``mode``."""
        self._fallbacks[mode] = command

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command bound to a key in a mode, without falling back."""
        return self._commands.get((mode, key_type, value))

    def resolve(self, mode: Mode, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        key_type = KeyType.ALT if key_event.is_alt else key_event.key_type
        command = self.get_command(mode, key_type, key_event.value)
        if command is None:
            command = self._fallbacks.get(mode)
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event in the editor's current mode.

        Returns:
            True if a command handled the key
        """
        command = self.resolve(editor.ctx.mode, key_event)
        if command is None:
            return False
        command.execute(editor, key_event)
        return True
