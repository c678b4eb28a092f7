"""Main editor controller: owns the editor state and runs the key loop."""

import errno
import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from . import keylog, motion, persistence, render
from .buffer import Document
from .commands import CommandRegistry
from .constants import EditorConstants
from .context import EditorContext, Mode
from .edit import EditEngine
from .keyboard import KeyboardHandler, KeyEvent
from .search import SearchEngine
from .settings import Settings
from .syntax import SyntaxRegistry, default_registry
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Editor:
    """Modal editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[Settings] = None,
                 registry: Optional[SyntaxRegistry] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or Settings()
        self.syntax_registry = registry or default_registry()
        self.ctx = EditorContext()
        self.edit = EditEngine(self.ctx)
        self.search = SearchEngine(self.ctx)
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.running = False
        self.skip_after_action = False  # Set by actions that must not reset the quit counter/highlight
        self.show_debug = self.settings.show_debug_line
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def load_file(self, path: str):
        """Load a file into the editor; a missing file ends the process.

        Args:
            path: Path to file to load
        """
        try:
            lines = persistence.load_lines(path)
        except FileNotFoundError:
            print(f"file not found: {path}", file=sys.stderr)
            sys.exit(1)
        except OSError as e:
            print(f"Error loading file: {e}", file=sys.stderr)
            sys.exit(1)
        self.ctx.document = Document(lines, path=path, syntax=self.syntax_registry.for_path(path))
        self.ctx.set_cursor(0, 0)
        logger.debug(f"Loaded {len(lines)} lines from {path}")

    def save_file(self) -> bool:
        """Trim trailing whitespace and write the document to its path atomically.

        Returns:
            True if save succeeded, False otherwise
        """
        doc = self.ctx.document
        if not doc.path:
            self.ctx.set_message("no filename")
            return False

        doc.trim_trailing_whitespace()
        try:
            written = persistence.write_atomic(doc.path, persistence.serialize(doc.lines()))
        except PermissionError:
            self.ctx.set_message(f"Error: Permission denied saving {doc.path}", error=True)
            return False
        except OSError as e:
            if e.errno == errno.ENOSPC:  # No space left on device
                self.ctx.set_message("Error: No space left on device", error=True)
            else:
                self.ctx.set_message(f"Error: Cannot save to {doc.path}", error=True)
            logger.warning(f"Saving {doc.path} failed: {e}")
            return False

        doc.dirty = False
        self.ctx.set_message(f"{written} bytes written")
        return True

    def set_path(self, path: str):
        """Point the document at a new path and pick syntax from its extension."""
        doc = self.ctx.document
        doc.path = path
        doc.set_syntax(self.syntax_registry.for_path(path))

    def change_mode(self, mode: Mode):
        logger.debug(f"Mode {self.ctx.mode.value} -> {mode.value}")
        self.ctx.change_mode(mode)

    def request_exit(self):
        """Exit key: a dirty document needs repeated presses before quitting."""
        ctx = self.ctx
        if ctx.document.dirty and ctx.quit_times > 0:
            ctx.set_message(
                f"File has unsaved changes: press [backtick] {ctx.quit_times} more times to quit",
                error=True)
            ctx.quit_times -= 1
        else:
            self.running = False
        self.skip_after_action = True

    def submit_prompt(self):
        """Enter on the command/search line: leave the prompt and act on its text."""
        ctx = self.ctx
        text = ctx.cmdline
        mode = ctx.mode
        self.change_mode(Mode.NORMAL)

        if mode == Mode.COMMAND:
            if text == "quit":
                self.request_exit()
            elif text == "path" or text.startswith("path "):
                value = text[5:].strip()
                if value:
                    self.set_path(value)
                else:
                    ctx.set_message("path: missing value", error=True)
            else:
                ctx.set_message(f"unknown command '{text}'", error=True)
        elif mode == Mode.SEARCH:
            ctx.last_search = text
            self.search.search_forward(text, move_cursor=True)

    def after_action(self):
        """Bookkeeping run after every key."""
        motion.clamp_cursor(self.ctx)
        if not self.skip_after_action:
            self.ctx.quit_times = EditorConstants.NUM_FORCE_QUIT_PRESS
            self.ctx.reset_highlight()
        self.skip_after_action = False

    def handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        keylog.record(key_event)
        # Status messages live until the next key
        if not self.ctx.in_prompt():
            self.ctx.message = ""
            self.ctx.message_is_error = False
        self.command_registry.execute(self, key_event)
        self.after_action()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _refresh(self):
        """Fit the viewport to the terminal, scroll to the cursor and draw a frame."""
        ctx = self.ctx
        reserved = 3 if self.show_debug else 2
        ctx.viewport.resize(self.terminal.height - reserved, self.terminal.width)
        if not ctx.in_prompt():
            ctx.viewport.scroll_to(ctx.cursor_rx(), ctx.cursor.cy)
        ctx.viewport.scroll_cmdline(ctx.cmdx)
        self.terminal.draw_frame(render.render_frame(ctx, show_debug=self.show_debug))

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        key_log_handler = keylog.enable() if self.settings.key_log else None
        self.ctx.set_message(EditorConstants.HELP_MESSAGE)

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = None
        try:
            # Raw-ish input: let Ctrl-C, Ctrl-S, Ctrl-Q and Ctrl-V reach the editor as keys
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError) as e:
                logger.debug(f"Could not adjust terminal flags: {e}")

            need_draw = True
            while self.running:
                if need_draw:
                    self._refresh()
                    need_draw = False

                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        need_draw = True
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            if key_log_handler is not None:
                keylog.disable(key_log_handler)
            self.terminal.cleanup()
