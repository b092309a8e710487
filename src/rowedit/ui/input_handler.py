"""
Input handler module for processing keyboard events.

Keys arrive from curses as integers, are translated into ``KeyEvent`` objects
and dispatched according to the current ``Mode``.
"""

import curses
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, Final, Optional

from ..core.editor import Editor
from ..core.keys import Key, KeyEvent, MOVEMENT_KEYS
from ..utils.fileio import write_lines
from ..utils.logging_config import KEY_LOGGER, logger
from ..utils.search import SearchEngine

HELP_STATUS_MESSAGE: Final[str] = "HELP: i = Insert | :w = Save | :q = Quit | :f or / = Find"
SEARCH_PROMPT: Final[str] = "Search: {} (Use ESC/Arrows/Enter)"
SAVE_AS_PROMPT: Final[str] = "Save as: {} (ESC to cancel)"
UNSAVED_CHANGES_STATUS_MESSAGE: Final[str] = "File has unsaved changes. Use :q! to exit without saving."

KEY_MAP: Final[Dict[int, Key]] = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
    127: Key.BACKSPACE,
    8: Key.BACKSPACE,
    ord('\n'): Key.ENTER,
    ord('\r'): Key.ENTER,
    ord('\t'): Key.TAB,
    27: Key.ESCAPE,
}


class Mode(Enum):
    """Dispatcher states."""
    NORMAL = auto()
    INSERT = auto()
    COMMAND = auto()
    PROMPT = auto()


@dataclass
class Prompt:
    """A single line of user input shown in the message bar."""
    template: str
    on_done: Callable[[Optional[str]], None]
    on_key: Optional[Callable[[str, Key], None]] = None
    text: str = ''

    def message(self) -> str:
        return self.template.format(self.text)


def translate_key(ch: int) -> Optional[KeyEvent]:
    """Translate a curses key code into a ``KeyEvent``."""

    if ch in KEY_MAP:
        return KeyEvent(KEY_MAP[ch])

    if 1 <= ch <= 26:
        return KeyEvent(Key.CHAR, chr(ch + 96), ctrl=True)

    if 32 <= ch <= 126:
        return KeyEvent.of(chr(ch))

    return None


class InputHandler:
    """Handles keyboard input and executes corresponding actions."""

    def __init__(self, editor: Editor, config: Optional[Dict[str, Any]] = None) -> None:
        self.editor = editor
        self.config = config or {}
        self.mode = Mode.NORMAL
        self.command_buffer = ''
        self.prompt: Optional[Prompt] = None
        self.search_engine: Optional[SearchEngine] = None
        self.saved_cursor = None
        self.quit_after_save = False
        self.running = True

    def handle_input(self, ch: int) -> bool:
        """Handle a single curses key code. Returns False if the editor should quit."""

        event = translate_key(ch)
        KEY_LOGGER.debug("key %r -> %r (mode %s)", ch, event, self.mode.name)
        if event is None:
            return self.running

        return self.handle_key(event)

    def handle_key(self, event: KeyEvent) -> bool:
        """Dispatch a key event according to the current mode."""

        if self.mode is Mode.PROMPT:
            self._handle_prompt(event)
        elif self.mode is Mode.COMMAND:
            self._handle_command(event)
        elif self.mode is Mode.INSERT:
            self._handle_insert(event)
        else:
            self._handle_normal(event)

        return self.running

    def _handle_movement(self, event: KeyEvent) -> bool:
        if event.key in MOVEMENT_KEYS:
            logger.debug("Moving cursor in direction: %s", event.key.name)
            self.editor.move_cursor(event.key)
            return True

        if event.key in (Key.PAGE_UP, Key.PAGE_DOWN):
            logger.debug("Paging in direction: %s", event.key.name)
            self.editor.page(event.key)
            return True

        return False

    def _handle_normal(self, event: KeyEvent) -> None:
        if self._handle_movement(event):
            return

        if event.key is not Key.CHAR or event.ctrl or event.alt:
            return

        if event.char == 'i':
            self.mode = Mode.INSERT
        elif event.char == ':':
            self.mode = Mode.COMMAND
            self.command_buffer = ''
        elif event.char == '/':
            self.start_search()

    def _handle_insert(self, event: KeyEvent) -> None:
        if self._handle_movement(event):
            return

        if event.key is Key.ESCAPE:
            self.mode = Mode.NORMAL
        elif event.key is Key.ENTER:
            self.editor.insert_newline()
        elif event.key is Key.BACKSPACE:
            self.editor.delete_character()
        elif event.key is Key.DELETE:
            self.editor.move_cursor(Key.RIGHT)
            self.editor.delete_character()
        elif event.key is Key.TAB:
            self.editor.insert_character('\t')
        elif event.is_printable():
            self.editor.insert_character(event.char)

    def _handle_command(self, event: KeyEvent) -> None:
        if event.key is Key.ESCAPE:
            self.mode = Mode.NORMAL
            self.command_buffer = ''
        elif event.key is Key.ENTER:
            command = self.command_buffer.strip()
            self.mode = Mode.NORMAL
            self.command_buffer = ''
            self.execute_command(command)
        elif event.key is Key.BACKSPACE:
            if not self.command_buffer:
                self.mode = Mode.NORMAL
                return
            self.command_buffer = self.command_buffer[:-1]
        elif event.is_printable():
            self.command_buffer += event.char

    def _handle_prompt(self, event: KeyEvent) -> None:
        prompt = self.prompt
        if prompt is None:
            self.mode = Mode.NORMAL
            return

        if event.key is Key.ESCAPE:
            self._notify_prompt(prompt, Key.ESCAPE)
            self._close_prompt(None)
            return

        if event.key is Key.ENTER:
            self._notify_prompt(prompt, Key.ENTER)
            self._close_prompt(prompt.text or None)
            return

        if event.key is Key.BACKSPACE:
            prompt.text = prompt.text[:-1]
        elif event.is_printable():
            prompt.text += event.char

        self._notify_prompt(prompt, event.key)

    def _notify_prompt(self, prompt: Prompt, key: Key) -> None:
        if prompt.on_key is not None:
            prompt.on_key(prompt.text, key)

    def open_prompt(self, template: str, on_done: Callable[[Optional[str]], None],
                    on_key: Optional[Callable[[str, Key], None]] = None) -> None:
        self.prompt = Prompt(template, on_done, on_key)
        self.mode = Mode.PROMPT

    def _close_prompt(self, result: Optional[str]) -> None:
        prompt = self.prompt
        self.prompt = None
        self.mode = Mode.NORMAL
        if prompt is not None:
            prompt.on_done(result)

    def execute_command(self, command: str) -> None:
        """Run a colon command."""

        if command == 'w':
            self.save()
        elif command == 'q':
            self.quit()
        elif command == 'q!':
            logger.info("Exiting without saving.")
            self.running = False
        elif command in ('wq', 'x'):
            self.quit_after_save = True
            self.save()
        elif command in ('f', 'find'):
            self.start_search()
        elif command:
            self.editor.status_message.set(f"Not an editor command: {command}")

    def quit(self) -> None:
        if self.editor.dirty:
            logger.info("File has unsaved changes.")
            self.editor.status_message.set(UNSAVED_CHANGES_STATUS_MESSAGE)
            return

        logger.info("Exiting editor.")
        self.running = False

    def save(self) -> None:
        """Save the buffer, asking for a filename if it has none."""

        filename = self.editor.buffer.filename
        if filename:
            self._write(filename)
            return

        self.open_prompt(SAVE_AS_PROMPT, self._save_as)

    def _save_as(self, filename: Optional[str]) -> None:
        if not filename:
            self.quit_after_save = False
            self.editor.status_message.set("Save aborted")
            return

        syntax = self.editor.set_syntax_for(filename)
        if syntax is not None:
            logger.info("Highlighting %s as %s", filename, syntax.file_type)
        self._write(filename)

    def _write(self, filename: str) -> None:
        logger.info("Saving file.")
        try:
            size = write_lines(filename, self.editor.lines())
        except OSError as e:
            logger.error("Failed to save %s: %s", filename, e)
            self.quit_after_save = False
            self.editor.status_message.set(f"Can't save! I/O error: {e}")
            return

        self.editor.mark_saved(filename, size)
        self.editor.status_message.set(f"{size} bytes written to disk")

        if self.quit_after_save:
            logger.info("Exiting editor.")
            self.running = False

    def start_search(self) -> None:
        logger.info("Activating find mode.")
        self.saved_cursor = self.editor.cursor.copy()
        self.search_engine = SearchEngine(self.editor)
        self.open_prompt(SEARCH_PROMPT, self._finish_search, self._search_callback)

    def _search_callback(self, query: str, key: Key) -> None:
        if self.search_engine is None:
            return

        result = self.search_engine.on_key(query, key)
        if result is None and query and key not in (Key.ENTER, Key.ESCAPE):
            self.editor.status_message.set(f"No match for '{query}'")

    def _finish_search(self, query: Optional[str]) -> None:
        if query is None and self.saved_cursor is not None:
            self.editor.cursor = self.saved_cursor

        self.saved_cursor = None
        self.search_engine = None
