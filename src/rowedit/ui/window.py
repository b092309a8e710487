"""
Window management module for the editor UI.
"""

import curses
import os
from typing import Any, Dict, Final, Optional

from pygments.token import string_to_tokentype, _TokenType

from .. import __version__
from ..core.editor import Editor
from ..core.syntax import HighlightType
from .input_handler import InputHandler, Mode

CURSES_COLORS: Final[Dict[str, int]] = {
    'default': -1,
    'black': curses.COLOR_BLACK,
    'red': curses.COLOR_RED,
    'green': curses.COLOR_GREEN,
    'yellow': curses.COLOR_YELLOW,
    'blue': curses.COLOR_BLUE,
    'magenta': curses.COLOR_MAGENTA,
    'cyan': curses.COLOR_CYAN,
    'white': curses.COLOR_WHITE,
    'grey': 8,
}


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


class WindowManager:
    """Draws the editor's rows, status bar and message bar."""

    LINE_NUMBER_WIDTH = 6
    RESERVED_ROWS = 2

    def __init__(self, stdscr: 'curses.window', editor: Editor, input_handler: InputHandler,
                 config: Optional[Dict[str, Any]] = None) -> None:
        self.stdscr = stdscr
        self.editor = editor
        self.input_handler = input_handler
        self.config = config or {}
        self.height, self.width = stdscr.getmaxyx()
        self.line_numbers = self.config.get("editor", {}).get("line_numbers", True)
        self.color_pairs: Dict[str, int] = {}
        self.color_overrides: Dict[_TokenType, str] = {
            string_to_tokentype(name): color
            for name, color in self.config.get("colors", {}).items()
        }

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()

        self.resize()

    @property
    def gutter_width(self) -> int:
        return self.LINE_NUMBER_WIDTH if self.line_numbers else 0

    def resize(self) -> None:
        """Pick up the terminal size and pass it on to the viewport."""

        self.height, self.width = self.stdscr.getmaxyx()
        self.editor.resize(self.height - self.RESERVED_ROWS, self.width - self.gutter_width)

    def color_attr(self, name: str) -> int:
        """Get a curses attribute for a color name, allocating a pair on first use."""

        if name == 'default' or not curses.has_colors():
            return curses.A_NORMAL

        if name not in self.color_pairs:
            pair = len(self.color_pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return curses.A_NORMAL
            foreground = CURSES_COLORS.get(name, -1)
            if foreground >= curses.COLORS:
                foreground = curses.COLOR_WHITE
            curses.init_pair(pair, foreground, -1)
            self.color_pairs[name] = pair

        return curses.color_pair(self.color_pairs[name])

    def tag_attr(self, tag: _TokenType) -> int:
        if tag in self.color_overrides:
            return self.color_attr(self.color_overrides[tag])

        syntax = self.editor.syntax
        if syntax is None:
            if tag == HighlightType.SEARCH_MATCH:
                return self.color_attr('blue')
            return curses.A_NORMAL

        return self.color_attr(syntax.color_for(tag))

    def refresh_all(self) -> None:
        """Redraw the whole screen."""

        self.editor.scroll()
        self.stdscr.erase()

        self.draw_rows()
        self.draw_status_bar()
        self.draw_message_bar()

        cursor_x, cursor_y = self.editor.screen_cursor()
        try:
            self.stdscr.move(cursor_y, cursor_x + self.gutter_width)
        except curses.error:
            pass

        self.stdscr.refresh()

    def draw_rows(self) -> None:
        screen_rows = self.editor.cursor.screen_rows
        row_offset = self.editor.cursor.row_offset
        drawn = set()

        for file_row, render, highlight in self.editor.visible_rows():
            y = file_row - row_offset
            drawn.add(y)
            if self.line_numbers:
                safe_addstr(self.stdscr, y, 0, f"{file_row + 1:>{self.gutter_width - 1}} ",
                            self.color_attr('grey'))
            self.draw_highlighted(y, render, highlight)

        for y in range(screen_rows):
            if y in drawn:
                continue

            if self.editor.buffer.number_of_rows() == 0 and y == screen_rows // 3:
                self.draw_welcome(y)
                continue

            safe_addstr(self.stdscr, y, 0, '~')

    def draw_highlighted(self, y: int, render: str, highlight: list) -> None:
        """Draw a render slice, switching attributes only where the tag changes."""

        x = self.gutter_width
        start = 0
        while start < len(render):
            end = start + 1
            while end < len(render) and highlight[end] == highlight[start]:
                end += 1
            safe_addstr(self.stdscr, y, x + start, render[start:end], self.tag_attr(highlight[start]))
            start = end

    def draw_welcome(self, y: int) -> None:
        lines = [f"rowedit --- version {__version__}", "A terminal line editor"]
        for offset, text in enumerate(lines):
            text = text[:self.width]
            padding = (self.width - len(text)) // 2
            safe_addstr(self.stdscr, y + offset, 0, '~')
            safe_addstr(self.stdscr, y + offset, max(1, padding), text)

    def draw_status_bar(self) -> None:
        buf = self.editor.buffer
        cursor = self.editor.cursor
        y = self.height - self.RESERVED_ROWS

        name = os.path.basename(buf.filename) if buf.filename else "[Untitled]"
        info = (f"\"{name}\" {buf.number_of_rows()} Lines, {buf.file_size or 0}B written"
                f"    {'(modified)' if buf.dirty else ''}")
        file_type = self.editor.syntax.file_type if self.editor.syntax else "no ft"
        line_info = f"{file_type} | Ln {cursor.cursor_y + 1}, Col {cursor.cursor_x + 1}"

        # The bottom-right cell of a curses window cannot be written.
        available = self.width - 1
        info = info[:available]
        padding = available - len(info) - len(line_info)
        bar = info + ' ' * padding + line_info if padding > 0 else info.ljust(available)
        safe_addstr(self.stdscr, y, 0, bar, curses.A_REVERSE)

    def draw_message_bar(self) -> None:
        y = self.height - 1
        handler = self.input_handler

        if handler.prompt is not None:
            message = handler.prompt.message()
        elif handler.mode is Mode.COMMAND:
            message = ':' + handler.command_buffer
        else:
            message = self.editor.status_message.get()
            if message is None and handler.mode is Mode.INSERT:
                message = "-- INSERT --"

        if message:
            safe_addstr(self.stdscr, y, 0, message[:self.width - 1])
