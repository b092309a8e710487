"""
Edit session tying the buffer, highlighter and cursor together.

All edits go through ``Editor`` so that the order of work is always the same:
text edit, re-render, re-highlight, cursor reposition. Scrolling happens once
per frame in ``scroll``.
"""

import os
import time
from typing import Iterator, List, Optional, Tuple

from pygments.token import _TokenType

from .buffer import Buffer, DEFAULT_TAB_STOP
from .cursor import CursorController
from .keys import Key
from .syntax import SyntaxHighlighter, select_syntax
from ..utils.logging_config import logger


class StatusMessage:
    """A transient message that disappears ``timeout`` seconds after being set."""

    def __init__(self, initial_message: Optional[str] = None, timeout: float = 5) -> None:
        self.timeout = timeout
        self.text: Optional[str] = None
        self.set_time: Optional[float] = None
        if initial_message:
            self.set(initial_message)

    def set(self, message: str) -> None:
        self.text = message
        self.set_time = time.monotonic()

    def get(self) -> Optional[str]:
        """Get the message, clearing it first if it has expired."""

        if self.set_time is None:
            return None

        if time.monotonic() - self.set_time > self.timeout:
            self.text = None
            self.set_time = None

        return self.text


class Editor:
    """A single-file editing session."""

    def __init__(self, screen_rows: int = 24, screen_columns: int = 80,
                 tab_stop: int = DEFAULT_TAB_STOP, message_timeout: float = 5) -> None:
        self.tab_stop = tab_stop
        self.buffer = Buffer(tab_stop)
        self.cursor = CursorController(screen_rows, screen_columns)
        self.status_message = StatusMessage(timeout=message_timeout)

    @property
    def dirty(self) -> bool:
        return self.buffer.dirty

    @property
    def syntax(self) -> Optional[SyntaxHighlighter]:
        return self.buffer.syntax

    def load(self, lines: List[str], filename: Optional[str] = None,
             file_size: Optional[int] = None) -> None:
        """Replace the session contents with freshly loaded lines."""

        syntax = select_syntax(_extension(filename)) if filename else None
        self.buffer = Buffer.from_lines(lines, filename, file_size, self.tab_stop, syntax)
        self.cursor = CursorController(self.cursor.screen_rows, self.cursor.screen_columns)
        logger.info("Loaded %d lines from %s (%s)", len(lines), filename or "[Untitled]",
                    syntax.file_type if syntax else "no highlighting")

    def lines(self) -> List[str]:
        return self.buffer.lines()

    def set_syntax_for(self, filename: str) -> Optional[SyntaxHighlighter]:
        """Activate the highlighter matching ``filename``'s extension, if any."""

        syntax = select_syntax(_extension(filename))
        self.buffer.set_syntax(syntax)
        return syntax

    def mark_saved(self, filename: str, file_size: int) -> None:
        self.buffer.filename = filename
        self.buffer.file_size = file_size
        self.buffer.dirty = False

    def insert_character(self, character: str) -> None:
        cursor = self.cursor
        if cursor.cursor_y == self.buffer.number_of_rows():
            self.buffer.insert_row(self.buffer.number_of_rows())

        self.buffer.insert_character(cursor.cursor_y, cursor.cursor_x, character)
        cursor.cursor_x += 1

    def insert_newline(self) -> None:
        cursor = self.cursor
        if cursor.cursor_y == self.buffer.number_of_rows():
            self.buffer.insert_row(cursor.cursor_y)
        else:
            self.buffer.split_row(cursor.cursor_y, cursor.cursor_x)

        cursor.cursor_x = 0
        cursor.cursor_y += 1

    def delete_character(self) -> None:
        """Delete the character left of the cursor, joining rows at column 0."""

        cursor = self.cursor
        if cursor.cursor_y == self.buffer.number_of_rows():
            return

        if cursor.cursor_y == 0 and cursor.cursor_x == 0:
            return

        if cursor.cursor_x > 0:
            self.buffer.delete_character(cursor.cursor_y, cursor.cursor_x - 1)
            cursor.cursor_x -= 1
            return

        cursor.cursor_x = len(self.buffer.get_row(cursor.cursor_y - 1).row_content)
        self.buffer.join_row(cursor.cursor_y)
        cursor.cursor_y -= 1

    def move_cursor(self, direction: Key) -> None:
        self.cursor.move_cursor(direction, self.buffer)

    def page(self, direction: Key) -> None:
        """Move a full screen up or down."""

        cursor = self.cursor
        if direction is Key.PAGE_UP:
            cursor.cursor_y = cursor.row_offset
            step = Key.UP
        elif direction is Key.PAGE_DOWN:
            cursor.cursor_y = min(cursor.screen_rows + cursor.row_offset - 1,
                                  self.buffer.number_of_rows())
            step = Key.DOWN
        else:
            return

        for _ in range(cursor.screen_rows):
            cursor.move_cursor(step, self.buffer)

    def resize(self, screen_rows: int, screen_columns: int) -> None:
        self.cursor.resize(screen_rows, screen_columns)

    def scroll(self) -> None:
        self.cursor.scroll(self.buffer)

    def visible_rows(self) -> Iterator[Tuple[int, str, List[_TokenType]]]:
        """
        Yield the part of each row that falls inside the viewport.

        Yields:
            Tuples of (file row, render slice, highlight slice)
        """

        cursor = self.cursor
        end_row = min(cursor.row_offset + cursor.screen_rows, self.buffer.number_of_rows())
        start = cursor.column_offset
        end = cursor.column_offset + cursor.screen_columns

        for file_row in range(cursor.row_offset, end_row):
            row = self.buffer.get_row(file_row)
            yield file_row, row.render[start:end], row.highlight[start:end]

    def screen_cursor(self) -> Tuple[int, int]:
        """Get the cursor position relative to the viewport as (x, y)."""

        cursor = self.cursor
        return cursor.render_x - cursor.column_offset, cursor.cursor_y - cursor.row_offset


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lstrip('.')
