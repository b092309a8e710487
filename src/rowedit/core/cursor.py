"""
Cursor and viewport bookkeeping.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .buffer import Buffer, Row
from .keys import Key


@dataclass
class CursorController:
    """Logical cursor position plus the scroll window that keeps it visible."""
    screen_rows: int
    screen_columns: int
    cursor_x: int = 0
    cursor_y: int = 0
    row_offset: int = 0
    column_offset: int = 0
    render_x: int = 0

    def copy(self) -> 'CursorController':
        return replace(self)

    def resize(self, screen_rows: int, screen_columns: int) -> None:
        self.screen_rows = max(1, screen_rows)
        self.screen_columns = max(1, screen_columns)

    def get_render_x(self, row: Row, cursor_x: Optional[int] = None) -> int:
        """
        Get the render column of a logical column in ``row``.

        Args:
            row: Row the cursor is on
            cursor_x: Logical column, defaults to the cursor's own column

        Returns:
            The 0-based column after tab expansion
        """

        if cursor_x is None:
            cursor_x = self.cursor_x

        render_x = 0
        for c in row.row_content[:cursor_x]:
            if c == '\t':
                render_x += (row.tab_stop - 1) - (render_x % row.tab_stop)
            render_x += 1

        return render_x

    def scroll(self, buffer: Buffer) -> None:
        """Adjust the offsets by the smallest amount that keeps the cursor on screen."""

        self.render_x = 0
        if self.cursor_y < buffer.number_of_rows():
            self.render_x = self.get_render_x(buffer.get_row(self.cursor_y))

        self.row_offset = min(self.row_offset, self.cursor_y)
        if self.cursor_y >= self.row_offset + self.screen_rows:
            self.row_offset = self.cursor_y - self.screen_rows + 1

        self.column_offset = min(self.column_offset, self.render_x)
        if self.render_x >= self.column_offset + self.screen_columns:
            self.column_offset = self.render_x - self.screen_columns + 1

    def move_cursor(self, direction: Key, buffer: Buffer) -> None:
        """Move one step in ``direction``, clamping at the buffer edges."""

        number_of_rows = buffer.number_of_rows()

        if direction is Key.UP:
            self.cursor_y = max(0, self.cursor_y - 1)
        elif direction is Key.DOWN:
            if self.cursor_y < number_of_rows:
                self.cursor_y += 1
        elif direction is Key.LEFT:
            if self.cursor_x != 0:
                self.cursor_x -= 1
            elif self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = len(buffer.get_row(self.cursor_y).row_content)
        elif direction is Key.RIGHT:
            if self.cursor_y < number_of_rows:
                row_length = len(buffer.get_row(self.cursor_y).row_content)
                if self.cursor_x < row_length:
                    self.cursor_x += 1
                elif self.cursor_x == row_length:
                    self.cursor_y += 1
                    self.cursor_x = 0
        elif direction is Key.END:
            if self.cursor_y < number_of_rows:
                self.cursor_x = len(buffer.get_row(self.cursor_y).row_content)
        elif direction is Key.HOME:
            self.cursor_x = 0
        else:
            return

        row_length = 0
        if self.cursor_y < number_of_rows:
            row_length = len(buffer.get_row(self.cursor_y).row_content)
        self.cursor_x = min(self.cursor_x, row_length)
