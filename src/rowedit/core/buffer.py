"""
Buffer module holding the editable text as a list of rendered rows.
"""

from typing import List, Optional, TYPE_CHECKING

from pygments.token import _TokenType

from .syntax import HighlightType

if TYPE_CHECKING:
    from .syntax import SyntaxHighlighter

DEFAULT_TAB_STOP = 4


class Row:
    """A single line of text with its tab-expanded render and highlight tags."""

    def __init__(self, row_content: str = '', tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.row_content = row_content
        self.tab_stop = tab_stop
        self.render = ''
        self.highlight: List[_TokenType] = []
        self.continuation = False
        self.render_row()
        self.highlight = [HighlightType.NORMAL] * len(self.render)

    def __repr__(self) -> str:
        return f"Row({self.row_content!r})"

    def render_row(self) -> None:
        """Rebuild ``render`` by expanding tabs to the next tab stop."""

        render = []
        index = 0
        for c in self.row_content:
            index += 1
            if c != '\t':
                render.append(c)
                continue

            render.append(' ')
            while index % self.tab_stop != 0:
                render.append(' ')
                index += 1

        self.render = ''.join(render)

    def get_row_content_x(self, render_x: int) -> int:
        """Map a render column back to the logical column that covers it."""

        current_render_x = 0
        for cursor_x, c in enumerate(self.row_content):
            if c == '\t':
                current_render_x += (self.tab_stop - 1) - (current_render_x % self.tab_stop)
            current_render_x += 1
            if current_render_x > render_x:
                return cursor_x

        return len(self.row_content)

    def insert_character(self, at: int, character: str) -> None:
        if not 0 <= at <= len(self.row_content):
            raise IndexError(f"insert at {at} outside row of length {len(self.row_content)}")

        self.row_content = self.row_content[:at] + character + self.row_content[at:]
        self.render_row()

    def delete_character(self, at: int) -> None:
        if not 0 <= at < len(self.row_content):
            raise IndexError(f"delete at {at} outside row of length {len(self.row_content)}")

        self.row_content = self.row_content[:at] + self.row_content[at + 1:]
        self.render_row()


class Buffer:
    """Ordered rows of a single file plus its identity and dirty state."""

    def __init__(self, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.rows: List[Row] = []
        self.filename: Optional[str] = None
        self.file_size: Optional[int] = None
        self.dirty = False
        self.tab_stop = tab_stop
        self.syntax: Optional['SyntaxHighlighter'] = None

    @classmethod
    def from_lines(cls, lines: List[str], filename: Optional[str] = None,
                   file_size: Optional[int] = None, tab_stop: int = DEFAULT_TAB_STOP,
                   syntax: Optional['SyntaxHighlighter'] = None) -> 'Buffer':
        """Create a clean buffer from a loaded list of lines."""

        buf = cls(tab_stop)
        buf.filename = filename
        buf.file_size = file_size
        buf.rows = [Row(line, tab_stop) for line in lines]
        buf.set_syntax(syntax)
        return buf

    def lines(self) -> List[str]:
        """Get the buffer contents for saving."""

        return [row.row_content for row in self.rows]

    def number_of_rows(self) -> int:
        return len(self.rows)

    def get_row(self, at: int) -> Row:
        return self.rows[at]

    def get_render(self, at: int) -> str:
        return self.rows[at].render

    def set_syntax(self, syntax: Optional['SyntaxHighlighter']) -> None:
        """Activate a highlighter (or none) and re-highlight every row."""

        self.syntax = syntax
        if syntax is not None:
            syntax.highlight_all(self.rows)
            return

        for row in self.rows:
            row.highlight = [HighlightType.NORMAL] * len(row.render)
            row.continuation = False

    def insert_row(self, at: int, contents: str = '') -> None:
        """Insert a new row at ``at``; ``at == number_of_rows()`` appends."""

        if not 0 <= at <= len(self.rows):
            raise IndexError(f"row {at} outside buffer of {len(self.rows)} rows")

        row = Row(contents, self.tab_stop)
        row.continuation = at > 0 and self.rows[at - 1].continuation
        self.rows.insert(at, row)
        self._update_syntax(at)
        self.dirty = True

    def insert_character(self, index: int, at: int, character: str) -> None:
        self.rows[index].insert_character(at, character)
        self._update_syntax(index)
        self.dirty = True

    def delete_character(self, index: int, at: int) -> None:
        self.rows[index].delete_character(at)
        self._update_syntax(index)
        self.dirty = True

    def split_row(self, index: int, at: int) -> None:
        """Cut row ``index`` at column ``at`` and move the remainder to a new row below."""

        row = self.rows[index]
        if not 0 <= at <= len(row.row_content):
            raise IndexError(f"split at {at} outside row of length {len(row.row_content)}")

        remainder = Row(row.row_content[at:], self.tab_stop)
        remainder.continuation = row.continuation
        row.row_content = row.row_content[:at]
        row.render_row()
        self.rows.insert(index + 1, remainder)

        self._update_syntax(index)
        self._update_syntax(index + 1)
        self.dirty = True

    def join_row(self, index: int) -> None:
        """Append row ``index`` onto the row above it and remove it."""

        if index == 0:
            return

        current = self.rows.pop(index)
        previous = self.rows[index - 1]
        previous.row_content += current.row_content
        previous.continuation = current.continuation
        previous.render_row()

        self._update_syntax(index - 1)
        self.dirty = True

    def _update_syntax(self, at: int) -> None:
        if self.syntax is not None:
            self.syntax.update_syntax(at, self.rows)
            return

        row = self.rows[at]
        row.highlight = [HighlightType.NORMAL] * len(row.render)
