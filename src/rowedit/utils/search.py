"""
Incremental search over the rendered rows of the editor.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pygments.token import _TokenType

from ..core.editor import Editor
from ..core.keys import Key
from ..core.syntax import HighlightType
from .logging_config import logger


@dataclass
class SearchResult:
    """A match position in render coordinates plus the logical column."""
    row: int
    render_x: int
    cursor_x: int
    length: int


class SearchEngine:
    """
    Direction-aware incremental search with a reversible highlight overlay.

    Up/Down repeat the search on the previous/next matching row, Left/Right
    look for the previous/next occurrence starting from the last match. Any
    other key restarts an undirected scan from the top.
    """

    def __init__(self, editor: Editor) -> None:
        self.editor = editor
        self.last_match: Optional[Tuple[int, int]] = None
        self.x_direction: Optional[int] = None
        self.y_direction: Optional[int] = None
        self.saved_highlight: Optional[Tuple[int, List[_TokenType]]] = None

    def reset(self) -> None:
        self.restore_highlight()
        self.last_match = None
        self.x_direction = None
        self.y_direction = None

    def restore_highlight(self) -> None:
        """Put back the tags the last match overwrote."""

        if self.saved_highlight is None:
            return

        index, highlight = self.saved_highlight
        self.saved_highlight = None
        if index < self.editor.buffer.number_of_rows():
            self.editor.buffer.get_row(index).highlight = highlight

    def on_key(self, query: str, key: Key) -> Optional[SearchResult]:
        """
        Update the search after a key press in the search prompt.

        Args:
            query: The current search text
            key: The key that triggered the update

        Returns:
            The new match, or None if nothing was found or the search ended
        """

        self.restore_highlight()

        if key in (Key.ENTER, Key.ESCAPE):
            self.reset()
            return None

        x_direction, y_direction = self.directions_for(key)

        if not query:
            return None

        result = self.find(query, x_direction, y_direction)
        if result is None:
            logger.debug("No match for '%s'", query)
            return None

        self._accept(result, x_direction, y_direction)
        return result

    def directions_for(self, key: Key) -> Tuple[Optional[int], Optional[int]]:
        """Map a key to ``(x_direction, y_direction)`` without touching the state."""

        if self.last_match is None:
            return None, None

        if key in (Key.UP, Key.DOWN):
            return None, -1 if key is Key.UP else 1

        if key in (Key.LEFT, Key.RIGHT):
            return -1 if key is Key.LEFT else 1, None

        return None, None

    def find(self, query: str, x_direction: Optional[int] = None,
             y_direction: Optional[int] = None) -> Optional[SearchResult]:
        """Scan the rows for ``query`` in the given direction, relative to the last match."""

        buffer = self.editor.buffer
        number_of_rows = buffer.number_of_rows()
        if number_of_rows == 0:
            return None

        directed = x_direction is not None or y_direction is not None
        anchor_row, anchor_x = self.last_match if directed and self.last_match else (0, -1)

        if y_direction is not None:
            step = y_direction
            current = anchor_row + step
        else:
            step = -1 if x_direction == -1 else 1
            current = anchor_row

        for _ in range(number_of_rows):
            current %= number_of_rows
            render = buffer.get_render(current)
            last_x = anchor_x if current == anchor_row else None
            index = self._find_in_row(render, query, x_direction, last_x)
            if index >= 0:
                row = buffer.get_row(current)
                return SearchResult(current, index, row.get_row_content_x(index), len(query))
            current += step

        return None

    @staticmethod
    def _find_in_row(render: str, query: str, x_direction: Optional[int],
                     last_x: Optional[int]) -> int:
        if x_direction is None:
            return render.find(query)

        if x_direction > 0:
            start = last_x + 1 if last_x is not None else 0
            return render.find(query, start)

        if last_x is None:
            return render.rfind(query)

        if last_x <= 0:
            return -1

        return render.rfind(query, 0, last_x + len(query) - 1)

    def _accept(self, result: SearchResult, x_direction: Optional[int],
                y_direction: Optional[int]) -> None:
        editor = self.editor
        self.x_direction = x_direction
        self.y_direction = y_direction
        row = editor.buffer.get_row(result.row)

        self.saved_highlight = (result.row, list(row.highlight))
        end = result.render_x + result.length
        row.highlight[result.render_x:end] = [HighlightType.SEARCH_MATCH] * (end - result.render_x)

        self.last_match = (result.row, result.render_x)
        editor.cursor.cursor_y = result.row
        editor.cursor.cursor_x = result.cursor_x
        editor.cursor.row_offset = editor.buffer.number_of_rows()
