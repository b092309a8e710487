"""Tests for incremental search."""

from rowedit.core.editor import Editor
from rowedit.core.keys import Key
from rowedit.core.syntax import HighlightType
from rowedit.utils.search import SearchEngine


def make_engine(lines, filename=None, tab_stop=4):
    editor = Editor(screen_rows=10, screen_columns=40, tab_stop=tab_stop)
    editor.load(lines, filename)
    return editor, SearchEngine(editor)


class TestDirectionalSearch:
    """Vertical and horizontal repeat."""

    def test_undirected_then_down_then_up(self):
        editor, engine = make_engine(["foo", "foo"])

        result = engine.on_key("foo", Key.CHAR)
        assert (result.row, result.render_x) == (0, 0)

        result = engine.on_key("foo", Key.DOWN)
        assert result.row == 1
        assert editor.cursor.cursor_y == 1

        result = engine.on_key("foo", Key.UP)
        assert result.row == 0
        assert editor.cursor.cursor_y == 0

    def test_down_wraps_around(self):
        editor, engine = make_engine(["foo", "bar", "foo"])
        engine.on_key("foo", Key.CHAR)
        engine.on_key("foo", Key.DOWN)
        assert editor.cursor.cursor_y == 2

        result = engine.on_key("foo", Key.DOWN)
        assert result.row == 0

    def test_right_and_left_within_row(self):
        editor, engine = make_engine(["foo foo"])
        engine.on_key("foo", Key.CHAR)

        result = engine.on_key("foo", Key.RIGHT)
        assert result.render_x == 4
        assert editor.cursor.cursor_x == 4

        result = engine.on_key("foo", Key.LEFT)
        assert result.render_x == 0

    def test_right_moves_on_to_next_row(self):
        editor, engine = make_engine(["foo", "a foo"])
        engine.on_key("foo", Key.CHAR)
        result = engine.on_key("foo", Key.RIGHT)
        assert (result.row, result.render_x) == (1, 2)

    def test_query_edit_restarts_from_top(self):
        editor, engine = make_engine(["fo", "foo", "foo"])
        engine.on_key("fo", Key.CHAR)
        engine.on_key("fo", Key.DOWN)
        assert editor.cursor.cursor_y == 1

        result = engine.on_key("foo", Key.CHAR)
        assert result.row == 1


class TestSearchState:
    """Overlay, cursor mapping and no-match behaviour."""

    def test_match_is_overlaid_and_restored(self):
        editor, engine = make_engine(["x foo y", "foo"])
        original = list(editor.buffer.get_row(0).highlight)

        engine.on_key("foo", Key.CHAR)
        assert editor.buffer.get_row(0).highlight[2:5] == [HighlightType.SEARCH_MATCH] * 3

        engine.on_key("foo", Key.DOWN)
        assert editor.buffer.get_row(0).highlight == original
        assert editor.buffer.get_row(1).highlight == [HighlightType.SEARCH_MATCH] * 3

    def test_match_maps_back_through_tabs(self):
        editor, engine = make_engine(["\tfoo"], tab_stop=4)
        result = engine.on_key("foo", Key.CHAR)
        assert result.render_x == 4
        assert editor.cursor.cursor_x == 1

    def test_no_match_leaves_state_unchanged(self):
        editor, engine = make_engine(["foo", "bar"])
        engine.on_key("bar", Key.CHAR)
        cursor_before = (editor.cursor.cursor_y, editor.cursor.cursor_x)

        assert engine.on_key("baz", Key.CHAR) is None
        assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == cursor_before

    def test_directed_miss_keeps_direction_state(self):
        editor, engine = make_engine(["foo", "x", "foo"])
        engine.on_key("foo", Key.CHAR)
        engine.on_key("foo", Key.DOWN)
        assert (engine.x_direction, engine.y_direction) == (None, 1)

        assert engine.on_key("fooz", Key.RIGHT) is None
        assert (engine.x_direction, engine.y_direction) == (None, 1)
        assert engine.last_match == (2, 0)
        assert editor.cursor.cursor_y == 2

    def test_empty_query_does_not_match(self):
        editor, engine = make_engine(["foo"])
        assert engine.on_key("", Key.CHAR) is None

    def test_enter_clears_state_and_keeps_cursor(self):
        editor, engine = make_engine(["a", "foo"])
        engine.on_key("foo", Key.CHAR)

        assert engine.on_key("foo", Key.ENTER) is None
        assert engine.last_match is None
        assert engine.saved_highlight is None
        assert HighlightType.SEARCH_MATCH not in editor.buffer.get_row(1).highlight
        assert editor.cursor.cursor_y == 1

    def test_match_forces_viewport_reclamp(self):
        editor, engine = make_engine([str(i) for i in range(100)] + ["needle"])
        engine.on_key("needle", Key.CHAR)
        editor.scroll()
        assert editor.cursor.row_offset == 100

    def test_empty_buffer(self):
        editor, engine = make_engine([])
        assert engine.on_key("foo", Key.CHAR) is None
