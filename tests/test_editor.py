"""Tests for the edit session."""

from rowedit.core.editor import Editor, StatusMessage
from rowedit.core.keys import Key
from rowedit.core.syntax import HighlightType


def make_editor(lines=None, filename=None, screen_rows=10, screen_columns=20):
    editor = Editor(screen_rows=screen_rows, screen_columns=screen_columns, tab_stop=4)
    if lines is not None:
        editor.load(lines, filename)
    return editor


class TestEditing:
    """Cursor-relative edit operations."""

    def test_typing_into_empty_buffer_creates_row(self):
        editor = make_editor()
        editor.insert_character("a")
        editor.insert_character("b")
        assert editor.lines() == ["ab"]
        assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == (0, 2)
        assert editor.dirty is True

    def test_newline_splits_row(self):
        editor = make_editor(["hello"])
        editor.cursor.cursor_x = 2
        editor.insert_newline()
        assert editor.lines() == ["he", "llo"]
        assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == (1, 0)

    def test_newline_at_column_zero(self):
        editor = make_editor(["hello"])
        editor.insert_newline()
        assert editor.lines() == ["", "hello"]

    def test_newline_on_append_position(self):
        editor = make_editor(["a"])
        editor.cursor.cursor_y = 1
        editor.insert_newline()
        assert editor.lines() == ["a", ""]
        assert editor.cursor.cursor_y == 2

    def test_backspace_deletes_left(self):
        editor = make_editor(["abc"])
        editor.cursor.cursor_x = 2
        editor.delete_character()
        assert editor.lines() == ["ac"]
        assert editor.cursor.cursor_x == 1

    def test_backspace_at_column_zero_joins(self):
        editor = make_editor(["ab", "cd"])
        editor.cursor.cursor_y = 1
        editor.delete_character()
        assert editor.lines() == ["abcd"]
        assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == (0, 2)

    def test_backspace_at_buffer_start_is_noop(self):
        editor = make_editor(["ab"])
        editor.delete_character()
        assert editor.lines() == ["ab"]
        assert editor.dirty is False

    def test_backspace_on_append_position_is_noop(self):
        editor = make_editor(["ab"])
        editor.cursor.cursor_y = 1
        editor.delete_character()
        assert editor.lines() == ["ab"]

    def test_load_selects_syntax_from_filename(self):
        editor = make_editor(["fn main() {}"], filename="main.rs")
        assert editor.syntax.file_type == "Rust"
        assert editor.dirty is False

    def test_load_unknown_extension_has_no_syntax(self):
        editor = make_editor(["x"], filename="notes.definitelyunknown")
        assert editor.syntax is None

    def test_set_syntax_for_rehighlights(self):
        editor = make_editor(["// hi"])
        assert HighlightType.COMMENT not in editor.buffer.get_row(0).highlight
        editor.set_syntax_for("a.js")
        assert editor.buffer.get_row(0).highlight == [HighlightType.COMMENT] * 5

    def test_mark_saved(self):
        editor = make_editor(["a"])
        editor.insert_character("b")
        editor.mark_saved("out.txt", 2)
        assert editor.dirty is False
        assert editor.buffer.filename == "out.txt"
        assert editor.buffer.file_size == 2


class TestPaging:
    """PageUp/PageDown."""

    def test_page_down_moves_a_screen(self):
        editor = make_editor([str(i) for i in range(50)], screen_rows=10)
        editor.page(Key.PAGE_DOWN)
        assert editor.cursor.cursor_y == 19

    def test_page_up_from_middle(self):
        editor = make_editor([str(i) for i in range(50)], screen_rows=10)
        editor.cursor.cursor_y = 30
        editor.cursor.row_offset = 25
        editor.page(Key.PAGE_UP)
        assert editor.cursor.cursor_y == 15

    def test_page_down_clamps_at_append_position(self):
        editor = make_editor(["a", "b"], screen_rows=10)
        editor.page(Key.PAGE_DOWN)
        assert editor.cursor.cursor_y == 2


class TestFrame:
    """Per-frame output."""

    def test_visible_rows_follow_viewport(self):
        editor = make_editor([f"line {i}" for i in range(30)], screen_rows=5, screen_columns=4)
        editor.cursor.cursor_y = 12
        editor.cursor.cursor_x = 6
        editor.scroll()

        rows = list(editor.visible_rows())
        assert [file_row for file_row, _, _ in rows] == [8, 9, 10, 11, 12]
        _, render, highlight = rows[-1]
        assert render == "e 12"
        assert len(highlight) == len(render)
        assert editor.screen_cursor() == (3, 4)

    def test_visible_rows_stop_at_buffer_end(self):
        editor = make_editor(["a", "b"], screen_rows=5)
        editor.scroll()
        assert len(list(editor.visible_rows())) == 2


class TestStatusMessage:
    """Transient status messages."""

    def test_message_is_returned_until_expiry(self):
        message = StatusMessage("hello", timeout=5)
        assert message.get() == "hello"

    def test_message_expires(self):
        message = StatusMessage("hello", timeout=5)
        message.set_time -= 10
        assert message.get() is None
        assert message.text is None

    def test_no_message(self):
        assert StatusMessage().get() is None
