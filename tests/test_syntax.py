"""Tests for the incremental syntax highlighter."""

import pytest
from pygments.token import Token

from rowedit.core.buffer import Buffer, Row
from rowedit.core.syntax import (
    C,
    HighlightType,
    PLAIN_TEXT,
    RUST,
    SyntaxDefinition,
    SyntaxHighlighter,
    select_syntax,
)

ML = HighlightType.MULTILINE_COMMENT
N = HighlightType.NORMAL


def highlight(text, definition=RUST):
    rows = [Row(text)]
    SyntaxHighlighter(definition).update_syntax(0, rows)
    return rows[0].highlight


class TestTokens:
    """Single-row tokenization."""

    def test_keyword_needs_separator_after(self):
        assert highlight("iffy") == [N] * 4

    def test_keyword_before_paren(self):
        assert highlight("if(") == [Token.Keyword, Token.Keyword, N]

    def test_keyword_at_end_of_row(self):
        assert highlight("x if") == [N, N, Token.Keyword, Token.Keyword]

    def test_keyword_needs_separator_before(self):
        assert highlight("xif") == [N] * 3

    def test_type_keyword_group(self):
        tags = highlight("x as u8")
        assert tags[5:] == [Token.Keyword.Type] * 2

    def test_let_statement(self):
        tags = highlight("let x = 5;")
        assert tags[:3] == [Token.Keyword] * 3
        assert tags[8] == HighlightType.NUMBER
        assert tags[9] == N

    def test_decimal_number(self):
        assert highlight("3.14") == [HighlightType.NUMBER] * 4

    def test_digit_inside_identifier_is_plain(self):
        assert highlight("x1") == [N, N]

    def test_double_quoted_string_with_escape(self):
        tags = highlight('"a\\"b" c')
        assert tags[:6] == [HighlightType.DOUBLE_QUOTE_STRING] * 6
        assert tags[6:] == [N, N]

    def test_single_quoted_string(self):
        assert highlight("'x'") == [HighlightType.SINGLE_QUOTE_STRING] * 3

    def test_quote_after_identifier_does_not_open_string(self):
        assert highlight("don't") == [N] * 5

    def test_unmatched_quote_stays_plain(self):
        tags = highlight("rock 'n roll", PLAIN_TEXT)
        assert HighlightType.SINGLE_QUOTE_STRING not in tags
        assert tags == [N] * 12

    def test_unmatched_quote_before_closed_string(self):
        tags = highlight("' \"ab\"")
        assert tags[0] == N
        assert tags[2:] == [HighlightType.DOUBLE_QUOTE_STRING] * 4

    def test_line_comment(self):
        assert highlight("x // hi") == [N, N] + [HighlightType.COMMENT] * 5

    def test_line_comment_marker_inside_string(self):
        assert highlight('"//"') == [HighlightType.DOUBLE_QUOTE_STRING] * 4

    def test_inline_block_comment(self):
        tags = highlight("a /* b */ c")
        assert tags[:2] == [N, N]
        assert tags[2:9] == [ML] * 7
        assert tags[9:] == [N, N]

    def test_empty_row(self):
        assert highlight("") == []

    def test_language_without_block_comments(self):
        assert highlight("/* x", PLAIN_TEXT) == [N] * 4

    def test_highlight_matches_tab_expanded_render(self):
        row = Row("\tif x", tab_stop=4)
        SyntaxHighlighter(RUST).update_syntax(0, [row])
        assert len(row.highlight) == len(row.render) == 8
        assert row.highlight[4:6] == [Token.Keyword] * 2


class TestBlockCommentPropagation:
    """Cross-row continuation of block comments."""

    LINES = ["/* start", "middle", "end */ code"]

    def test_highlighting_first_row_propagates(self):
        rows = [Row(line) for line in self.LINES]
        SyntaxHighlighter(RUST).update_syntax(0, rows)

        assert rows[0].highlight == [ML] * 8
        assert rows[1].highlight == [ML] * 6
        assert rows[2].highlight[:6] == [ML] * 6
        assert ML not in rows[2].highlight[6:]
        assert [row.continuation for row in rows] == [True, True, False]

    def test_removing_opener_clears_following_rows(self):
        buf = Buffer.from_lines(self.LINES, syntax=SyntaxHighlighter(RUST))
        buf.delete_character(0, 0)

        assert buf.get_row(0).row_content == "* start"
        assert ML not in buf.get_row(1).highlight
        assert ML not in buf.get_row(2).highlight
        assert not any(row.continuation for row in buf.rows)

    def test_adding_opener_comments_following_rows(self):
        buf = Buffer.from_lines(["start", "middle", "end */ code"], syntax=SyntaxHighlighter(RUST))
        assert ML not in buf.get_row(1).highlight

        buf.insert_character(0, 0, "*")
        buf.insert_character(0, 0, "/")

        assert buf.get_row(1).highlight == [ML] * 6
        assert buf.get_row(2).continuation is False

    def test_propagation_stops_when_state_is_unchanged(self):
        rows = [Row(line) for line in ["/* a", "b", "c */", "d"]]
        highlighter = SyntaxHighlighter(RUST)
        highlighter.highlight_all(rows)
        rows[3].highlight = ["sentinel"]

        rows[1].row_content = "bb"
        rows[1].render_row()
        highlighter.update_syntax(1, rows)

        assert rows[3].highlight == ["sentinel"]

    def test_long_unterminated_comment_does_not_recurse(self):
        rows = [Row("/*")] + [Row("x") for _ in range(5000)]
        SyntaxHighlighter(RUST).update_syntax(0, rows)
        assert rows[-1].continuation is True
        assert rows[-1].highlight == [ML]

    def test_split_inside_comment_highlights_new_row(self):
        buf = Buffer.from_lines(["/* ab */ x"], syntax=SyntaxHighlighter(RUST))
        buf.split_row(0, 4)
        assert buf.get_row(0).continuation is True
        assert buf.get_row(1).highlight[:4] == [ML] * 4
        assert buf.get_row(1).continuation is False


class TestDefinitions:
    """Language table validation and selection."""

    def test_empty_keyword_rejected(self):
        with pytest.raises(ValueError):
            SyntaxDefinition(file_type="Bad", extensions=("bad",), comment_start="#",
                             keywords=((Token.Keyword, ("ok", "")),))

    def test_empty_line_comment_marker_rejected(self):
        with pytest.raises(ValueError):
            SyntaxDefinition(file_type="Bad", extensions=("bad",), comment_start="")

    def test_empty_block_marker_rejected(self):
        with pytest.raises(ValueError):
            SyntaxDefinition(file_type="Bad", extensions=("bad",), comment_start="#",
                             multiline_comment=("/*", ""))

    def test_select_registered_extension(self):
        assert select_syntax("rs").file_type == "Rust"
        assert select_syntax(".py").file_type == "Python"
        assert select_syntax("h").definition is C

    def test_select_via_lexer_registry(self):
        assert select_syntax("bash").file_type == "Shell"
        assert select_syntax("mjs").file_type == "JavaScript"

    def test_unknown_extension(self):
        assert select_syntax("definitelynotanextension") is None
        assert select_syntax("") is None

    def test_color_lookup(self):
        highlighter = SyntaxHighlighter(RUST)
        assert highlighter.color_for(Token.Keyword) == "red"
        assert highlighter.color_for(HighlightType.SEARCH_MATCH) == "blue"
        assert highlighter.color_for(Token.Name.Builtin) == "default"
