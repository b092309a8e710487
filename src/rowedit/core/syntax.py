"""
Syntax highlighting module for the editor.

Languages are described as plain data (``SyntaxDefinition``) and highlighted
by one generic routine. Highlight tags are Pygments token types, so the
renderer can map them to colors the same way for every language.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Final, List, Optional, Sequence, Tuple, TYPE_CHECKING

from pygments.lexers import find_lexer_class_for_filename
from pygments.token import Token, _TokenType

from ..utils.logging_config import logger

if TYPE_CHECKING:
    from .buffer import Row


class HighlightType:
    """Highlight tags shared by every language."""
    NORMAL: Final = Token.Text
    NUMBER: Final = Token.Literal.Number
    SEARCH_MATCH: Final = Token.Generic.SearchMatch
    DOUBLE_QUOTE_STRING: Final = Token.Literal.String.Double
    SINGLE_QUOTE_STRING: Final = Token.Literal.String.Single
    COMMENT: Final = Token.Comment.Single
    MULTILINE_COMMENT: Final = Token.Comment.Multiline


SEPARATORS: Final[FrozenSet[str]] = frozenset(',.()+-/*=~%<>"\';&')

DEFAULT_COLORS: Final[Dict[_TokenType, str]] = {
    HighlightType.NORMAL: 'default',
    HighlightType.NUMBER: 'cyan',
    HighlightType.SEARCH_MATCH: 'blue',
    HighlightType.DOUBLE_QUOTE_STRING: 'green',
    HighlightType.SINGLE_QUOTE_STRING: 'yellow',
    HighlightType.COMMENT: 'grey',
    HighlightType.MULTILINE_COMMENT: 'grey',
}


@dataclass(frozen=True)
class SyntaxDefinition:
    """Declarative description of a language's highlighting rules."""
    file_type: str
    extensions: Tuple[str, ...]
    comment_start: str
    keywords: Tuple[Tuple[_TokenType, Tuple[str, ...]], ...] = ()
    multiline_comment: Optional[Tuple[str, str]] = None
    aliases: Tuple[str, ...] = ()
    separators: FrozenSet[str] = SEPARATORS
    colors: Dict[_TokenType, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.comment_start:
            raise ValueError(f"{self.file_type}: line comment marker must not be empty")

        for tag, words in self.keywords:
            if not words or any(not word for word in words):
                raise ValueError(f"{self.file_type}: empty keyword in group {tag}")

        if self.multiline_comment is not None:
            start, end = self.multiline_comment
            if not start or not end:
                raise ValueError(f"{self.file_type}: block comment markers must not be empty")

    def is_separator(self, c: str) -> bool:
        return c.isspace() or c in self.separators


class SyntaxHighlighter:
    """Tokenizes rows of a buffer according to one ``SyntaxDefinition``."""

    def __init__(self, definition: SyntaxDefinition) -> None:
        self.definition = definition
        self.colors = {**DEFAULT_COLORS, **definition.colors}

    @property
    def file_type(self) -> str:
        return self.definition.file_type

    def update_syntax(self, at: int, rows: List['Row']) -> None:
        """
        Re-highlight row ``at`` and every following row whose block comment
        state flips as a consequence.

        Args:
            at: Index of the row that changed
            rows: All rows of the buffer
        """

        index = at
        while index < len(rows):
            if not self.highlight_row(index, rows):
                break
            index += 1

    def highlight_all(self, rows: List['Row']) -> None:
        """Highlight every row in order, seeding each from its predecessor."""

        for index in range(len(rows)):
            self.highlight_row(index, rows)

    def highlight_row(self, at: int, rows: List['Row']) -> bool:
        """
        Rebuild the highlight of a single row.

        Returns:
            True if the row's continuation flag changed
        """

        definition = self.definition
        row = rows[at]
        render = row.render
        length = len(render)
        highlight: List[_TokenType] = []

        in_comment = at > 0 and rows[at - 1].continuation
        in_string: Optional[str] = None
        previous_separator = True
        comment_start = definition.comment_start
        i = 0

        while i < length:
            c = render[i]
            previous_highlight = highlight[i - 1] if i > 0 else HighlightType.NORMAL

            if in_string is None and comment_start and not in_comment:
                if render.startswith(comment_start, i):
                    highlight.extend([HighlightType.COMMENT] * (length - i))
                    break

            if definition.multiline_comment is not None and in_string is None:
                start, end = definition.multiline_comment
                if in_comment:
                    highlight.append(HighlightType.MULTILINE_COMMENT)
                    if render.startswith(end, i):
                        highlight.extend([HighlightType.MULTILINE_COMMENT] * (len(end) - 1))
                        i += len(end)
                        previous_separator = True
                        in_comment = False
                        continue

                    i += 1
                    continue

                if render.startswith(start, i):
                    highlight.extend([HighlightType.MULTILINE_COMMENT] * len(start))
                    i += len(start)
                    in_comment = True
                    continue

            if in_string is not None:
                tag = _string_tag(in_string)
                highlight.append(tag)
                if c == '\\' and i + 1 < length:
                    highlight.append(tag)
                    i += 2
                    continue

                if c == in_string:
                    in_string = None
                i += 1
                previous_separator = True
                continue

            # A quote with no partner later in the row is plain text.
            if c in ('"', "'") and previous_separator and c in render[i + 1:]:
                in_string = c
                highlight.append(_string_tag(c))
                i += 1
                continue

            if ((c.isdigit() and (previous_separator or previous_highlight == HighlightType.NUMBER))
                    or (c == '.' and previous_highlight == HighlightType.NUMBER)):
                highlight.append(HighlightType.NUMBER)
                i += 1
                previous_separator = False
                continue

            if previous_separator:
                matched = self._match_keyword(render, i)
                if matched is not None:
                    tag, word = matched
                    highlight.extend([tag] * len(word))
                    i += len(word)
                    previous_separator = False
                    continue

            highlight.append(HighlightType.NORMAL)
            previous_separator = definition.is_separator(c)
            i += 1

        assert len(highlight) == length, f"highlight/render mismatch on row {at}"
        row.highlight = highlight

        changed = row.continuation != in_comment
        row.continuation = in_comment
        return changed

    def _match_keyword(self, render: str, i: int) -> Optional[Tuple[_TokenType, str]]:
        """Find the first keyword that starts at ``i`` and ends on a separator."""

        for tag, words in self.definition.keywords:
            for word in words:
                end = i + len(word)
                if end < len(render):
                    bounded = self.definition.is_separator(render[end])
                else:
                    bounded = end == len(render)

                if bounded and render.startswith(word, i):
                    return tag, word

        return None

    def color_for(self, tag: _TokenType) -> str:
        """Get the color name for a highlight tag, walking up the token tree."""

        while tag is not None:
            if tag in self.colors:
                return self.colors[tag]
            tag = tag.parent

        return self.colors[HighlightType.NORMAL]


def _string_tag(quote: str) -> _TokenType:
    if quote == '"':
        return HighlightType.DOUBLE_QUOTE_STRING

    return HighlightType.SINGLE_QUOTE_STRING


RUST: Final = SyntaxDefinition(
    file_type='Rust',
    extensions=('rs',),
    aliases=('rust', 'rs'),
    comment_start='//',
    multiline_comment=('/*', '*/'),
    keywords=(
        (Token.Keyword, (
            'mod', 'unsafe', 'extern', 'crate', 'use', 'type', 'struct', 'enum', 'union',
            'const', 'static', 'mut', 'let', 'if', 'else', 'impl', 'trait', 'for', 'fn',
            'self', 'Self', 'while', 'true', 'false', 'in', 'continue', 'break', 'loop',
            'match',
        )),
        (Token.Keyword.Type, (
            'isize', 'i8', 'i16', 'i32', 'i64', 'usize', 'u8', 'u16', 'u32', 'u64',
            'f32', 'f64', 'char', 'str', 'bool',
        )),
    ),
    colors={Token.Keyword: 'red', Token.Keyword.Type: 'default'},
)

JAVASCRIPT: Final = SyntaxDefinition(
    file_type='JavaScript',
    extensions=('js',),
    aliases=('javascript', 'js'),
    comment_start='//',
    multiline_comment=('/*', '*/'),
    keywords=(
        (Token.Keyword, (
            'abstract', 'arguments', 'await', 'boolean', 'break', 'byte', 'case', 'catch',
            'char', 'class', 'const', 'continue', 'debugger', 'default', 'delete', 'do',
            'double', 'else', 'enum', 'eval', 'export', 'extends', 'false', 'final',
            'finally', 'float', 'for', 'function', 'goto', 'if', 'implements', 'import',
            'in', 'instanceof', 'int', 'interface', 'let', 'long', 'native', 'new', 'null',
            'package', 'private', 'protected', 'public', 'return', 'short', 'static',
            'super', 'switch', 'synchronized', 'this', 'throw', 'throws', 'transient',
            'true', 'try', 'typeof', 'var', 'void', 'volatile', 'while', 'with', 'yield',
        )),
        (Token.Keyword.Type, (
            'Undefined', 'Null', 'Boolean', 'Number', 'String', 'Symbol', 'Object',
        )),
    ),
    colors={
        Token.Keyword: 'yellow',
        Token.Keyword.Type: 'default',
        HighlightType.DOUBLE_QUOTE_STRING: 'red',
    },
)

SHELL: Final = SyntaxDefinition(
    file_type='Shell',
    extensions=('sh',),
    aliases=('bash', 'sh', 'shell'),
    comment_start='#',
    keywords=(
        (Token.Keyword, (
            'if', 'then', 'else', 'elif', 'fi', 'case', 'esac', 'for', 'while', 'until',
            'do', 'done', 'in', 'function', 'return', 'exit', 'break', 'continue',
            'declare', 'local', 'export', 'readonly', 'eval', 'shift', 'source', 'trap',
            'test', 'true', 'false', 'unset', 'alias', 'command', 'type',
        )),
        (Token.Name.Builtin, (
            'echo', 'printf', 'read', 'cd', 'pwd', 'ls', 'cat', 'grep', 'sed', 'awk',
            'cut', 'find', 'sort', 'wc', 'mkdir', 'rm', 'mv', 'cp', 'touch', 'chmod',
            'chown', 'chgrp', 'ln', 'tar',
        )),
    ),
    colors={
        Token.Keyword: 'yellow',
        Token.Name.Builtin: 'yellow',
        HighlightType.DOUBLE_QUOTE_STRING: 'magenta',
    },
)

PYTHON: Final = SyntaxDefinition(
    file_type='Python',
    extensions=('py', 'pyw'),
    aliases=('python', 'py', 'python3'),
    comment_start='#',
    keywords=(
        (Token.Keyword, (
            'and', 'as', 'assert', 'async', 'await', 'break', 'class', 'continue', 'def',
            'del', 'elif', 'else', 'except', 'finally', 'for', 'from', 'global', 'if',
            'import', 'in', 'is', 'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise',
            'return', 'try', 'while', 'with', 'yield', 'None', 'True', 'False',
        )),
        (Token.Name.Builtin, (
            'int', 'str', 'float', 'bool', 'list', 'dict', 'set', 'tuple', 'bytes',
            'len', 'print', 'range', 'self',
        )),
    ),
    colors={Token.Keyword: 'magenta', Token.Name.Builtin: 'cyan'},
)

C: Final = SyntaxDefinition(
    file_type='C',
    extensions=('c', 'h'),
    aliases=('c',),
    comment_start='//',
    multiline_comment=('/*', '*/'),
    keywords=(
        (Token.Keyword, (
            'switch', 'if', 'while', 'for', 'break', 'continue', 'return', 'else',
            'struct', 'union', 'typedef', 'static', 'enum', 'case', 'default', 'do',
            'goto', 'sizeof', 'extern', 'const', 'volatile',
        )),
        (Token.Keyword.Type, (
            'int', 'long', 'double', 'float', 'char', 'unsigned', 'signed', 'void',
            'short',
        )),
    ),
    colors={Token.Keyword: 'yellow', Token.Keyword.Type: 'green'},
)

PLAIN_TEXT: Final = SyntaxDefinition(
    file_type='Plain Text',
    extensions=('txt',),
    aliases=('text',),
    comment_start='~',
    colors={HighlightType.DOUBLE_QUOTE_STRING: 'red'},
)

LANGUAGES: Final[Sequence[SyntaxDefinition]] = (RUST, JAVASCRIPT, SHELL, PYTHON, C, PLAIN_TEXT)


def select_syntax(extension: str,
                  languages: Sequence[SyntaxDefinition] = LANGUAGES) -> Optional[SyntaxHighlighter]:
    """
    Pick a highlighter for a file extension.

    Registered extensions win. Otherwise Pygments' lexer registry is asked which
    language the extension belongs to, and its aliases are matched against ours.

    Args:
        extension: File extension without the leading dot
        languages: Candidate definitions

    Returns:
        A highlighter, or None if nothing matches
    """

    extension = extension.lstrip('.').lower()
    if not extension:
        return None

    for definition in languages:
        if extension in definition.extensions:
            return SyntaxHighlighter(definition)

    lexer_class = find_lexer_class_for_filename(f"file.{extension}")
    if lexer_class is None:
        logger.debug("No highlighter for extension '%s'", extension)
        return None

    lexer_aliases = set(lexer_class.aliases)
    for definition in languages:
        if lexer_aliases.intersection(definition.aliases):
            logger.debug("Extension '%s' resolved to %s via %s",
                         extension, definition.file_type, lexer_class.name)
            return SyntaxHighlighter(definition)

    return None
