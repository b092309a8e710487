"""
Core package for the editor.

This package implements the text buffer, the incremental syntax highlighter,
the cursor/viewport model and the edit session that ties them together. It
performs no terminal or file I/O.
"""

from .buffer import Buffer, Row
from .cursor import CursorController
from .editor import Editor, StatusMessage
from .keys import Key, KeyEvent
from .syntax import HighlightType, SyntaxDefinition, SyntaxHighlighter, select_syntax

__all__ = [
    'Buffer',
    'Row',
    'CursorController',
    'Editor',
    'StatusMessage',
    'Key',
    'KeyEvent',
    'HighlightType',
    'SyntaxDefinition',
    'SyntaxHighlighter',
    'select_syntax',
]
