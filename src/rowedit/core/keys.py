"""
Key event model consumed by the editor core.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, FrozenSet


class Key(Enum):
    """Logical keys the core understands."""
    CHAR = auto()
    ENTER = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    TAB = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()


MOVEMENT_KEYS: Final[FrozenSet[Key]] = frozenset({
    Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT, Key.HOME, Key.END
})


@dataclass(frozen=True)
class KeyEvent:
    """A single key press with its modifiers."""
    key: Key
    char: str = ''
    ctrl: bool = False
    alt: bool = False

    @classmethod
    def of(cls, char: str) -> 'KeyEvent':
        """Build a plain character event."""

        return cls(Key.CHAR, char)

    def is_printable(self) -> bool:
        return self.key is Key.CHAR and not self.ctrl and not self.alt and self.char.isprintable()
