"""Input events fed to the form.

Key names are terminal-agnostic strings ("enter", "shift+tab", "ctrl+j", ...);
printable input arrives with key "char" and the typed text in `text`.
"""

from dataclasses import dataclass


NEXT_KEYS = frozenset({'enter', 'tab'})
PREV_KEYS = frozenset({'shift+tab'})
NEWLINE_KEYS = frozenset({'ctrl+j'})


@dataclass(frozen=True)
class KeyEvent:
    """A single keypress."""
    key: str
    text: str = ''

    @classmethod
    def char(cls, text: str) -> 'KeyEvent':
        return cls('char', text)

    @property
    def is_char(self) -> bool:
        return self.key == 'char'

    @property
    def is_next(self) -> bool:
        return self.key in NEXT_KEYS

    @property
    def is_prev(self) -> bool:
        return self.key in PREV_KEYS


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""
    width: int
    height: int


@dataclass(frozen=True)
class InterruptEvent:
    """ctrl+c or a termination signal: stop immediately."""
    reason: str = 'interrupt'
