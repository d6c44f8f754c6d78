"""Event Loop - terminal input in, frames out.

One event at a time, in arrival order: resizes recompute the layout, keys go
to the form, interrupts stop everything before anything else is drawn. A
frame is written after any event that changed what's on screen.
"""

import signal
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from commitform.config import Config
from commitform.form.controller import Form
from commitform.form.draft import CommitDraft
from commitform.form.events import InterruptEvent, KeyEvent, ResizeEvent
from commitform.ui.renderer import render
from commitform.ui.theme import Theme

Event = Union[KeyEvent, ResizeEvent, InterruptEvent]

# Raw control characters, checked before blessed's own naming so that
# ctrl+j ('\n') stays distinct from enter ('\r')
CONTROL_CHARS = {
    '\x03': 'ctrl+c',
    '\t': 'tab',
    '\r': 'enter',
    '\n': 'ctrl+j',
    '\x7f': 'backspace',
    '\x08': 'backspace',
    '\x15': 'ctrl+u',
    '\x1b': 'esc',
}

SEQUENCE_NAMES = {
    'KEY_ENTER': 'enter',
    'KEY_TAB': 'tab',
    'KEY_BTAB': 'shift+tab',
    'KEY_UP': 'up',
    'KEY_DOWN': 'down',
    'KEY_LEFT': 'left',
    'KEY_RIGHT': 'right',
    'KEY_HOME': 'home',
    'KEY_END': 'end',
    'KEY_BACKSPACE': 'backspace',
    'KEY_DELETE': 'backspace',
    'KEY_ESCAPE': 'esc',
}


class TerminalError(Exception):
    """Raised when the terminal can't be used for the interactive form."""
    pass


class Outcome(Enum):
    COMPLETED = 'completed'
    QUIT = 'quit'
    INTERRUPTED = 'interrupted'


@dataclass
class SessionResult:
    outcome: Outcome
    draft: Optional[CommitDraft] = None


def translate_key(keystroke) -> Optional[KeyEvent]:
    """Map a blessed Keystroke to a KeyEvent, or None for keys we ignore."""
    text = str(keystroke)
    if text in CONTROL_CHARS:
        return KeyEvent(CONTROL_CHARS[text])
    if keystroke.is_sequence:
        name = SEQUENCE_NAMES.get(keystroke.name)
        return KeyEvent(name) if name else None
    if text and text.isprintable():
        return KeyEvent.char(text)
    return None


class Session:
    """Form plus terminal size; decides what each event does."""

    def __init__(self, form: Form, theme: Theme, width: int, height: int,
                 config: Optional[Config] = None):
        self.form = form
        self.theme = theme
        self.width = width
        self.height = height
        self.config = config or Config()
        self.outcome: Optional[Outcome] = None

    @property
    def done(self) -> bool:
        return self.outcome is not None

    @property
    def result(self) -> SessionResult:
        if self.outcome is Outcome.COMPLETED:
            return SessionResult(self.outcome, self.form.current_draft())
        return SessionResult(self.outcome or Outcome.QUIT)

    def is_quit(self, event: KeyEvent) -> bool:
        if event.key == 'esc':
            return True
        # 'q' is only a quit key where it can't be typed into a field
        field = self.form.focused_field
        return event.is_char and event.text == 'q' and not (field and field.accepts_text)

    def handle(self, event: Event) -> bool:
        """Apply one event. Returns True when the screen needs redrawing."""
        if self.done:
            return False
        if isinstance(event, InterruptEvent):
            self.outcome = Outcome.INTERRUPTED
            return False
        if isinstance(event, ResizeEvent):
            self.width, self.height = event.width, event.height
            return True
        if event.key == 'ctrl+c':
            self.outcome = Outcome.INTERRUPTED
            return False
        if self.is_quit(event):
            self.outcome = Outcome.QUIT
            return False

        changed = self.form.dispatch(event)
        if self.form.completed:
            self.outcome = Outcome.COMPLETED
            return False
        return changed

    def frame(self) -> list[str]:
        return render(self.form, self.width, self.height, self.theme, self.config)


class EventLoop:
    """Drives a Session from a blessed Terminal."""

    def __init__(self, session: Session, term, poll_interval: float = 0.1):
        self.session = session
        self.term = term
        self.poll_interval = poll_interval

    def events(self) -> Iterator[Event]:
        """Keys as they arrive, plus a ResizeEvent whenever the size changes."""
        term = self.term
        size = (term.width, term.height)
        while True:
            keystroke = term.inkey(timeout=self.poll_interval)
            current = (term.width, term.height)
            if current != size:
                size = current
                yield ResizeEvent(*current)
            if keystroke:
                event = translate_key(keystroke)
                if event is not None:
                    yield event

    def draw(self) -> None:
        term = self.term
        frame = self.session.frame()
        out = [term.home]
        for row, line in enumerate(frame):
            out.append(term.move_yx(row, 0) + line + term.clear_eol)
        out.append(term.move_yx(len(frame), 0) + term.clear_eos)
        term.stream.write(''.join(out))
        term.stream.flush()

    def run(self) -> SessionResult:
        term = self.term
        previous = _install_sigterm()
        try:
            with term.fullscreen(), term.raw(), term.hidden_cursor():
                self.draw()
                for event in self.events():
                    if self.session.handle(event):
                        self.draw()
                    if self.session.done:
                        break
        except KeyboardInterrupt:
            self.session.handle(InterruptEvent('signal'))
        except OSError as e:
            raise TerminalError(f"Terminal error: {e}")
        finally:
            _restore_sigterm(previous)
        return self.session.result


def _install_sigterm():
    """Turn SIGTERM into KeyboardInterrupt so it unwinds like ctrl+c."""
    try:
        return signal.signal(signal.SIGTERM, signal.default_int_handler)
    except ValueError:
        # Not the main thread
        return None


def _restore_sigterm(previous) -> None:
    if previous is not None:
        signal.signal(signal.SIGTERM, previous)


def open_terminal():
    """A blessed Terminal drawing on stdout, or stderr when stdout is piped."""
    from blessed import Terminal

    stream = sys.stdout if sys.stdout.isatty() else sys.stderr
    if not sys.stdin.isatty() or not stream.isatty():
        raise TerminalError("commit-form needs an interactive terminal")
    return Terminal(stream=stream)
