"""Form fields - one user-editable input each.

The kinds form a closed set: SelectField, TextField, MultilineTextField and
ConfirmField. Every kind parses raw input into its own value type, checks its
constraints and draws itself; the Step and Form only talk to the shared
interface.

Constraint checks raise ValidationError, but the exception never leaves the
field: it is caught and the message kept in `validation_error` so the next
render can show it inline.
"""

import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from commitform.form.events import KeyEvent, NEWLINE_KEYS


class ValidationError(Exception):
    """Raised when a value violates a field constraint."""
    pass


@dataclass(frozen=True)
class Option:
    """One choice of a SelectField."""
    label: str
    value: str


class Field(ABC):
    """Base for all field kinds."""

    kind = ''
    accepts_text = False

    def __init__(self, key: str, title: str, required: bool = False, label: Optional[str] = None):
        self.key = key
        self.title = title
        self.label = label or key.replace('_', ' ').capitalize()
        self.required = required
        self.value = self.empty_value()
        self.validation_error: Optional[str] = None

    def __repr__(self):
        return f"{type(self).__name__}(key={self.key!r}, value={self.value!r})"

    def empty_value(self):
        return ''

    def is_empty(self) -> bool:
        return not str(self.value).strip()

    @abstractmethod
    def parse(self, raw):
        """Turn raw input into this kind's value, or raise ValidationError."""

    def check(self) -> None:
        """Raise ValidationError if the current value breaks a constraint."""
        if self.required and self.is_empty():
            raise ValidationError(f"{self.label} is required")

    def edit(self, raw) -> None:
        """Apply raw input without validating; clears any stale error."""
        self.value = self.parse(raw)
        self.validation_error = None

    def set_value(self, raw) -> bool:
        """Parse and validate `raw`. Failures are stored, never raised."""
        try:
            self.value = self.parse(raw)
        except ValidationError as e:
            self.validation_error = str(e)
            return False
        return self.validate()

    def validate(self) -> bool:
        try:
            self.check()
        except ValidationError as e:
            self.validation_error = str(e)
            return False
        self.validation_error = None
        return True

    def is_valid(self) -> bool:
        if self.validation_error is not None:
            return False
        return not (self.required and self.is_empty())

    def submit(self) -> None:
        """Hook run when the user moves forward off this field."""

    @abstractmethod
    def handle_key(self, event: KeyEvent) -> bool:
        """Apply a keypress. Returns True when the value changed."""

    # Rendering

    def render(self, focused: bool, theme, width: int) -> list[str]:
        """Title, body and inline error, prefixed with the focus bar."""
        inner = max(1, width - 2)
        lines = [theme.field_title(self.title, focused)]
        lines.extend(self.render_body(focused, theme, inner))
        if self.validation_error:
            lines.append(theme.error(f"* {self.validation_error}"))
        bar = theme.focus_bar() if focused else '  '
        return [bar + line for line in lines]

    @abstractmethod
    def render_body(self, focused: bool, theme, width: int) -> list[str]:
        pass

    def help_keys(self) -> list[tuple[str, str]]:
        return [('tab', 'next'), ('shift+tab', 'back')]


class SelectField(Field):
    """Pick one value from a fixed list of options."""

    kind = 'select'

    def __init__(self, key: str, title: str, options: list[Option], required: bool = True,
                 label: Optional[str] = None):
        if not options:
            raise ValueError("SelectField needs at least one option")
        self.options = list(options)
        self.cursor = 0
        super().__init__(key, title, required=required, label=label)

    @property
    def values(self) -> list[str]:
        return [o.value for o in self.options]

    def parse(self, raw):
        raw = '' if raw is None else str(raw)
        if raw == '':
            return ''
        if raw not in self.values:
            raise ValidationError(f"'{raw}' is not a valid option")
        self.cursor = self.values.index(raw)
        return raw

    def check(self) -> None:
        if self.value and self.value not in self.values:
            raise ValidationError(f"'{self.value}' is not a valid option")
        super().check()

    def submit(self) -> None:
        if not self.value:
            self.edit(self.options[self.cursor].value)

    def handle_key(self, event: KeyEvent) -> bool:
        step = 0
        if event.key == 'up' or (event.is_char and event.text == 'k'):
            step = -1
        elif event.key == 'down' or (event.is_char and event.text == 'j'):
            step = 1
        elif event.key == 'home':
            step = -self.cursor
        elif event.key == 'end':
            step = len(self.options) - 1 - self.cursor
        if not step:
            return False

        self.cursor = max(0, min(len(self.options) - 1, self.cursor + step))
        before = self.value
        # The value follows the highlight so the preview updates while browsing
        self.edit(self.options[self.cursor].value)
        return self.value != before

    def render_body(self, focused, theme, width):
        lines = []
        for i, option in enumerate(self.options):
            marker = '> ' if focused and i == self.cursor else '  '
            text = f"{marker}{option.label}"
            if option.value == self.value:
                text = theme.selected(text)
            lines.append(text)
        return lines

    def help_keys(self):
        return [('↑/↓', 'choose'), ('enter', 'select'), ('shift+tab', 'back')]


class TextField(Field):
    """Single-line text input."""

    kind = 'text'
    accepts_text = True

    def __init__(self, key: str, title: str, required: bool = False, max_length: Optional[int] = None,
                 label: Optional[str] = None):
        self.max_length = max_length
        super().__init__(key, title, required=required, label=label)

    def parse(self, raw):
        text = '' if raw is None else str(raw)
        return text.replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')

    def check(self) -> None:
        super().check()
        if self.max_length is not None and len(self.value) > self.max_length:
            raise ValidationError(f"must be at most {self.max_length} characters")

    def handle_key(self, event: KeyEvent) -> bool:
        if event.is_char and event.text:
            new = self.value + event.text
            if self.max_length is not None and len(new) > self.max_length:
                new = new[:self.max_length]
        elif event.key == 'backspace':
            new = self.value[:-1]
        elif event.key == 'ctrl+u':
            new = ''
        else:
            return False
        if new == self.value and self.validation_error is None:
            return False
        self.edit(new)
        return True

    def render_body(self, focused, theme, width):
        prompt = '> '
        room = max(1, width - len(prompt) - 1)
        text = self.value[-room:] if len(self.value) > room else self.value
        if focused:
            return [f"{prompt}{text}{theme.cursor()}"]
        return [f"{prompt}{text}"]


class MultilineTextField(TextField):
    """Free text; input beyond the character limit is cut off, not rejected."""

    kind = 'multiline'
    visible_lines = 6

    def __init__(self, key: str, title: str, required: bool = False, char_limit: int = 400,
                 label: Optional[str] = None):
        self.char_limit = char_limit
        super().__init__(key, title, required=required, max_length=None, label=label)

    def parse(self, raw):
        text = '' if raw is None else str(raw)
        text = text.replace('\r\n', '\n').replace('\r', '\n')
        return text[:self.char_limit]

    def handle_key(self, event: KeyEvent) -> bool:
        if event.key in NEWLINE_KEYS:
            event = KeyEvent.char('\n')
        if event.is_char and event.text and len(self.value) >= self.char_limit:
            return False
        return super().handle_key(event)

    def render_body(self, focused, theme, width):
        room = max(1, width - 1)
        wrapped = []
        for line in self.value.split('\n'):
            wrapped.extend(textwrap.wrap(line, room, drop_whitespace=False) or [''])
        wrapped = wrapped[-self.visible_lines:]
        if focused:
            wrapped[-1] += theme.cursor()
        lines = list(wrapped)
        lines.append(theme.dim(f"{len(self.value)}/{self.char_limit}"))
        return lines

    def help_keys(self):
        return [('ctrl+j', 'new line'), ('tab', 'next'), ('shift+tab', 'back')]


class ConfirmField(Field):
    """Yes/no question; with must_confirm only "yes" lets the form finish."""

    kind = 'confirm'

    def __init__(self, key: str, title: str, affirmative: str = 'Yes', negative: str = 'No',
                 must_confirm: bool = False, error_message: str = 'must be confirmed'):
        self.affirmative = affirmative
        self.negative = negative
        self.must_confirm = must_confirm
        self.error_message = error_message
        super().__init__(key, title, required=must_confirm)

    def empty_value(self):
        return False

    def is_empty(self) -> bool:
        return not self.value

    def parse(self, raw):
        if isinstance(raw, str):
            return raw.strip().lower() in ('y', 'yes', 'true', '1')
        return bool(raw)

    def check(self) -> None:
        if self.must_confirm and not self.value:
            raise ValidationError(self.error_message)

    def handle_key(self, event: KeyEvent) -> bool:
        if event.key in ('left', 'right') or (event.is_char and event.text in ('h', 'l')):
            new = not self.value
        elif event.is_char and event.text.lower() == 'y':
            new = True
        elif event.is_char and event.text.lower() == 'n':
            new = False
        else:
            return False
        changed = new != self.value or self.validation_error is not None
        self.edit(new)
        return changed

    def render_body(self, focused, theme, width):
        yes = theme.button(self.affirmative, active=self.value)
        no = theme.button(self.negative, active=not self.value)
        return [f"{yes}  {no}"]

    def help_keys(self):
        return [('←/→', 'toggle'), ('enter', 'submit'), ('shift+tab', 'back')]
