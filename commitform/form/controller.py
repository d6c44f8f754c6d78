"""Form Controller - step navigation and completion state.

A form is Active(step_index) until the last step is confirmed, then
Completed for good. The step index only moves forward past a step whose
fields all validate; moving back is always allowed and keeps every value.
"""

from enum import Enum
from typing import Optional

from commitform.form.draft import CommitDraft
from commitform.form.events import KeyEvent
from commitform.form.fields import ConfirmField, Field
from commitform.form.step import Step, FORWARD, BACKWARD

DRAFT_KEYS = ('commit_type', 'scope', 'work_item_id', 'title', 'description')


class FormState(Enum):
    ACTIVE = 'active'
    COMPLETED = 'completed'


class Form:
    """Ordered steps plus the index of the one being filled in."""

    def __init__(self, steps: list[Step]):
        if not steps:
            raise ValueError("Form needs at least one step")
        self.steps = list(steps)
        self.current_step_index = 0
        self.state = FormState.ACTIVE

    def __repr__(self):
        return f"Form(step={self.current_step_index}/{len(self.steps)}, state={self.state.value})"

    @property
    def completed(self) -> bool:
        return self.state is FormState.COMPLETED

    @property
    def current_step(self) -> Optional[Step]:
        if self.current_step_index >= len(self.steps):
            return None
        return self.steps[self.current_step_index]

    @property
    def focused_field(self) -> Optional[Field]:
        step = self.current_step
        return step.focused if step else None

    @property
    def is_last_step(self) -> bool:
        return self.current_step_index == len(self.steps) - 1

    def field(self, key: str) -> Field:
        for step in self.steps:
            for f in step.fields:
                if f.key == key:
                    return f
        raise KeyError(key)

    def dispatch(self, event: KeyEvent) -> bool:
        """Route a keypress. Returns True when form state changed."""
        if self.completed:
            return False
        if event.is_next:
            return self.next()
        if event.is_prev:
            return self.prev()
        return self.focused_field.handle_key(event)

    def next(self) -> bool:
        """Leave the focused field, moving to the next field, step or completion."""
        if self.completed:
            return False
        step = self.current_step
        current = step.focused
        current.submit()
        if not current.validate():
            return True
        if not step.advance_focus(FORWARD):
            # Refused moves still store errors worth redrawing
            self._leave_step()
        return True

    def prev(self) -> bool:
        """Focus the previous field, crossing back into the previous step."""
        if self.completed:
            return False
        step = self.current_step
        if step.advance_focus(BACKWARD):
            return True
        if self.current_step_index == 0:
            return False
        self.current_step_index -= 1
        self.current_step.focus_last()
        return True

    def submit(self) -> bool:
        """Try to finish the whole form from the current step onward.

        Stops at the first step that doesn't validate, focusing the field
        that holds it back.
        """
        if self.completed:
            return False
        while not self.completed:
            step = self.current_step
            step.focus_last()
            for f in step.fields:
                f.submit()
            if not self._leave_step():
                break
        return True

    def _leave_step(self) -> bool:
        """Advance past the current step if it validates. Returns True if it moved."""
        step = self.current_step
        if not step.validate():
            index = step.first_invalid()
            if index is not None:
                step.focus_index = index
            return False
        if not self.is_last_step:
            self.current_step_index += 1
            self.current_step.focus_first()
            return True
        if not self._confirmed():
            return False
        self.current_step_index = len(self.steps)
        self.state = FormState.COMPLETED
        return True

    def _confirmed(self) -> bool:
        """The final step's closing confirmation, when it has one, must be true."""
        last = self.steps[-1].fields[-1]
        if isinstance(last, ConfirmField):
            return bool(last.value)
        return True

    def current_draft(self) -> CommitDraft:
        """Project the current values, finished or not."""
        values = {}
        for key in DRAFT_KEYS:
            try:
                value = self.field(key).value
            except KeyError:
                value = ''
            values[key] = value if key == 'description' else str(value).strip()
        return CommitDraft(**values)
