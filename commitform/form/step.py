"""Step - an ordered group of fields presented together."""

from typing import Optional

from commitform.form.fields import Field

FORWARD = 1
BACKWARD = -1


class Step:
    """Fields shown on one screen, with the index of the focused one."""

    def __init__(self, fields: list[Field], title: str = ''):
        if not fields:
            raise ValueError("Step needs at least one field")
        self.fields = list(fields)
        self.title = title
        self.focus_index = 0

    def __repr__(self):
        return f"Step(fields={[f.key for f in self.fields]!r}, focus={self.focus_index})"

    @property
    def focused(self) -> Field:
        return self.fields[self.focus_index]

    @property
    def completed(self) -> bool:
        return self.is_complete()

    def advance_focus(self, direction: int) -> bool:
        """Move focus one field in `direction`.

        Returns False, leaving focus alone, when the move would leave the step.
        Crossing into a neighbouring step is the Form's decision.
        """
        target = self.focus_index + direction
        if not 0 <= target < len(self.fields):
            return False
        self.focus_index = target
        return True

    def focus_first(self) -> None:
        self.focus_index = 0

    def focus_last(self) -> None:
        self.focus_index = len(self.fields) - 1

    def is_complete(self) -> bool:
        """True when every required field holds a valid value."""
        return all(f.is_valid() for f in self.fields if f.required)

    def validate(self) -> bool:
        """Validate every field, storing errors for the ones that fail."""
        results = [f.validate() for f in self.fields]
        return all(results) and self.is_complete()

    def first_invalid(self) -> Optional[int]:
        for i, f in enumerate(self.fields):
            if not f.is_valid():
                return i
        return None

    def render(self, theme, width: int) -> list[str]:
        """Draw this step's fields only, a blank line between each."""
        lines = []
        for i, f in enumerate(self.fields):
            if i:
                lines.append('')
            lines.extend(f.render(i == self.focus_index, theme, width))
        return lines

    def field(self, key: str) -> Field:
        for f in self.fields:
            if f.key == key:
                return f
        raise KeyError(key)
