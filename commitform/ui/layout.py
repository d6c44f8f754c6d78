"""Layout Engine - pane geometry for the two-column frame.

The form pane sits on the left at its natural width, the status pane is
pushed to the right edge of the (capped) frame. On terminals too narrow for
both, the margin between them clamps to zero and the panes are cut down to
fit instead of overlapping.
"""

from dataclasses import dataclass
from typing import Optional

from commitform.config import Config


@dataclass(frozen=True)
class Layout:
    """Computed geometry; every member is a non-negative cell count."""
    terminal_width: int
    terminal_height: int
    form_width: int
    form_height: int
    status_width: int
    status_height: int
    status_margin_left: int
    total_cap: int

    @property
    def used_width(self) -> int:
        return self.form_width + self.status_margin_left + self.status_width


def compute(terminal_width: int, terminal_height: int, form_rendered_width: int,
            form_rendered_height: int, config: Optional[Config] = None) -> Layout:
    """Fit the form and status panes into the terminal. Pure and deterministic."""
    config = config or Config()
    terminal_width = max(0, terminal_width)
    terminal_height = max(0, terminal_height)
    form_rendered_width = max(0, form_rendered_width)
    form_rendered_height = max(0, form_rendered_height)

    capped = min(terminal_width, config.max_width)
    available = max(0, capped - config.frame_margin)
    status_width = config.status_width
    margin_left = available - status_width - form_rendered_width

    if margin_left >= 0:
        form_width = form_rendered_width
    else:
        # Too narrow for two columns: no gap, form keeps what it can,
        # status takes the rest or disappears when it would be unreadable
        margin_left = 0
        form_width = min(form_rendered_width, available)
        status_width = min(status_width, available - form_width)
        if status_width < config.min_status_width:
            status_width = 0

    return Layout(
        terminal_width=terminal_width,
        terminal_height=terminal_height,
        form_width=form_width,
        form_height=form_rendered_height,
        status_width=status_width,
        status_height=form_rendered_height,
        status_margin_left=margin_left,
        total_cap=config.max_width,
    )
