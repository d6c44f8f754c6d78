"""Renderer - turns form state into the lines of one frame.

Everything here is a pure function of its arguments: the form is read, never
changed, and nothing is written to the terminal. The event loop owns output.
"""

import textwrap
from typing import Optional

from commitform.config import Config
from commitform.form.controller import Form
from commitform.form.draft import CommitDraft
from commitform.output import pad, strip_ansi, visible_len
from commitform.ui.layout import Layout, compute
from commitform.ui.theme import Theme

BASE_PADDING_TOP = 1
BASE_PADDING_LEFT = 1

BORDER_TOP = ('╭', '─', '╮')
BORDER_BOTTOM = ('╰', '─', '╯')
BORDER_SIDE = '│'


def render_help(form: Form, theme: Theme) -> str:
    field = form.focused_field
    keys = field.help_keys() if field else []
    keys = keys + [('esc', 'quit')]
    return theme.help(' • '.join(f"{key} {action}" for key, action in keys))


def render_form_pane(form: Form, theme: Theme, width: int) -> list[str]:
    """Left pane: the current step's fields, a help line, one blank line above and below."""
    step = form.current_step
    if step is None:
        return []

    has_error = any(f.validation_error for f in step.fields)
    header = f"Step {form.current_step_index + 1} of {len(form.steps)}"
    if step.title:
        header += f" · {step.title}"

    lines = ['', theme.step_header(header, has_error), '']
    lines.extend(step.render(theme, width))
    lines.extend(['', render_help(form, theme), ''])
    return lines


def _status_content(draft: CommitDraft, theme: Theme) -> list[str]:
    return [
        theme.status_title("Current Commit"),
        theme.emphasis(f"Commit Type: {draft.commit_type}") if draft.commit_type else '',
        f"Scope: {draft.scope}" if draft.scope else '',
        f"Work Item ID: {draft.work_item_id}" if draft.work_item_id else '',
        f"Title: {draft.title}" if draft.title else '',
        f"Description(Optional): {draft.description}" if draft.description else '',
        '',
        theme.status_title("Completed Commit"),
        draft.format(),
    ]


def _wrap(entries: list[str], width: int) -> list[str]:
    """One output row per line: embedded newlines split, long plain text wrapped."""
    wrapped = []
    for entry in entries:
        for line in entry.split('\n'):
            # Styled lines are short headers; only plain text needs wrapping
            if strip_ansi(line) != line or visible_len(line) <= width:
                wrapped.append(line)
            else:
                wrapped.extend(textwrap.wrap(line, width) or [''])
    return wrapped


def render_status_pane(draft: CommitDraft, theme: Theme, width: int, height: int) -> list[str]:
    """Right pane: rounded box exactly `width` x `height`, live preview inside."""
    if width <= 0 or height <= 0:
        return []
    if width < 4 or height < 2:
        return [' ' * width] * height

    inner = width - 3  # Two borders plus one column of left padding
    content = _wrap(_status_content(draft, theme), inner)
    rows = height - 2
    content = (content + [''] * rows)[:rows]

    left, fill, right = BORDER_TOP
    output = [theme.frame(left + fill * (width - 2) + right)]
    for line in content:
        side = theme.frame(BORDER_SIDE)
        output.append(f"{side} {pad(line, inner)}{side}")
    left, fill, right = BORDER_BOTTOM
    output.append(theme.frame(left + fill * (width - 2) + right))
    return output


def render_active(form: Form, layout: Layout, theme: Theme, config: Optional[Config] = None) -> list[str]:
    """Frame for a form still being filled in: form pane and live status side by side."""
    config = config or Config()
    form_lines = render_form_pane(form, theme, config.form_width)
    status_lines = render_status_pane(
        form.current_draft(), theme, layout.status_width, layout.status_height
    )

    rows = max(len(form_lines), len(status_lines))
    indent = ' ' * BASE_PADDING_LEFT
    gap = ' ' * layout.status_margin_left
    frame = [''] * BASE_PADDING_TOP
    for i in range(rows):
        left = form_lines[i] if i < len(form_lines) else ''
        line = indent + pad(left, layout.form_width)
        if i < len(status_lines):
            line += gap + status_lines[i]
        frame.append(line.rstrip() if not status_lines else line)

    if layout.terminal_height > 0:
        frame = frame[:layout.terminal_height]
    return frame


def render_completed(form: Form) -> str:
    """The final output: `type(scope)[id]: title`, blank line, description."""
    return form.current_draft().format()


def render(form: Form, width: int, height: int, theme: Theme, config: Optional[Config] = None) -> list[str]:
    """One full pass: draw the form pane, fit the layout around it, compose the frame."""
    config = config or Config()
    if form.completed:
        return render_completed(form).split('\n')
    form_lines = render_form_pane(form, theme, config.form_width)
    form_width = max((visible_len(line) for line in form_lines), default=0)
    layout = compute(width, height, form_width, len(form_lines), config)
    return render_active(form, layout, theme, config)
