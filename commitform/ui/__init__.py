"""Terminal UI Package: layout, theme and frame rendering."""

from commitform.ui.layout import Layout, compute
from commitform.ui.theme import Theme
from commitform.ui.renderer import (
    render,
    render_active,
    render_completed,
    render_form_pane,
    render_status_pane,
)

__all__ = [
    "Layout",
    "compute",
    "Theme",
    "render",
    "render_active",
    "render_completed",
    "render_form_pane",
    "render_status_pane",
]
