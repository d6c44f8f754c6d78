"""Form Model Package"""

from commitform.form.events import KeyEvent, ResizeEvent, InterruptEvent
from commitform.form.fields import (
    ValidationError,
    Option,
    Field,
    SelectField,
    TextField,
    MultilineTextField,
    ConfirmField,
)
from commitform.form.step import Step, FORWARD, BACKWARD
from commitform.form.draft import CommitDraft
from commitform.form.controller import Form, FormState
from commitform.form.schema import build_commit_form

__all__ = [
    "KeyEvent",
    "ResizeEvent",
    "InterruptEvent",
    "ValidationError",
    "Option",
    "Field",
    "SelectField",
    "TextField",
    "MultilineTextField",
    "ConfirmField",
    "Step",
    "FORWARD",
    "BACKWARD",
    "CommitDraft",
    "Form",
    "FormState",
    "build_commit_form",
]
