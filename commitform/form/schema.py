"""The commit form: one step to pick the type, one for the details."""

from typing import Optional

from commitform import COMMIT_TYPES
from commitform.config import Config
from commitform.form.controller import Form
from commitform.form.fields import (
    ConfirmField,
    MultilineTextField,
    Option,
    SelectField,
    TextField,
)
from commitform.form.step import Step


def build_commit_form(config: Optional[Config] = None) -> Form:
    config = config or Config()
    type_step = Step([
        SelectField(
            'commit_type',
            "Choose your type of commits",
            options=[Option(label, value) for value, label in COMMIT_TYPES.items()],
            label="Commit type",
        ),
    ], title="Type")
    details_step = Step([
        TextField('scope', "What's your scope?", required=True, label="Scope"),
        TextField('work_item_id', "What's your Work Item ID?", required=True, label="Work Item ID"),
        TextField(
            'title',
            "What's your commit title?",
            required=True,
            max_length=config.title_max_length,
            label="Title",
        ),
        MultilineTextField(
            'description',
            "What's your commit description? (Optional)",
            char_limit=config.description_limit,
            label="Description",
        ),
        ConfirmField(
            'done',
            "All done?",
            affirmative="Yes",
            negative="Wait, no",
            must_confirm=True,
            error_message="Welp, finish up then",
        ),
    ], title="Details")
    return Form([type_step, details_step])
