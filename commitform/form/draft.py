"""CommitDraft - the commit message as currently entered."""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class CommitDraft:
    """Read-only snapshot of the form's values."""
    commit_type: str = ''
    scope: str = ''
    work_item_id: str = ''
    title: str = ''
    description: str = ''

    @property
    def is_empty(self) -> bool:
        return not any(asdict(self).values())

    @property
    def header(self) -> str:
        """`type(scope)[id]: title`, leaving out decorations for unset parts."""
        scope = f"({self.scope})" if self.scope else ''
        work_item = f"[{self.work_item_id}]" if self.work_item_id else ''
        return f"{self.commit_type}{scope}{work_item}: {self.title}"

    def format(self) -> str:
        """Full message: header, blank line, description."""
        return f"{self.header}\n\n{self.description}"

