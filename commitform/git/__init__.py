"""Git Operations Package"""

from commitform.git.repository import GitRepository, GitError, require_repository_root

__all__ = [
    "GitRepository",
    "GitError",
    "require_repository_root",
]
