"""Git Repository - Verify the working directory is a repository root."""

import subprocess
from pathlib import Path
from typing import Optional


class GitError(Exception):
    """Raised when the repository precondition cannot be satisfied."""
    pass


class GitRepository:
    """Locates the repository that owns a directory."""

    def __init__(self, directory: Optional[Path] = None):
        try:
            self.directory = Path(directory) if directory else Path.cwd()
        except OSError as e:
            raise GitError(f"Error getting current directory: {e}")

    def _run_git(self, *args: str) -> str:
        """Run a git command in the target directory and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.directory,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def toplevel(self) -> Optional[Path]:
        """Root of the enclosing work tree, or None when outside one."""
        try:
            output = self._run_git('rev-parse', '--show-toplevel')
        except GitError:
            return None
        return Path(output.strip()) if output.strip() else None

    def is_root(self) -> bool:
        """True when the directory itself is the top of a work tree.

        Falls back to looking for a `.git` entry when git can't answer,
        e.g. when it isn't installed.
        """
        root = self.toplevel()
        if root is not None:
            return root.resolve() == self.directory.resolve()
        return (self.directory / '.git').exists()


def require_repository_root(directory: Optional[Path] = None) -> Path:
    """Fail fast unless `directory` (default: cwd) is a repository root."""
    repo = GitRepository(directory)
    if not repo.is_root():
        raise GitError("Error! Current directory is NOT a Git Repository")
    return repo.directory
