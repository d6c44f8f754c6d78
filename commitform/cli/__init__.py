"""Command Line Interface Package"""

from commitform.cli.main import main, run

__all__ = ["main", "run"]
