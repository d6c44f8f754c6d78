"""CLI Main Entry Point"""

import sys

from commitform.config import load_config
from commitform.form import build_commit_form
from commitform.git import GitError, require_repository_root
from commitform.output import dim, print_error, supports_color
from commitform.ui import Theme, render_completed

from commitform.cli.args import parse_args
from commitform.cli.loop import EventLoop, Outcome, Session, TerminalError, open_terminal

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _run_form(form, config):
    """Run the interactive form on the terminal and return the session result."""
    term = open_terminal()
    theme = Theme(enabled=supports_color(term.stream))
    session = Session(form, theme, term.width, term.height, config)
    return EventLoop(session, term).run()


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parse_args(argv)

    # The form never starts outside a repository root
    try:
        require_repository_root()
    except GitError as e:
        print_error(str(e))
        return EXIT_ERROR

    config = load_config()
    form = build_commit_form(config)

    try:
        result = _run_form(form, config)
    except TerminalError as e:
        print_error(str(e))
        return EXIT_ERROR

    if result.outcome is Outcome.INTERRUPTED:
        return EXIT_INTERRUPTED
    if result.outcome is Outcome.QUIT:
        print(dim("Cancelled."), file=sys.stderr)
        return EXIT_OK

    sys.stdout.write(render_completed(form))
    sys.stdout.flush()
    return EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
