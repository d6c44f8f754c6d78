"""CLI Argument Parsing"""

import argparse
import argcomplete

from commitform import __version__


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='commit-form',
        description='Compose a structured commit message interactively',
        epilog='Run from the root of a git repository. The message is printed to stdout.'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
