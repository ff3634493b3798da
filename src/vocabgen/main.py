#!/usr/bin/env python3
"""
RDF vocabulary constants generator.

Usage:
    vocabgen generate [--config vocabgen.json] [--vocabulary [PREFIX=]URL ...]
    vocabgen inspect <locator> [--prefix PREFIX] [--json]
"""

import sys
from typing import List, Optional

from vocabgen.app.cli.commands import COMMANDS
from vocabgen.app.cli.parsers import create_argument_parser
from vocabgen.constants import ExitCode


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.USAGE_ERROR

    command = COMMANDS[args.command](config_path=getattr(args, 'config', None))
    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        print("\n✗ Interrupted", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
