"""Command line entry point."""

from __future__ import annotations

import sys
from typing import Sequence

from .arguments import ProgramMode, UsageError, parse_arguments
from .constants import ExitCode, SyncError
from .help import print_help
from .runner import synchronize_directories
from .selftest import SelfTestError, run_tests

PROGRAM_NAME = "dirsync"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool with ``argv`` (without the program name) and return the exit code."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        arguments = parse_arguments([PROGRAM_NAME, *argv])
    except UsageError as error:
        print(f"Error: {error}", file=sys.stderr)
        return int(ExitCode.INCORRECT_USAGE)

    if arguments.mode is ProgramMode.HELP:
        print_help()
        return int(ExitCode.SUCCESS)

    if arguments.mode is ProgramMode.TEST:
        try:
            run_tests()
        except SelfTestError as error:
            print(f"Test failed: {error}", file=sys.stderr)
            return 1
        return int(ExitCode.SUCCESS)

    try:
        synchronize_directories(arguments)
    except SyncError as error:
        print(f"Error: {error}", file=sys.stderr)
        return int(error.exit_code)
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(main())