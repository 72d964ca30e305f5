"""Usage text for the command line tool."""

from __future__ import annotations

import sys
from typing import TextIO

HELP = (
    "Usage: dirsync [OPTIONS] <source-directory> <target-directory>\n"
    "\n"
    "The dirsync utility recursively synchronizes or copies files from the source\n"
    "directory to the target directory.\n"
    "OPTIONS:\n"
    "-h, --help:\tDisplay help information and exit. No positional arguments are needed.\n"
    "--verbose:\tOutput detailed information during synchronization (files copied, skipped, etc.).\n"
    "--dry-run:\tSimulate the synchronization without actually copying or deleting files. "
    "May be useful with --verbose.\n"
    "--bi, --bidirectional:\tPerform two-way synchronization (both source and target may be updated).\n"
    "-d, --delete-extra:\tDeletes extra files and folders in the target directory that do not exist "
    "in the source directory. This flag is disabled with a warning when running two-way synchronization.\n"
    "-s, --skip-existing, --safe:\tSkip copying files that are already in their respective destination.\n"
    "-r, --rename:\tUse renaming conflict strategy: copy the source content to a new file with appended "
    "\"last write\" timestamp in the filename, using -YYYY-MM-DD-hh-mm-ss suffix format. "
    "File extension is kept.\n"
    "--copy-configs, --copy-configurations:\tCopy directory configuration files themselves, if encountered.\n"
    "--test:\tRuns implementation tests. Used by developers and testers.\n"
)


def print_help(file: TextIO | None = None) -> None:
    """Write the usage text to ``file`` (standard output by default)."""
    print(HELP, file=file if file is not None else sys.stdout)