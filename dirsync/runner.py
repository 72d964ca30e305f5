"""Entry point of a synchronization run: checks the roots and picks a synchronizer."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .arguments import ProgramArguments
from .constants import ExitCode, SyncError
from .one_way import OneWaySynchronizer
from .two_way import TwoWaySynchronizer


def verify_source_directory(path: os.PathLike[str] | str) -> Path:
    """Return ``path`` as a Path after checking it is an existing directory."""
    directory = Path(path)
    try:
        mode = directory.stat().st_mode
    except (FileNotFoundError, NotADirectoryError) as error:
        raise SyncError(
            "Source directory does not exist.", ExitCode.NONEXISTENT_SOURCE_DIRECTORY
        ) from error
    except OSError as error:
        raise SyncError(
            f"Failed to check the source directory details. {error}",
            ExitCode.FILESYSTEM_ERROR,
        ) from error

    if not stat.S_ISDIR(mode):
        raise SyncError(
            "Source path is not a directory.", ExitCode.NONEXISTENT_SOURCE_DIRECTORY
        )
    return directory


def ensure_target_directory(path: os.PathLike[str] | str) -> Path:
    """Create ``path`` and its parents if missing and return it as a Path."""
    directory = Path(path)
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as error:
        raise SyncError(
            f"Failed to ensure the target directory existence. {error}",
            ExitCode.FILESYSTEM_ERROR,
        ) from error
    return directory


def synchronize_directories(arguments: ProgramArguments) -> None:
    """Run a one-way or two-way synchronization as ``arguments`` describe.

    Raises :class:`SyncError` carrying the exit code on failure.
    """
    if arguments.one_way:
        verify_source_directory(arguments.source_directory)
        ensure_target_directory(arguments.target_directory)
        OneWaySynchronizer(arguments).synchronize()
    else:
        # Both directories act as sources, so both must already exist.
        verify_source_directory(arguments.source_directory)
        verify_source_directory(arguments.target_directory)
        TwoWaySynchronizer(arguments).synchronize()