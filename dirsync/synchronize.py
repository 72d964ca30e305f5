"""Shared helpers for synchronizers: timestamps and the configuration stack."""

from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Tuple

from .arguments import ProgramArguments
from .configuration import DirectoryConfiguration, read_directory_configuration

ConfigurationPair = Tuple[Optional[DirectoryConfiguration], Optional[DirectoryConfiguration]]


def formatted_time(mtime: float) -> str:
    """Format a modification time (seconds since the epoch) as ``YYYY-MM-DD-hh-mm-ss`` in UTC."""
    moment = datetime.fromtimestamp(int(mtime), tz=timezone.utc)
    return moment.strftime("%Y-%m-%d-%H-%M-%S")


def insert_timestamp_to_filename(path: os.PathLike[str] | str) -> str:
    """Return the file name of ``path`` with its last write time inserted before the extension."""
    entry = Path(path)
    return f"{entry.stem}-{formatted_time(entry.stat().st_mtime)}{entry.suffix}"


class BinaryContext:
    """State shared while synchronizing two directory trees.

    Holds the run's arguments, the two root directories and a stack of
    configuration pairs, one per directory level being visited.
    """

    def __init__(self, arguments: ProgramArguments) -> None:
        self.arguments = arguments
        self.root_paths: tuple[Path, Path] = (
            Path(arguments.source_directory),
            Path(arguments.target_directory),
        )
        self.configuration_stack: list[ConfigurationPair] = []

    def push_configuration_pair(
        self, first: os.PathLike[str] | str, second: os.PathLike[str] | str
    ) -> ConfigurationPair:
        """Read the configurations of both directories and push them as the new leaf."""
        verbose = self.arguments.verbose
        pair = (
            read_directory_configuration(first, verbose),
            read_directory_configuration(second, verbose),
        )
        self.configuration_stack.append(pair)
        return pair

    def leaf_pair(self) -> ConfigurationPair:
        """Return the configuration pair of the deepest directory level."""
        if not self.configuration_stack:
            raise IndexError("no configuration pair has been loaded")
        return self.configuration_stack[-1]

    def pop_configuration_pair(self) -> ConfigurationPair:
        """Discard and return the leaf configuration pair."""
        if not self.configuration_stack:
            raise IndexError("no configuration pair has been loaded")
        return self.configuration_stack.pop()

    @contextmanager
    def configuration_scope(
        self, first: os.PathLike[str] | str, second: os.PathLike[str] | str
    ) -> Iterator[ConfigurationPair]:
        """Push the pair for two directories for the duration of a ``with`` block."""
        pair = self.push_configuration_pair(first, second)
        try:
            yield pair
        finally:
            self.pop_configuration_pair()