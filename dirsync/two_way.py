"""Two-way synchronization: bring two directory trees to the same content."""

from __future__ import annotations

import os
import shutil
import stat
from dataclasses import dataclass, replace
from pathlib import Path

from .arguments import ProgramArguments
from .configuration import DirectoryConfiguration, is_config_file
from .constants import ExitCode, SyncError
from .one_way import OneWaySynchronizer
from .synchronize import BinaryContext, insert_timestamp_to_filename

_NANOSECONDS = 1_000_000_000


def _entry_names(directory: Path, configuration: DirectoryConfiguration | None) -> set[str]:
    try:
        return {
            entry.name
            for entry in directory.iterdir()
            if configuration is None or configuration.allows(entry)
        }
    except OSError as error:
        raise SyncError(f'Failed to list "{directory}": {error}') from error


def _copy_file(source: Path, destination: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        shutil.copymode(source, destination)
    except OSError as error:
        raise SyncError(f'Failed to copy "{source}" to "{destination}": {error}') from error


@dataclass(frozen=True)
class _Child:
    """A name inside one of the two directories, which may be missing there."""

    path: Path
    exists: bool
    mode: int = 0

    @classmethod
    def locate(cls, parent: Path, names: set[str], name: str) -> _Child:
        path = parent / name
        if name not in names:
            return cls(path, False)
        try:
            mode = path.stat().st_mode
        except OSError as error:
            raise SyncError(f'Failed to check file status of "{path}"') from error
        return cls(path, True, mode)

    @property
    def is_file(self) -> bool:
        return self.exists and stat.S_ISREG(self.mode)

    @property
    def is_dir(self) -> bool:
        return self.exists and stat.S_ISDIR(self.mode)


class TwoWaySynchronizer(BinaryContext):
    """Synchronizes two directories symmetrically; either side may be updated."""

    def __init__(self, arguments: ProgramArguments) -> None:
        super().__init__(arguments)

    def synchronize(self) -> None:
        """Synchronize both trees; raises :class:`SyncError` on failure."""
        self._synchronize_directories(*self.root_paths)

    def _synchronize_directories(self, left: Path, right: Path) -> None:
        with self.configuration_scope(left, right) as (left_config, right_config):
            left_names = _entry_names(left, left_config)
            right_names = _entry_names(right, right_config)

            for name in sorted(left_names | right_names):
                left_child = _Child.locate(left, left_names, name)
                right_child = _Child.locate(right, right_names, name)
                if left_child.exists != right_child.exists:
                    self._synchronize_partial(left_child, right_child)
                else:
                    self._synchronize_existing(left_child, right_child)

    def _synchronize_partial(self, left: _Child, right: _Child) -> None:
        source, target = (left, right) if left.exists else (right, left)

        if source.is_dir:
            arguments = replace(
                self.arguments,
                source_directory=str(source.path),
                target_directory=str(target.path),
            )
            OneWaySynchronizer(arguments).synchronize()
            return

        if source.is_file:
            if self.arguments.verbose:
                print(f'Copying "{source.path}"')
            if self.arguments.dry_run or os.path.lexists(target.path):
                return
            _copy_file(source.path, target.path)
            return

        raise SyncError(
            f'Incompatible file types at "{source.path}"', ExitCode.INCOMPATIBLE_ENTRIES
        )

    def _synchronize_existing(self, left: _Child, right: _Child) -> None:
        if left.is_file and right.is_file:
            self._synchronize_files(left.path, right.path)
        elif left.is_dir and right.is_dir:
            self._synchronize_directories(left.path, right.path)
        else:
            raise SyncError(
                f'Incompatible directory entry types at "{left.path}" and "{right.path}"',
                ExitCode.INCOMPATIBLE_ENTRIES,
            )

    def _synchronize_files(self, left: Path, right: Path) -> None:
        if self.arguments.skips_conflicts:
            return
        try:
            left_written = left.stat().st_mtime_ns
            right_written = right.stat().st_mtime_ns
        except OSError as error:
            raise SyncError(f'Failed to read write times of "{left}"') from error

        # Write times within the same second count as equal.
        if left_written // _NANOSECONDS == right_written // _NANOSECONDS:
            return

        older, newer = (left, right) if left_written < right_written else (right, left)

        if is_config_file(left) and is_config_file(right):
            if not self.arguments.copy_configurations:
                return
            destination = older
        elif self.arguments.renames_conflicts:
            try:
                destination = older.parent / insert_timestamp_to_filename(older)
            except OSError as error:
                raise SyncError(f'Failed to read "{older}"') from error
        else:
            destination = older

        if self.arguments.verbose:
            print(f'Copying "{newer}"')
        if self.arguments.dry_run:
            return
        _copy_file(newer, destination)