"""One-way synchronization: copy a source tree into a target tree."""

from __future__ import annotations

import os
import shutil
import stat
import sys
from pathlib import Path

from .arguments import ProgramArguments
from .configuration import is_config_file
from .constants import ExitCode, SyncError
from .synchronize import BinaryContext, insert_timestamp_to_filename


def _list_directory(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as error:
        raise SyncError(f'Failed to list "{directory}": {error}') from error


def _copy_file(source: Path, destination: Path, overwrite: bool) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        if not overwrite and os.path.lexists(destination):
            raise FileExistsError(f'"{destination}" already exists')
        shutil.copyfile(source, destination)
        shutil.copymode(source, destination)
    except OSError as error:
        raise SyncError(f'Failed to copy "{source}" to "{destination}": {error}') from error


class OneWaySynchronizer(BinaryContext):
    """Copies new and newer files from the source root into the target root.

    Directory configurations found on either side filter what is copied;
    conflicts are resolved as the program arguments say.
    """

    def __init__(self, arguments: ProgramArguments) -> None:
        super().__init__(arguments)

    @property
    def source_root(self) -> Path:
        return self.root_paths[0]

    @property
    def target_root(self) -> Path:
        return self.root_paths[1]

    def should_synchronize(self, path: os.PathLike[str] | str) -> bool:
        """Return True if every loaded configuration lets the entry through."""
        return self._source_allows(path) and self._target_accepts(path)

    def _source_allows(self, path: os.PathLike[str] | str) -> bool:
        return all(
            source.allows(path)
            for source, _ in reversed(self.configuration_stack)
            if source is not None
        )

    def _target_accepts(self, path: os.PathLike[str] | str) -> bool:
        return all(
            target.accepts(path)
            for _, target in reversed(self.configuration_stack)
            if target is not None
        )

    def synchronize(self) -> None:
        """Synchronize the whole tree; raises :class:`SyncError` on failure."""
        self._synchronize_directory(self.source_root, self.target_root)

    def _synchronize_directory(self, source: Path, target: Path) -> None:
        with self.configuration_scope(source, target):
            for entry in _list_directory(source):
                self._synchronize_entry(entry, target)
            if self.arguments.delete_extra:
                self._delete_extra_entries(source, target)

    def _synchronize_entry(self, entry: Path, target_directory: Path) -> None:
        try:
            mode = entry.stat().st_mode
        except OSError as error:
            raise SyncError(f'Failed to check file status of "{entry}"') from error

        if not self.should_synchronize(entry):
            return

        matching_target = target_directory / entry.name
        if stat.S_ISDIR(mode):
            self._synchronize_directory(entry, matching_target)
        elif stat.S_ISREG(mode):
            if is_config_file(entry):
                self._synchronize_config_file(entry, matching_target)
            else:
                self._synchronize_regular_file(entry, matching_target)
        else:
            print(f'Warning: unsupported file type of "{entry}"', file=sys.stderr)

    def _synchronize_regular_file(self, source: Path, target: Path) -> None:
        destination = target
        if os.path.exists(target):
            if self.arguments.skips_conflicts:
                return
            try:
                source_written = source.stat().st_mtime_ns
                target_written = target.stat().st_mtime_ns
            except OSError as error:
                raise SyncError(f'Failed to read write times of "{source}"') from error

            if source_written == target_written:
                return
            if source_written < target_written:
                if self.arguments.verbose:
                    print(f'Skipped copying older version of "{source}"')
                return
            if self.arguments.renames_conflicts:
                try:
                    destination = target.parent / insert_timestamp_to_filename(target)
                except OSError as error:
                    raise SyncError(f'Failed to read "{target}"') from error

        if self.arguments.verbose:
            print(f'Copying "{source}"')
        if self.arguments.dry_run:
            return
        _copy_file(source, destination, overwrite=True)

    def _synchronize_config_file(self, source: Path, target: Path) -> None:
        _, target_configuration = self.leaf_pair()
        if target_configuration is not None or not self.arguments.copy_configurations:
            return

        if self.arguments.verbose:
            print(f'Copying "{source}"')
        if self.arguments.dry_run:
            return
        _copy_file(source, target, overwrite=False)

    def _delete_extra_entries(self, source: Path, target: Path) -> None:
        if not target.is_dir():
            return
        for entry in _list_directory(target):
            if os.path.exists(source / entry.name):
                continue
            if self.arguments.verbose:
                print(f'Deleting extra "{entry}"')
            if self.arguments.dry_run:
                continue
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            except OSError as error:
                raise SyncError(
                    f'Failed to delete "{entry}": {error}', ExitCode.FILESYSTEM_ERROR
                ) from error