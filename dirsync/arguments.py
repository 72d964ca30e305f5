"""Command line argument parsing for the synchronization tool."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

USAGE = "Usage: dirsync [--help] [source-directory] [target-directory]"

_STATE_TEXT = {True: "enabled", False: "disabled"}


class ProgramMode(Enum):
    """The sub-command the program runs."""

    HELP = "help"
    SYNCHRONIZE = "synchronize"
    TEST = "test"


class ConflictResolution(Enum):
    """How to handle a file name present, with different content, on both sides."""

    OVERWRITE_WITH_NEWER = "overwrite_with_newer"
    SKIP = "skip"
    RENAME = "rename"


class UsageError(ValueError):
    """The command line could not be understood."""


@dataclass(frozen=True)
class ProgramArguments:
    """Parsed flags and positional arguments that configure a run."""

    executable: str = "dirsync"
    mode: ProgramMode = ProgramMode.SYNCHRONIZE
    verbose: bool = False
    dry_run: bool = False
    copy_configurations: bool = False
    delete_extra: bool = False
    one_way: bool = True
    conflict_resolution: ConflictResolution = ConflictResolution.OVERWRITE_WITH_NEWER
    source_directory: str = ""
    target_directory: str = ""

    @property
    def skips_conflicts(self) -> bool:
        return self.conflict_resolution is ConflictResolution.SKIP

    @property
    def overwrites_conflicts(self) -> bool:
        return self.conflict_resolution is ConflictResolution.OVERWRITE_WITH_NEWER

    @property
    def renames_conflicts(self) -> bool:
        return self.conflict_resolution is ConflictResolution.RENAME

    def describe(self) -> str:
        """Return a human-readable summary of the settings."""
        states = {
            "help": _STATE_TEXT[self.mode is ProgramMode.HELP],
            "verbose": _STATE_TEXT[bool(self.verbose)],
            "dry_run": _STATE_TEXT[bool(self.dry_run)],
            "copy": _STATE_TEXT[bool(self.copy_configurations)],
            "delete": _STATE_TEXT[bool(self.delete_extra)],
        }
        lines = [
            "Flags: ",
            f"    help: {states['help']}",
            f"    verbose: {states['verbose']}",
            f"    dry run: {states['dry_run']}",
            f"Copy configs:{states['copy']}",
            f"Delete extra:{states['delete']}",
            f"Source dir: {self.source_directory or '(empty)'}",
            f"Target dir: {self.target_directory or '(empty)'}",
        ]
        return "\n".join(lines) + "\n"


_FLAGS: dict[str, tuple[str, object]] = {
    "-h": ("mode", ProgramMode.HELP),
    "--help": ("mode", ProgramMode.HELP),
    "--test": ("mode", ProgramMode.TEST),
    "--verbose": ("verbose", True),
    "--dry-run": ("dry_run", True),
    "--bi": ("one_way", False),
    "--bidirectional": ("one_way", False),
    "-d": ("delete_extra", True),
    "--delete-extra": ("delete_extra", True),
    "-s": ("conflict_resolution", ConflictResolution.SKIP),
    "--skip-existing": ("conflict_resolution", ConflictResolution.SKIP),
    "--safe": ("conflict_resolution", ConflictResolution.SKIP),
    "-r": ("conflict_resolution", ConflictResolution.RENAME),
    "--rename": ("conflict_resolution", ConflictResolution.RENAME),
    "--copy-configs": ("copy_configurations", True),
    "--copy-configurations": ("copy_configurations", True),
}


def _warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def parse_arguments(argv: Sequence[str]) -> ProgramArguments:
    """Parse a full argument vector, program name first.

    Flags come before positional arguments; the first argument not starting
    with ``-`` ends the flags. Warnings go to standard error; errors raise
    :class:`UsageError`.
    """
    if len(argv) < 2:
        raise UsageError(f"Too few arguments.\n{USAGE}")

    executable, *rest = argv
    settings: dict[str, object] = {"executable": executable}
    remaining = iter(rest)
    positionals: list[str] = []

    for argument in remaining:
        if not argument.startswith("-"):
            positionals = [argument, *remaining]
            break
        try:
            name, value = _FLAGS[argument]
        except KeyError:
            raise UsageError(f"Unknown argument: {argument}") from None
        settings[name] = value

    if settings.get("one_way") is False and settings.get("delete_extra"):
        settings["delete_extra"] = False
        _warn("--delete-extra is disabled, because it is incompatible with --bi|--bidirectional.")

    mode = settings.get("mode", ProgramMode.SYNCHRONIZE)
    if mode in (ProgramMode.HELP, ProgramMode.TEST):
        if positionals:
            _warn("ignoring specified positional arguments.")
        return ProgramArguments(**settings)  # type: ignore[arg-type]

    if not positionals:
        raise UsageError("source directory unspecified.")
    if len(positionals) < 2:
        raise UsageError("target directory unspecified.")
    if len(positionals) > 2:
        _warn("Extra parameters ignored.")

    settings["source_directory"], settings["target_directory"] = positionals[:2]
    return ProgramArguments(**settings)  # type: ignore[arg-type]