"""Exit codes, configuration versioning and the package-wide error type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes reported by the command line tool."""

    SUCCESS = 0
    INCORRECT_USAGE = 1
    NONEXISTENT_SOURCE_DIRECTORY = 2
    FILESYSTEM_ERROR = 3
    CONFIG_FILE_PARSE_ERROR = 4
    CONFIG_VERSION_INCOMPATIBLE = 5
    INCOMPATIBLE_ENTRIES = 6


class SyncError(Exception):
    """A synchronization failure that maps to a specific exit code."""

    def __init__(self, message: str, exit_code: ExitCode = ExitCode.FILESYSTEM_ERROR) -> None:
        super().__init__(message)
        self.exit_code = ExitCode(exit_code)


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version: major, minor and patch numbers."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"version {name} must be an integer")
            if value < 0:
                raise ValueError(f"version {name} must not be negative")

    def is_compatible_with(self, other: Version) -> bool:
        """Return True if something written for this version works with ``other``."""
        if self.major != other.major:
            return False
        # Pre-release versions (major 0) must match exactly.
        if self.major == 0:
            return self == other
        return self <= other

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


PROGRAM_VERSION = Version(0, 0, 0)