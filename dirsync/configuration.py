"""Per-directory configuration files: exclusion patterns and size limits."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .constants import PROGRAM_VERSION, ExitCode, SyncError, Version
from .wildcards import wildcard_matches

CONFIG_FILE_NAME_PREFIX = ".dirsync"
CONFIG_FILE_NAME = ".dirsync.json"
CONFIGURATION_VERSION_KEY = "configVersion"


class ConfigParseError(SyncError):
    """A configuration file could not be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ExitCode.CONFIG_FILE_PARSE_ERROR)


class ConfigIncompatibleError(SyncError):
    """A configuration file was written for an incompatible version."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ExitCode.CONFIG_VERSION_INCOMPATIBLE)


@dataclass(frozen=True)
class DirectoryConfiguration:
    """Filtering rules stored in the directory they configure.

    ``exclusion_patterns`` hold file names with ``*`` wildcards that are never
    copied from or to the directory; ``max_file_size`` is the largest regular
    file, in bytes, the directory accepts.
    """

    config_version: Version = PROGRAM_VERSION
    exclusion_patterns: tuple[str, ...] = field(default_factory=tuple)
    max_file_size: int | None = None

    def allows(self, path: os.PathLike[str] | str) -> bool:
        """Return True if the entry may be copied out of the configured directory."""
        return self.accepts(path)

    def accepts(self, path: os.PathLike[str] | str) -> bool:
        """Return True if the entry may be copied into the configured directory."""
        entry = Path(path)
        if self.max_file_size is not None and entry.is_file():
            if entry.stat().st_size > self.max_file_size:
                return False
        return not any(wildcard_matches(pattern, entry.name) for pattern in self.exclusion_patterns)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of this configuration."""
        return {
            CONFIGURATION_VERSION_KEY: {
                "major": self.config_version.major,
                "minor": self.config_version.minor,
                "patch": self.config_version.patch,
            },
            "exclusionPatterns": list(self.exclusion_patterns),
            "maxFileSize": self.max_file_size,
        }


def _version_number(raw: Mapping[str, Any], key: str) -> int:
    try:
        value = raw[key]
    except KeyError:
        raise ConfigParseError(f"missing version field {key!r}") from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigParseError(f"version field {key!r} must be a number")
    return int(value)


def _parse_version(raw: Any) -> Version:
    if not isinstance(raw, Mapping):
        raise ConfigParseError(f"{CONFIGURATION_VERSION_KEY!r} must be an object")
    numbers = [_version_number(raw, key) for key in ("major", "minor", "patch")]
    try:
        return Version(*numbers)
    except (TypeError, ValueError) as error:
        raise ConfigParseError(str(error)) from None


def parse_configuration(data: Any) -> DirectoryConfiguration:
    """Build a configuration from decoded JSON data.

    Raises :class:`ConfigIncompatibleError` if the declared version does not
    work with this program and :class:`ConfigParseError` for malformed data.
    """
    if not isinstance(data, Mapping):
        raise ConfigParseError("configuration must be a JSON object")
    if CONFIGURATION_VERSION_KEY not in data:
        raise ConfigParseError(f"missing {CONFIGURATION_VERSION_KEY!r}")

    version = _parse_version(data[CONFIGURATION_VERSION_KEY])
    if not version.is_compatible_with(PROGRAM_VERSION):
        raise ConfigIncompatibleError(
            f"configuration version {version} is incompatible with {PROGRAM_VERSION}"
        )

    try:
        patterns = data["exclusionPatterns"]
    except KeyError:
        raise ConfigParseError("missing 'exclusionPatterns'") from None
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigParseError("'exclusionPatterns' must be a list of strings")

    max_file_size = None
    raw_size = data.get("maxFileSize")
    # Only integers count as a limit; anything else leaves the size unrestricted.
    if isinstance(raw_size, int) and not isinstance(raw_size, bool) and raw_size >= 0:
        max_file_size = raw_size

    return DirectoryConfiguration(version, tuple(patterns), max_file_size)


def is_config_file(path: os.PathLike[str] | str) -> bool:
    """Return True if the path names a directory configuration file."""
    return Path(path).name.startswith(CONFIG_FILE_NAME_PREFIX)


def read_directory_configuration(
    directory: os.PathLike[str] | str, verbose: bool = False
) -> DirectoryConfiguration | None:
    """Load the configuration stored in ``directory``, or None if it has none.

    A file that cannot be inspected or opened counts as absent. Malformed or
    incompatible files raise :class:`ConfigParseError` or
    :class:`ConfigIncompatibleError`.
    """
    file_path = Path(directory) / CONFIG_FILE_NAME
    try:
        file_path.stat()
    except FileNotFoundError:
        return None
    except OSError as error:
        if verbose:
            print(
                "Error: Failed to check the directory configuration details in: "
                f"{file_path}: {error.strerror}",
                file=sys.stderr,
            )
        return None

    try:
        content = file_path.read_bytes()
    except OSError:
        return None

    try:
        data = json.loads(content)
    except ValueError:
        raise ConfigParseError(f"Parse error in {file_path}") from None

    try:
        return parse_configuration(data)
    except ConfigIncompatibleError:
        raise ConfigIncompatibleError(f"Incompatible configuration in {file_path}") from None
    except ConfigParseError:
        raise ConfigParseError(f"Parse error in {file_path}") from None