"""Built-in end-to-end checks that exercise synchronization on a scratch directory."""

from __future__ import annotations

import json
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable

from .arguments import ConflictResolution, ProgramArguments
from .constants import SyncError
from .runner import synchronize_directories
from .synchronize import formatted_time

OLD_VERSION_CONTENT = "old version"
NEW_VERSION_CONTENT = "new version"

# How far back "older" files are dated, so that write times clearly differ.
_AGE_SECONDS = 10


class SelfTestError(AssertionError):
    """A built-in check found the synchronization result to be wrong."""


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise SelfTestError(message)


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def _make_older(path: Path) -> None:
    moment = time.time() - _AGE_SECONDS
    os.utime(path, (moment, moment))


def _remove(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)


def _config(**fields: object) -> str:
    document = {"configVersion": {"major": 0, "minor": 0, "patch": 0}}
    document.update(fields)
    return json.dumps(document)


def _run(arguments: ProgramArguments) -> None:
    try:
        synchronize_directories(arguments)
    except SyncError as error:
        raise SelfTestError(f"synchronization failed: {error}") from error


def _same_content(first: Path, second: Path) -> bool:
    return first.read_bytes() == second.read_bytes()


def _has_content(path: Path, content: str) -> bool:
    return path.is_file() and path.read_text() == content


def _simple_one_way(source: Path, target: Path) -> None:
    _write(source / "root.txt", "root")
    _write(source / "hello.ignored.txt", "hello")
    _write(source / "first" / "recursive.ignored.txt")
    _write(source / "ignored-directory" / "ignored-by-parent.txt")
    _write(
        source / ".dirsync.json",
        _config(maxFileSize=100, exclusionPatterns=["*.ignored.txt", "ignored-directory"]),
    )

    _write(target / "conflicts" / "different.txt", OLD_VERSION_CONTENT)
    _make_older(target / "conflicts" / "different.txt")
    _write(source / "conflicts" / "different.txt", NEW_VERSION_CONTENT)

    _write(source / "conflicts" / "skip-older.txt", OLD_VERSION_CONTENT)
    _make_older(source / "conflicts" / "skip-older.txt")
    _write(target / "conflicts" / "skip-older.txt", NEW_VERSION_CONTENT)

    _run(
        ProgramArguments(
            source_directory=str(source), target_directory=str(target), verbose=True
        )
    )

    _check((target / "root.txt").exists(), "root.txt was not copied")
    _check(_same_content(source / "root.txt", target / "root.txt"), "root.txt differs")
    _check(not (target / "hello.ignored.txt").exists(), "excluded file was copied")
    _check(
        not (target / "first" / "recursive.ignored.txt").exists(),
        "excluded file in a subdirectory was copied",
    )
    _check(
        not (target / "ignored-directory" / "ignored-by-parent.txt").exists(),
        "excluded directory was copied",
    )
    _check(
        _has_content(target / "conflicts" / "different.txt", NEW_VERSION_CONTENT),
        "newer source file did not overwrite the target",
    )
    _check(
        _same_content(source / "conflicts" / "different.txt", target / "conflicts" / "different.txt"),
        "conflicting file differs after synchronization",
    )
    _check(
        _has_content(target / "conflicts" / "skip-older.txt", NEW_VERSION_CONTENT),
        "older source file overwrote a newer target",
    )


def _simple_two_way(source: Path, target: Path) -> None:
    older = source / "common.txt"
    newer = target / "common.txt"
    source_only = source / "source-only.txt"
    target_only = target / "target-only.txt"

    _write(older, OLD_VERSION_CONTENT)
    _make_older(older)
    _write(newer, NEW_VERSION_CONTENT)
    _write(source_only)
    _write(target_only)

    _run(
        ProgramArguments(
            source_directory=str(source),
            target_directory=str(target),
            one_way=False,
            verbose=True,
        )
    )

    _check((source / target_only.name).exists(), "target-only file missing in source")
    _check((target / source_only.name).exists(), "source-only file missing in target")
    _check(_same_content(older, newer), "common file differs after synchronization")
    _check(_has_content(older, NEW_VERSION_CONTENT), "newer version did not win")


def _conflict_renaming(source: Path, target: Path) -> None:
    source_file = source / "common.txt"
    target_file = target / "common.txt"

    _write(target_file, OLD_VERSION_CONTENT)
    _make_older(target_file)
    _write(source_file, NEW_VERSION_CONTENT)
    older_time = target_file.stat().st_mtime

    _run(
        ProgramArguments(
            source_directory=str(source),
            target_directory=str(target),
            conflict_resolution=ConflictResolution.RENAME,
            verbose=True,
        )
    )

    renamed = target / f"common-{formatted_time(older_time)}.txt"
    _check(renamed.exists(), f"renamed copy {renamed.name} was not created")
    _check(_has_content(renamed, NEW_VERSION_CONTENT), "renamed copy has wrong content")
    _check(_has_content(source_file, NEW_VERSION_CONTENT), "source file was altered")
    _check(_has_content(target_file, OLD_VERSION_CONTENT), "old target version was not kept")


def _max_file_size(source: Path, target: Path) -> None:
    large_source = source / "large.txt"
    _write(large_source, "x" * 50)
    _write(target / ".dirsync.json", _config(exclusionPatterns=[], maxFileSize=20))

    _run(
        ProgramArguments(
            source_directory=str(source), target_directory=str(target), verbose=True
        )
    )

    _check(not (target / "large.txt").exists(), "file over the size limit was copied")


_SCENARIOS: tuple[tuple[str, Callable[[Path, Path], None]], ...] = (
    ("simple one-way synchronization with default settings", _simple_one_way),
    ("simple two-way synchronization with default settings", _simple_two_way),
    ("one-way synchronization with conflict renaming", _conflict_renaming),
    ("too large files are not accepted in target", _max_file_size),
)


def run_tests(directory: os.PathLike[str] | str | None = None) -> list[str]:
    """Run every built-in scenario under ``directory`` and return their descriptions.

    Each scenario works in ``source`` and ``target`` subdirectories, which are
    removed before and after it. Without a directory a temporary one is used.
    Raises :class:`SelfTestError` at the first failing check.
    """
    if directory is None:
        with tempfile.TemporaryDirectory(prefix="dirsync-") as scratch:
            return run_tests(scratch)

    root = Path(directory)
    source, target = root / "source", root / "target"
    passed: list[str] = []
    for number, (description, scenario) in enumerate(_SCENARIOS, start=1):
        print(f"Test {number}: {description}", flush=True)
        _remove(source)
        _remove(target)
        try:
            scenario(source, target)
        finally:
            _remove(source)
            _remove(target)
        passed.append(description)
    return passed