import json
import os

import pytest

from dirsync.arguments import ConflictResolution, ProgramArguments
from dirsync.configuration import ConfigParseError
from dirsync.constants import ExitCode
from dirsync.one_way import OneWaySynchronizer
from dirsync.synchronize import formatted_time

OLD = "old version"
NEW = "new version"


def write(path, content="", mtime=None):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))


def write_config(directory, patterns=(), max_file_size=None):
    data = {
        "configVersion": {"major": 0, "minor": 0, "patch": 0},
        "exclusionPatterns": list(patterns),
    }
    if max_file_size is not None:
        data["maxFileSize"] = max_file_size
    directory.mkdir(parents=True, exist_ok=True)
    (directory / ".dirsync.json").write_text(json.dumps(data))


@pytest.fixture
def dirs(tmp_path):
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    return source, target


def arguments_for(source, target, **options):
    return ProgramArguments(
        source_directory=str(source), target_directory=str(target), **options
    )


def test_simple_one_way(dirs):
    source, target = dirs
    write(source / "root.txt", "root")
    write(source / "hello.ignored.txt", "hello")
    write(source / "first" / "recursive.ignored.txt")
    write(source / "ignored-directory" / "ignored-by-parent.txt")
    write_config(source, ["*.ignored.txt", "ignored-directory"], 100)

    write(target / "conflicts" / "different.txt", OLD, mtime=1_000_000)
    write(source / "conflicts" / "different.txt", NEW, mtime=1_000_002)
    write(source / "conflicts" / "skip-older.txt", OLD, mtime=1_000_000)
    write(target / "conflicts" / "skip-older.txt", NEW, mtime=1_000_002)

    OneWaySynchronizer(arguments_for(source, target, verbose=True)).synchronize()

    assert (target / "root.txt").read_text() == "root"
    assert not (target / "hello.ignored.txt").exists()
    assert not (target / "first" / "recursive.ignored.txt").exists()
    assert not (target / "ignored-directory" / "ignored-by-parent.txt").exists()
    assert (target / "conflicts" / "different.txt").read_text() == NEW
    assert (target / "conflicts" / "skip-older.txt").read_text() == NEW


def test_rename_conflict(dirs):
    source, target = dirs
    write(target / "common.txt", OLD, mtime=1_000_000)
    write(source / "common.txt", NEW, mtime=1_000_002)

    OneWaySynchronizer(
        arguments_for(source, target, conflict_resolution=ConflictResolution.RENAME)
    ).synchronize()

    renamed = target / f"common-{formatted_time(1_000_000)}.txt"
    assert renamed.read_text() == NEW
    assert (source / "common.txt").read_text() == NEW
    assert (target / "common.txt").read_text() == OLD


def test_max_file_size_in_target(dirs):
    source, target = dirs
    write(source / "large.txt", "x" * 50)
    write(source / "small.txt", "x" * 5)
    write_config(target, max_file_size=20)

    OneWaySynchronizer(arguments_for(source, target)).synchronize()

    assert not (target / "large.txt").exists()
    assert (target / "small.txt").read_text() == "x" * 5


def test_skip_keeps_older_target(dirs):
    source, target = dirs
    write(target / "common.txt", OLD, mtime=1_000_000)
    write(source / "common.txt", NEW, mtime=1_000_002)

    OneWaySynchronizer(
        arguments_for(source, target, conflict_resolution=ConflictResolution.SKIP)
    ).synchronize()

    assert (target / "common.txt").read_text() == OLD


def test_equal_write_times_are_not_copied(dirs):
    source, target = dirs
    write(target / "common.txt", OLD, mtime=1_000_000)
    write(source / "common.txt", NEW, mtime=1_000_000)

    OneWaySynchronizer(arguments_for(source, target)).synchronize()

    assert (target / "common.txt").read_text() == OLD


def test_dry_run_copies_nothing(dirs, capsys):
    source, target = dirs
    write(source / "a.txt", "a")
    write(source / "nested" / "b.txt", "b")

    OneWaySynchronizer(
        arguments_for(source, target, dry_run=True, verbose=True)
    ).synchronize()

    assert list(target.iterdir()) == []
    assert f'Copying "{source / "a.txt"}"' in capsys.readouterr().out


def test_nested_directories_are_created(dirs):
    source, target = dirs
    write(source / "one" / "two" / "deep.txt", "deep")

    OneWaySynchronizer(arguments_for(source, target)).synchronize()

    assert (target / "one" / "two" / "deep.txt").read_text() == "deep"


def test_delete_extra_removes_files_and_directories(dirs):
    source, target = dirs
    write(source / "keep.txt", "keep")
    write(target / "extra.txt", "extra")
    write(target / "extra-dir" / "inner.txt", "inner")

    OneWaySynchronizer(arguments_for(source, target, delete_extra=True)).synchronize()

    assert sorted(p.name for p in target.iterdir()) == ["keep.txt"]


def test_delete_extra_dry_run_keeps_files(dirs):
    source, target = dirs
    write(target / "extra.txt", "extra")

    OneWaySynchronizer(
        arguments_for(source, target, delete_extra=True, dry_run=True)
    ).synchronize()

    assert (target / "extra.txt").read_text() == "extra"


def test_config_file_not_copied_by_default(dirs):
    source, target = dirs
    write_config(source, ["*.log"])

    OneWaySynchronizer(arguments_for(source, target)).synchronize()

    assert not (target / ".dirsync.json").exists()


def test_config_file_copied_when_requested(dirs):
    source, target = dirs
    write_config(source, ["*.log"])

    OneWaySynchronizer(
        arguments_for(source, target, copy_configurations=True)
    ).synchronize()

    assert (target / ".dirsync.json").read_text() == (source / ".dirsync.json").read_text()


def test_malformed_configuration_raises(dirs):
    source, target = dirs
    (source / ".dirsync.json").write_text("{not json")

    with pytest.raises(ConfigParseError) as info:
        OneWaySynchronizer(arguments_for(source, target)).synchronize()
    assert info.value.exit_code is ExitCode.CONFIG_FILE_PARSE_ERROR


def test_should_synchronize_uses_loaded_configurations(dirs):
    source, target = dirs
    write_config(source, ["*.log"])
    write(source / "a.log")
    write(source / "a.txt")
    synchronizer = OneWaySynchronizer(arguments_for(source, target))

    with synchronizer.configuration_scope(source, target):
        assert synchronizer.should_synchronize(source / "a.log") is False
        assert synchronizer.should_synchronize(source / "a.txt") is True
    assert synchronizer.configuration_stack == []