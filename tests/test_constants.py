import pytest

from dirsync.constants import PROGRAM_VERSION, ExitCode, SyncError, Version


def test_sync_error_keeps_exit_code_and_message():
    error = SyncError("boom", ExitCode.INCOMPATIBLE_ENTRIES)
    assert error.exit_code is ExitCode.INCOMPATIBLE_ENTRIES
    assert str(error) == "boom"


def test_sync_error_defaults_to_filesystem_error():
    assert SyncError("x").exit_code is ExitCode.FILESYSTEM_ERROR


def test_sync_error_converts_plain_int():
    assert SyncError("x", 4).exit_code is ExitCode.CONFIG_FILE_PARSE_ERROR


def test_version_string_form():
    assert str(Version(1, 2, 3)) == "1.2.3"


def test_version_ordering_is_lexicographic():
    versions = [Version(1, 0, 5), Version(0, 9, 9), Version(1, 0, 0), Version(0, 10, 0)]
    assert sorted(versions) == [Version(0, 9, 9), Version(0, 10, 0), Version(1, 0, 0), Version(1, 0, 5)]


def test_different_major_is_incompatible():
    assert not Version(1, 0, 0).is_compatible_with(Version(2, 0, 0))
    assert not Version(2, 0, 0).is_compatible_with(Version(1, 0, 0))


def test_major_zero_requires_exact_match():
    assert Version(0, 1, 0).is_compatible_with(Version(0, 1, 0))
    assert not Version(0, 1, 0).is_compatible_with(Version(0, 2, 0))
    assert not Version(0, 1, 1).is_compatible_with(Version(0, 1, 0))


def test_stable_version_compatible_with_newer_program():
    assert Version(1, 2, 0).is_compatible_with(Version(1, 3, 0))
    assert not Version(1, 3, 0).is_compatible_with(Version(1, 2, 0))


def test_program_version_is_self_compatible():
    assert PROGRAM_VERSION.is_compatible_with(PROGRAM_VERSION)
    assert PROGRAM_VERSION == Version()


@pytest.mark.parametrize("bad", [-1, -5])
def test_negative_components_rejected(bad):
    with pytest.raises(ValueError):
        Version(bad, 0, 0)


def test_non_integer_components_rejected():
    with pytest.raises(TypeError):
        Version("1", 0, 0)