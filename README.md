# dirsync

`dirsync` recursively copies new and newer files from a source directory into
a target directory. It can also synchronize two directories in both
directions.

## Installation

```
pip install .
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Usage

```
dirsync [OPTIONS] <source-directory> <target-directory>
```

All options must come before the two directories. The first argument that
does not start with `-` ends the options.

| Option | Meaning |
| --- | --- |
| `-h`, `--help` | Show help and exit. No directories are needed. |
| `--verbose` | Report each file that is copied, skipped as older, or deleted. |
| `--dry-run` | Report what would happen, but change nothing. Works well with `--verbose`. |
| `--bi`, `--bidirectional` | Two-way synchronization. Both directories may be changed. |
| `-d`, `--delete-extra` | Delete files and folders in the target that the source does not have. In two-way mode this option is turned off, with a warning. |
| `-s`, `--skip-existing`, `--safe` | Leave files that exist on both sides as they are. |
| `-r`, `--rename` | On a conflict, write the newer content to a new file next to the older one. The new file's name is the older file's name with that file's last write time (UTC) inserted before the extension, as `-YYYY-MM-DD-hh-mm-ss`. The older file is kept. |
| `--copy-configs`, `--copy-configurations` | Also copy directory configuration files. |
| `--test` | Run the built-in self-test scenarios in a temporary directory. |

Extra directories after the first two are ignored with a warning. With
`--help` or `--test`, any directories given are ignored with a warning.

### Conflicts

By default a conflict is resolved by modification time: the newer file
overwrites the older one.

- One-way: an older source file never replaces a newer target file. Files with
  identical write times are left alone.
- Two-way: write times within the same second count as equal, and then nothing
  is copied. A file or directory that exists on one side only is copied to the
  other side.

In one-way mode the target directory is created if it does not exist. In
two-way mode both directories must already exist.

Only regular files and directories are synchronized. In one-way mode other
entries are skipped with a warning; in two-way mode they, and names that are a
file on one side and a directory on the other, stop the run with exit code 6.

Examples:

```
dirsync --verbose photos /mnt/backup/photos
dirsync --bi --rename notes ~/shared/notes
dirsync --dry-run --verbose -d projects /mnt/mirror/projects
```

## Directory configuration

Any directory may hold a `.dirsync.json` file:

```json
{
  "configVersion": {"major": 0, "minor": 0, "patch": 0},
  "exclusionPatterns": ["*.log", "build", "tmp-*"],
  "maxFileSize": 1048576
}
```

- `exclusionPatterns` (required) lists names of files or directories that are
  not copied to or from the directory. Only `*` is special; it matches any run
  of characters, including none. The whole name must match.
- `maxFileSize` (optional) is the largest regular file, in bytes, that is
  copied to or from the directory. A value that is not a non-negative integer
  means no limit.
- `configVersion` (required) must be compatible with the program's version,
  0.0.0. Versions with major number 0 must match exactly; otherwise the major
  numbers must be equal and the configuration's version no newer than the
  program's.

In one-way mode the rules of a directory also apply to every directory below
it. In two-way mode each directory's own file decides which of its entries
are synchronized.

A file that cannot be parsed stops the run with exit code 4; an incompatible
version stops it with exit code 5.

Any file whose name starts with `.dirsync` counts as a configuration file.
Such files are copied only with `--copy-configs`. In one-way mode a
configuration file is copied only if the target directory has no configuration
of its own, and an existing target file is never overwritten.

## Exit codes

| Code | Meaning |
| --- | --- |
| 0 | Success |
| 1 | Incorrect usage, or a failing `--test` scenario |
| 2 | The source directory does not exist or is not a directory |
| 3 | Filesystem error |
| 4 | A configuration file could not be parsed |
| 5 | The configuration version is incompatible |
| 6 | Two entries with the same name have incompatible types |

## Library use

```python
from dirsync.arguments import parse_arguments
from dirsync.constants import SyncError
from dirsync.runner import synchronize_directories

args = parse_arguments(["dirsync", "--verbose", "source", "target"])
try:
    synchronize_directories(args)
except SyncError as error:
    print(error, error.exit_code)
```

`parse_arguments` takes the full argument vector, program name first, and
raises `dirsync.arguments.UsageError` on bad input. `ProgramArguments` can
also be built directly, for example
`ProgramArguments(source_directory="a", target_directory="b", one_way=False)`.

Other useful pieces:

- `dirsync.one_way.OneWaySynchronizer` and `dirsync.two_way.TwoWaySynchronizer`
  take a `ProgramArguments` and have a `synchronize()` method.
- `dirsync.configuration.read_directory_configuration(directory)` returns a
  `DirectoryConfiguration` or `None`; `parse_configuration(data)` builds one
  from decoded JSON.
- `dirsync.wildcards.wildcard_matches(pattern, text)` is the name matcher.
- `dirsync.selftest.run_tests(directory)` runs the built-in scenarios and
  raises `SelfTestError` at the first failing check.