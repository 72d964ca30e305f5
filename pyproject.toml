[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dirsync"
version = "0.0.0"
description = "Recursive one-way and two-way directory synchronization with per-directory filter configuration"
requires-python = ">=3.10"
dependencies = []
keywords = ["sync", "synchronization", "mirror", "backup", "directories", "files"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Mirroring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dirsync = "dirsync.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dirsync"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
