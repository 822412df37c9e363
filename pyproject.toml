[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "toyos"
version = "0.1.0"
description = "Toy operating-system services: a block-based file system, a WAL-backed key-value store with an LRU cache, and a syscall dispatcher"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "filesystem",
    "inode",
    "write-ahead-log",
    "lru-cache",
    "key-value-store",
    "syscall",
    "education",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Database",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["toyos"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
