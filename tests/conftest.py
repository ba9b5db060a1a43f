"""Pytest configuration and shared fixtures for modpath tests."""

import json
from collections import Counter
from pathlib import Path

import pytest

from modpath.fs.file_system import FileSystem
from modpath.resolution.options import ResolverOptions
from modpath.resolution.resolver import PathResolver


class CountingFileSystem(FileSystem):
    """FileSystem that records every call made through it."""

    def __init__(self):
        super().__init__()
        self.calls: Counter[str] = Counter()

    @property
    def total(self) -> int:
        return sum(self.calls.values())

    def exists(self, path):
        self.calls["exists"] += 1
        return super().exists(path)

    def is_dir(self, path):
        self.calls["is_dir"] += 1
        return super().is_dir(path)

    def is_file(self, path):
        self.calls["is_file"] += 1
        return super().is_file(path)

    def read_text(self, path):
        self.calls["read_text"] += 1
        return super().read_text(path)

    def list_files(self, directory, allowed, excluded=(), recursive=True):
        self.calls["list_files"] += 1
        return super().list_files(directory, allowed, excluded, recursive)


@pytest.fixture
def write_tree():
    """Create files below a root from a {relative_path: content} mapping.

    Dict content is written as JSON; directories are created as needed.
    """

    def _write(root: Path, files: dict) -> Path:
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                content = json.dumps(content)
            target.write_text(content)
        return root

    return _write


@pytest.fixture
def counting_fs():
    return CountingFileSystem()


@pytest.fixture
def make_resolver():
    """Build a resolver with optional options and file system."""

    def _make(file_system=None, **option_fields) -> PathResolver:
        options = ResolverOptions(**option_fields) if option_fields else None
        return PathResolver(file_system=file_system, options=options)

    return _make
