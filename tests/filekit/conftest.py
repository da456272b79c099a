"""
Shared fixtures for filekit tests.

- ``InMemoryFilesystem``: a ``FileSystemProvider`` holding files and
  directories in sets, recording every operation for behaviour checks
- ``memory_fs``: an empty in-memory filesystem installed as the default provider
- ``file_tree``: a small real directory tree under ``tmp_path``
"""

import fnmatch
import os
from typing import List, Set, Tuple

import pytest

from filekit.utils.paths import set_filesystem_provider_for_testing


class InMemoryFilesystem:
    """
    Protocol-based in-memory filesystem provider.

    Paths are stored exactly as given, so tests should build them with
    ``os.path.join`` or ``join_path``.
    """

    def __init__(self):
        self.files: Set[str] = set()
        self.dirs: Set[str] = {os.sep}
        self.unreadable: Set[str] = set()
        self.operation_log: List[Tuple[str, str]] = []

    # -- setup helpers -----------------------------------------------------

    def add_file(self, path: str) -> str:
        self.add_directory(os.path.dirname(path))
        self.files.add(path)
        return path

    def add_directory(self, path: str) -> str:
        while path and path not in self.dirs:
            self.dirs.add(path)
            parent = os.path.dirname(path)
            if parent == path:
                break
            path = parent
        return path

    def calls(self, operation: str) -> List[str]:
        return [path for op, path in self.operation_log if op == operation]

    # -- FileSystemProvider ------------------------------------------------

    def exists(self, path: str) -> bool:
        self.operation_log.append(("exists", path))
        return path in self.files or path in self.dirs

    def is_dir(self, path: str) -> bool:
        self.operation_log.append(("is_dir", path))
        return path in self.dirs

    def is_file(self, path: str) -> bool:
        self.operation_log.append(("is_file", path))
        return path in self.files

    def is_readable(self, path: str) -> bool:
        self.operation_log.append(("is_readable", path))
        return self.exists(path) and path not in self.unreadable

    def make_dirs(self, path: str, mode: int) -> None:
        self.operation_log.append(("make_dirs", path))
        if path in self.files:
            raise FileExistsError(f"File exists at path: {path}")
        self.add_directory(path)

    def glob(self, pattern: str) -> List[str]:
        self.operation_log.append(("glob", pattern))
        directory, name_pattern = os.path.split(pattern)
        entries = (self.files | self.dirs) - {directory}
        return sorted(
            entry for entry in entries
            if os.path.dirname(entry) == directory
            and not os.path.basename(entry).startswith(".")
            and fnmatch.fnmatchcase(os.path.basename(entry), name_pattern)
        )

    def unlink(self, path: str) -> None:
        self.operation_log.append(("unlink", path))
        if path not in self.files:
            raise FileNotFoundError(path)
        self.files.remove(path)

    def rmdir(self, path: str) -> None:
        self.operation_log.append(("rmdir", path))
        if path not in self.dirs:
            raise FileNotFoundError(path)
        if any(os.path.dirname(entry) == path for entry in (self.files | self.dirs) - {path}):
            raise OSError(f"Directory not empty: {path}")
        self.dirs.remove(path)


@pytest.fixture
def memory_fs():
    """Empty in-memory filesystem installed as the default provider."""
    fs = InMemoryFilesystem()
    set_filesystem_provider_for_testing(fs)
    return fs


@pytest.fixture
def file_tree(tmp_path):
    """
    Real directory tree::

        root/
            a.txt
            b.log
            .hidden
            sub/
                c.txt
                deeper/
                    d.txt
            empty/
    """
    root = tmp_path / "root"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("a")
    (root / "b.log").write_text("b")
    (root / ".hidden").write_text("h")
    (root / "sub" / "c.txt").write_text("c")
    (root / "sub" / "deeper" / "d.txt").write_text("d")
    return root
