"""
Leaf filesystem utilities.

Re-exports the path, directory, formatting, naming, locking and file I/O
helpers so callers can import them from ``filekit.utils`` directly.
"""

from filekit.utils.paths import (
    FileSystemProvider,
    StandardFileSystemProvider,
    PathInfo,
    join_path,
    path_info,
    check_path_exists,
    set_filesystem_provider_for_testing,
    restore_filesystem_provider,
    get_current_filesystem_provider,
)
from filekit.utils.directories import create_dir, list_dir, delete_dir
from filekit.utils.formatting import format_bytes
from filekit.utils.names import random_string
from filekit.utils.locking import (
    FileLocker,
    PosixFileLocker,
    WindowsFileLocker,
    get_default_locker,
)
from filekit.utils.files import WriteFlags, read, write, write_with_lock

__all__ = [
    "FileSystemProvider",
    "StandardFileSystemProvider",
    "PathInfo",
    "join_path",
    "path_info",
    "check_path_exists",
    "set_filesystem_provider_for_testing",
    "restore_filesystem_provider",
    "get_current_filesystem_provider",
    "create_dir",
    "list_dir",
    "delete_dir",
    "format_bytes",
    "random_string",
    "FileLocker",
    "PosixFileLocker",
    "WindowsFileLocker",
    "get_default_locker",
    "WriteFlags",
    "read",
    "write",
    "write_with_lock",
]
