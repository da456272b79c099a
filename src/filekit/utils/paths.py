"""
Path utilities: joining, decomposition and the filesystem provider seam.

All filesystem access made by filekit's directory operations and path
resolvers goes through a ``FileSystemProvider``. The module-level default is
``StandardFileSystemProvider``; tests can swap it with
``set_filesystem_provider_for_testing`` or pass ``fs_provider=`` to a single
call.
"""
import glob
import os
from dataclasses import dataclass
from typing import List, Optional, Protocol, Union, runtime_checkable

from filekit import logger
from filekit.exceptions import PathError

PathLike = Union[str, "os.PathLike[str]"]


@runtime_checkable
class FileSystemProvider(Protocol):
    """
    Protocol defining the filesystem primitives filekit relies on.
    """

    def exists(self, path: str) -> bool:
        """Check if anything (file, directory, ...) exists at path."""
        ...

    def is_dir(self, path: str) -> bool:
        """Check if path is a directory."""
        ...

    def is_file(self, path: str) -> bool:
        """Check if path is a regular file."""
        ...

    def is_readable(self, path: str) -> bool:
        """Check if path exists and can be read by this process."""
        ...

    def make_dirs(self, path: str, mode: int) -> None:
        """Create path and any missing parents. Raises OSError on failure."""
        ...

    def glob(self, pattern: str) -> List[str]:
        """Return paths matching a glob pattern."""
        ...

    def unlink(self, path: str) -> None:
        """Remove a file. Raises OSError on failure."""
        ...

    def rmdir(self, path: str) -> None:
        """Remove an empty directory. Raises OSError on failure."""
        ...


class StandardFileSystemProvider:
    """
    Filesystem provider backed by ``os`` and ``glob``.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_readable(self, path: str) -> bool:
        return os.path.exists(path) and os.access(path, os.R_OK)

    def make_dirs(self, path: str, mode: int) -> None:
        os.makedirs(path, mode)

    def glob(self, pattern: str) -> List[str]:
        # Sorted to match the alphabetical order shell-style globbing yields
        return sorted(glob.glob(pattern))

    def unlink(self, path: str) -> None:
        os.unlink(path)

    def rmdir(self, path: str) -> None:
        os.rmdir(path)


_default_filesystem_provider: FileSystemProvider = StandardFileSystemProvider()


def get_provider(fs_provider: Optional[FileSystemProvider] = None) -> FileSystemProvider:
    """Return ``fs_provider`` if given, otherwise the active default provider."""
    return fs_provider if fs_provider is not None else _default_filesystem_provider


def set_filesystem_provider_for_testing(provider: FileSystemProvider) -> FileSystemProvider:
    """
    Install a custom filesystem provider as the module default.

    Args:
        provider: Provider implementing ``FileSystemProvider``

    Returns:
        Previously active provider (for restoration)
    """
    global _default_filesystem_provider
    previous_provider = _default_filesystem_provider
    _default_filesystem_provider = provider
    logger.debug(f"Filesystem provider changed: {type(provider).__name__}")
    return previous_provider


def restore_filesystem_provider(provider: FileSystemProvider) -> None:
    """Restore a provider returned by ``set_filesystem_provider_for_testing``."""
    global _default_filesystem_provider
    _default_filesystem_provider = provider
    logger.debug(f"Filesystem provider restored: {type(provider).__name__}")


def get_current_filesystem_provider() -> FileSystemProvider:
    """Get the currently active filesystem provider."""
    return _default_filesystem_provider


def join_path(*parts: PathLike) -> str:
    """
    Build a path from segments using the platform separator.

    The first segment only loses trailing separators, so absolute paths stay
    absolute. Every later segment loses leading and trailing separators. The
    result never ends with a separator.

    Args:
        *parts: One or more path segments

    Returns:
        The joined path

    Raises:
        PathError: If no segments are given

    Example:
        >>> join_path("a/", "/b", "c/")  # on POSIX
        'a/b/c'
        >>> join_path("/var/", "log")
        '/var/log'
    """
    if not parts:
        raise PathError("join_path() requires at least one path segment")

    sep = os.sep
    first, *rest = (os.fspath(p) for p in parts)

    path = first.rstrip(sep) + sep
    for part in rest:
        path += part.strip(sep) + sep

    return path.rstrip(sep)


@dataclass(frozen=True)
class PathInfo:
    """
    A path split into directory, filename stem and extension.

    ``directory`` is empty when the path has no directory component and
    ``extension`` never includes the dot.
    """

    directory: str
    stem: str
    extension: str

    @property
    def filename(self) -> str:
        if self.extension:
            return f"{self.stem}.{self.extension}"
        return self.stem

    def compose(self, stem: Optional[str] = None) -> str:
        """
        Rebuild the path, optionally with a different stem.

        Example:
            >>> path_info("docs/report.pdf").compose("report (1)")
            'docs/report (1).pdf'
        """
        info = self if stem is None else PathInfo(self.directory, stem, self.extension)
        if info.directory:
            return os.path.join(info.directory, info.filename)
        return info.filename


def path_info(path: PathLike) -> PathInfo:
    """
    Decompose a path into a ``PathInfo``.

    The extension is whatever follows the last dot of the filename; a leading
    dot (``.bashrc``) does not start an extension. Trailing separators are
    ignored, so ``backups/`` names ``backups`` rather than an empty filename.

    Example:
        >>> path_info("/tmp/archive.tar.gz")
        PathInfo(directory='/tmp', stem='archive.tar', extension='gz')
    """
    path = os.fspath(path)
    # A bare root keeps its separator
    path = path.rstrip(os.sep) or path
    directory, filename = os.path.split(path)
    stem, suffix = os.path.splitext(filename)
    return PathInfo(directory=directory, stem=stem, extension=suffix[1:])


def check_path_exists(
    path: PathLike,
    *,
    fs_provider: Optional[FileSystemProvider] = None
) -> bool:
    """
    Check whether anything exists at ``path`` through the active provider.

    Filesystem errors are logged and reported as ``False``.
    """
    provider = get_provider(fs_provider)
    try:
        return provider.exists(os.fspath(path))
    except OSError as e:
        logger.warning(f"check_path_exists failed for {path}: {e}")
        return False
