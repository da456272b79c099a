"""
File reading and writing.

``read`` returns ``None`` rather than raising when a file is missing or
unreadable; ``write`` and ``write_with_lock`` return booleans.
"""
import enum
import os
from typing import Optional, Union

from filekit import logger
from filekit.config import get_settings
from filekit.utils.locking import FileLocker, get_default_locker
from filekit.utils.paths import FileSystemProvider, PathLike, get_provider

Contents = Union[str, bytes]


class WriteFlags(enum.IntFlag):
    """Flags accepted by ``write``."""

    NONE = 0
    APPEND = 1
    LOCK = 2


def read(
    path: PathLike,
    *,
    binary: bool = False,
    encoding: Optional[str] = None,
    fs_provider: Optional[FileSystemProvider] = None
) -> Optional[Contents]:
    """
    Read a file, returning None if it is unreadable.

    Args:
        path: The path to the file
        binary: Return bytes instead of text
        encoding: Text encoding (defaults to ``FileKitSettings.encoding``)
        fs_provider: Optional filesystem provider override for the
            readability check

    Returns:
        The file contents (an empty file gives ``""`` or ``b""``), or None if
        the path does not exist, cannot be read, or does not decode
    """
    path = os.fspath(path)

    if not get_provider(fs_provider).is_readable(path):
        logger.debug(f"File is not readable: {path}")
        return None

    try:
        if binary:
            with open(path, 'rb') as f:
                return f.read()
        with open(path, 'r', encoding=encoding or get_settings().encoding) as f:
            return f.read()
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return None
    except UnicodeDecodeError as e:
        logger.warning(f"Failed to decode {path}: {e}")
        return None


def _open_mode(base: str, contents: Contents) -> str:
    if isinstance(contents, bytes) and 'b' not in base:
        return base + 'b'
    return base


def write(
    path: PathLike,
    contents: Contents,
    flags: WriteFlags = WriteFlags.NONE,
    *,
    encoding: Optional[str] = None,
    locker: Optional[FileLocker] = None
) -> bool:
    """
    Write a string or bytes to a file.

    Args:
        path: The path to the file
        contents: The contents for the file
        flags: ``WriteFlags.APPEND`` appends instead of truncating;
            ``WriteFlags.LOCK`` holds an exclusive lock while writing
        encoding: Text encoding (defaults to ``FileKitSettings.encoding``)
        locker: Locker used with ``WriteFlags.LOCK``

    Returns:
        Whether the file was written
    """
    path = os.fspath(path)
    flags = WriteFlags(flags)
    # A locked write must not truncate before the lock is held
    opens_for_append = bool(flags & (WriteFlags.APPEND | WriteFlags.LOCK))
    mode = _open_mode('a' if opens_for_append else 'w', contents)
    encoding = None if 'b' in mode else (encoding or get_settings().encoding)

    try:
        with open(path, mode, encoding=encoding) as f:
            if flags & WriteFlags.LOCK:
                locker = locker or get_default_locker()
                if not locker.acquire_exclusive(f):
                    logger.error(f"Could not lock {path} for writing")
                    return False
                try:
                    if not flags & WriteFlags.APPEND:
                        f.truncate(0)
                    f.write(contents)
                    f.flush()
                finally:
                    locker.release(f)
            else:
                f.write(contents)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False

    logger.debug(f"Wrote {len(contents)} {'bytes' if 'b' in mode else 'characters'} to {path}")
    return True


def write_with_lock(
    path: PathLike,
    contents: Contents,
    mode: Optional[str] = None,
    *,
    encoding: Optional[str] = None,
    locker: Optional[FileLocker] = None
) -> bool:
    """
    Write to a file while holding an exclusive advisory lock.

    The handle is opened with ``mode``, locked, written, flushed, unlocked and
    closed. If the lock cannot be acquired nothing is written, but the handle
    is still closed and the result only reflects the close.

    Args:
        path: The path to the file
        contents: The contents for the file
        mode: open() mode (defaults to ``FileKitSettings.lock_mode``); ``b`` is
            added automatically for bytes contents
        encoding: Text encoding (defaults to ``FileKitSettings.encoding``)
        locker: Locker to use (defaults to ``get_default_locker()``)

    Returns:
        Whether the handle was closed successfully

    Raises:
        OSError: If the file cannot be opened at all
        Exception: Anything other than ``OSError`` raised while locking or
            writing propagates after the handle has been closed
    """
    settings = get_settings()
    mode = _open_mode(mode or settings.lock_mode, contents)
    encoding = None if 'b' in mode else (encoding or settings.encoding)
    locker = locker or get_default_locker()

    handle = open(os.fspath(path), mode, encoding=encoding)

    closed = False
    try:
        if locker.acquire_exclusive(handle):
            try:
                handle.write(contents)
                handle.flush()
            except OSError as e:
                logger.error(f"Failed to write {path}: {e}")
            finally:
                locker.release(handle)
        else:
            logger.warning(f"Lock not acquired for {path}; contents not written")
    finally:
        try:
            handle.close()
            closed = True
        except OSError as e:
            logger.error(f"Failed to close {path}: {e}")
    return closed
