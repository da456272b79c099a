"""
Advisory file locking behind a small capability interface.

A ``FileLocker`` acquires an exclusive lock on an open file handle and
releases it again. ``get_default_locker()`` picks the platform
implementation; callers that need different behaviour can pass their own
locker to ``write_with_lock``.
"""
import os
from typing import IO, Any, Protocol, runtime_checkable

from filekit import logger
from filekit.exceptions import LockError


@runtime_checkable
class FileLocker(Protocol):
    """Protocol for exclusive advisory locks on open file handles."""

    def acquire_exclusive(self, handle: IO[Any]) -> bool:
        """Block until an exclusive lock is held. Return False if it cannot be taken."""
        ...

    def release(self, handle: IO[Any]) -> None:
        """Release a lock taken with ``acquire_exclusive``."""
        ...


def _fileno(handle: IO[Any]) -> int:
    try:
        return handle.fileno()
    except (AttributeError, OSError, ValueError) as e:
        raise LockError(
            f"Handle has no usable file descriptor: {e}",
            error_code="LOCK_001",
            context={"handle": repr(handle)},
        ) from e


class PosixFileLocker:
    """``fcntl.flock`` based locker for POSIX systems."""

    def acquire_exclusive(self, handle: IO[Any]) -> bool:
        import fcntl

        try:
            fcntl.flock(_fileno(handle), fcntl.LOCK_EX)
        except (OSError, LockError) as e:
            logger.warning(f"Could not lock {getattr(handle, 'name', handle)}: {e}")
            return False
        return True

    def release(self, handle: IO[Any]) -> None:
        import fcntl

        try:
            fcntl.flock(_fileno(handle), fcntl.LOCK_UN)
        except (OSError, LockError) as e:
            logger.warning(f"Could not unlock {getattr(handle, 'name', handle)}: {e}")


class WindowsFileLocker:
    """
    ``msvcrt.locking`` based locker for Windows.

    Locks the first byte of the file, which every cooperating writer agrees
    on regardless of where its own handle is positioned.
    """

    def _lock_region(self, handle: IO[Any], lock_mode: int) -> None:
        import msvcrt

        fd = _fileno(handle)
        handle.flush()
        position = os.lseek(fd, 0, os.SEEK_CUR)
        try:
            os.lseek(fd, 0, os.SEEK_SET)
            msvcrt.locking(fd, lock_mode, 1)
        finally:
            os.lseek(fd, position, os.SEEK_SET)

    def acquire_exclusive(self, handle: IO[Any]) -> bool:
        import msvcrt

        try:
            self._lock_region(handle, msvcrt.LK_LOCK)
        except (OSError, LockError) as e:
            logger.warning(f"Could not lock {getattr(handle, 'name', handle)}: {e}")
            return False
        return True

    def release(self, handle: IO[Any]) -> None:
        import msvcrt

        try:
            self._lock_region(handle, msvcrt.LK_UNLCK)
        except (OSError, LockError) as e:
            logger.warning(f"Could not unlock {getattr(handle, 'name', handle)}: {e}")


def get_default_locker() -> FileLocker:
    """Return the locker for the running platform."""
    if os.name == "nt":
        return WindowsFileLocker()
    return PosixFileLocker()
