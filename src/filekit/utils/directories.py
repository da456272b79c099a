"""
Directory operations: create, list and delete.

Failures are reported through return values: ``create_dir`` and
``delete_dir`` return ``False`` instead of raising.
"""
import glob
import os
from typing import List, Optional

from filekit import logger
from filekit.config import get_settings
from filekit.utils.paths import FileSystemProvider, PathLike, get_provider, join_path


def create_dir(
    path: PathLike,
    mode: Optional[int] = None,
    *,
    fs_provider: Optional[FileSystemProvider] = None
) -> bool:
    """
    Create a directory and any missing parents if it doesn't exist.

    Args:
        path: Directory to create
        mode: Permission bits (defaults to ``FileKitSettings.directory_mode``)
        fs_provider: Optional filesystem provider override

    Returns:
        True if the directory exists after the call, False if it could not be
        created
    """
    provider = get_provider(fs_provider)
    path = os.fspath(path)

    if provider.is_dir(path):
        return True

    if mode is None:
        mode = get_settings().directory_mode

    try:
        provider.make_dirs(path, mode)
    except OSError as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return False

    logger.debug(f"Created directory {path} (mode={oct(mode)})")
    return True


def list_dir(
    dir: PathLike,
    recursive: bool = False,
    *,
    fs_provider: Optional[FileSystemProvider] = None
) -> List[str]:
    """
    List the regular files in a directory.

    Entries are visited in glob order. With ``recursive`` a subdirectory's
    files are spliced in where the subdirectory appears; directories
    themselves are never listed. Hidden entries are skipped, as glob does.

    Args:
        dir: Directory to list
        recursive: Whether to descend into subdirectories
        fs_provider: Optional filesystem provider override

    Returns:
        File paths, each starting with ``dir``
    """
    provider = get_provider(fs_provider)
    files = []

    for path in provider.glob(join_path(glob.escape(os.fspath(dir)), "*")):
        if recursive and provider.is_dir(path):
            files.extend(list_dir(path, recursive, fs_provider=provider))
        elif provider.is_file(path):
            files.append(path)

    logger.debug(f"Listed {len(files)} files in {dir} (recursive={recursive})")
    return files


def delete_dir(
    dir: PathLike,
    *,
    fs_provider: Optional[FileSystemProvider] = None
) -> bool:
    """
    Delete the files directly inside ``dir``, then ``dir`` itself.

    Subdirectories are not descended into: if ``dir`` holds a non-empty
    subdirectory the final removal fails and the subdirectory is left in
    place.

    Args:
        dir: Directory to delete
        fs_provider: Optional filesystem provider override

    Returns:
        Whether the directory itself was removed
    """
    provider = get_provider(fs_provider)
    dir = os.fspath(dir)

    for path in list_dir(dir, fs_provider=provider):
        try:
            provider.unlink(path)
        except OSError as e:
            logger.warning(f"Failed to delete file {path}: {e}")

    try:
        provider.rmdir(dir)
    except OSError as e:
        logger.warning(f"Failed to remove directory {dir}: {e}")
        return False

    logger.debug(f"Removed directory {dir}")
    return True
