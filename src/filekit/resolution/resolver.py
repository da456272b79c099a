"""
Collision-safe path resolution.

Both strategies poll the filesystem until they find a path that does not
exist. The check and any later creation of the file are separate steps, so
two processes resolving at the same time can be handed the same path.
Existence goes through ``check_path_exists``, so a path whose check raises
``OSError`` counts as free.
"""
import os
from typing import Optional

from filekit import logger
from filekit.config import get_settings
from filekit.exceptions import PathError
from filekit.resolution.sequence import increment_sequence_number
from filekit.utils.names import random_string
from filekit.utils.paths import (
    FileSystemProvider,
    PathLike,
    check_path_exists,
    get_provider,
    join_path,
)


def available_path(
    dir: PathLike,
    length: Optional[int] = None,
    *,
    fs_provider: Optional[FileSystemProvider] = None
) -> str:
    """
    Generate a random file name that isn't already taken in a directory.

    Args:
        dir: The directory path
        length: Length of the random name (defaults to
            ``FileKitSettings.random_name_length``)
        fs_provider: Optional filesystem provider override

    Returns:
        A path directly inside ``dir`` that did not exist when checked

    Raises:
        PathError: If ``length`` is less than 1
    """
    provider = get_provider(fs_provider)
    if length is None:
        length = get_settings().random_name_length
    if length < 1:
        raise PathError(
            f"Random name length must be at least 1, got {length}",
            error_code="PATH_002",
            context={"dir": os.fspath(dir)},
        )

    while True:
        path = join_path(dir, random_string(length))
        if not check_path_exists(path, fs_provider=provider):
            logger.debug(f"Available path in {dir}: {path}")
            return path
        logger.debug(f"Random path already taken: {path}")


def sequenced_path(
    path: PathLike,
    *,
    fs_provider: Optional[FileSystemProvider] = None
) -> str:
    """
    Find the next available path by adding or incrementing a ``(N)`` suffix.

    Args:
        path: The attempted file path
        fs_provider: Optional filesystem provider override

    Returns:
        ``path`` itself if it is free, otherwise the first free
        ``<stem> (N).<extension>`` sibling

    Example:
        >>> # with report.pdf and report (1).pdf present
        >>> sequenced_path("report.pdf")
        'report (2).pdf'
    """
    provider = get_provider(fs_provider)
    path = os.fspath(path)

    while check_path_exists(path, fs_provider=provider):
        path = increment_sequence_number(path)

    logger.debug(f"Sequenced path resolved to {path}")
    return path
