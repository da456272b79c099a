"""
Sequence-number suffixes on file names.

A sequence suffix is a parenthesised run of ASCII digits at the very end of a
filename stem, e.g. the ``(2)`` in ``report (2).pdf``. Incrementing a name
bumps that number, or appends `` (1)`` when the stem has none:

    my_file.pdf      => my_file (1).pdf
    my_file (1).pdf  => my_file (2).pdf
    notes (draft).txt => notes (draft) (1).txt
"""
import re
from typing import Optional

from filekit.utils.paths import PathLike, path_info

SEQUENCE_SUFFIX_PATTERN = re.compile(r"\(([0-9]+)\)\Z")


def find_sequence_number(stem: str) -> Optional[int]:
    """Return the trailing sequence number of ``stem``, or None if it has none."""
    match = SEQUENCE_SUFFIX_PATTERN.search(stem)
    return int(match.group(1)) if match else None


def increment_stem(stem: str) -> str:
    """
    Bump the trailing ``(N)`` of a stem, or append `` (1)``.

    Only the digits inside the final parentheses change; everything before
    them is preserved. Leading zeros are not kept (``(007)`` becomes ``(8)``).
    """
    match = SEQUENCE_SUFFIX_PATTERN.search(stem)
    if match is None:
        return f"{stem} (1)"
    return f"{stem[:match.start()]}({int(match.group(1)) + 1})"


def replace_filename(path: PathLike, stem: str) -> str:
    """
    Replace the filename stem of ``path``, keeping its directory and extension.

    Example:
        >>> replace_filename("docs/report.pdf", "summary")
        'docs/summary.pdf'
    """
    return path_info(path).compose(stem)


def increment_sequence_number(path: PathLike) -> str:
    """
    Increment the sequence number of the filename in ``path``.

    Example:
        >>> increment_sequence_number("docs/report (1).pdf")
        'docs/report (2).pdf'
    """
    info = path_info(path)
    return info.compose(increment_stem(info.stem))
