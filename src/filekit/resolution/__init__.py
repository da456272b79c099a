"""Collision-safe path resolution."""

from filekit.resolution.sequence import (
    SEQUENCE_SUFFIX_PATTERN,
    find_sequence_number,
    increment_stem,
    increment_sequence_number,
    replace_filename,
)
from filekit.resolution.resolver import available_path, sequenced_path

__all__ = [
    "SEQUENCE_SUFFIX_PATTERN",
    "find_sequence_number",
    "increment_stem",
    "increment_sequence_number",
    "replace_filename",
    "available_path",
    "sequenced_path",
]
