"""Human-readable byte counts."""
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

BYTE_UNITS = ('B', 'KB', 'MB', 'GB', 'TB')


def format_bytes(bytes: Union[int, float], precision: int = 0) -> str:
    """
    Format a byte count using the largest unit whose value is at least 1.

    Units stop at TB; larger counts are still reported in TB. Negative counts
    are treated as zero. Values are rounded half away from zero and printed
    without trailing zeros.

    Args:
        bytes: The byte count
        precision: Number of decimal places to keep

    Returns:
        A string such as ``"1.5 KB"``

    Example:
        >>> format_bytes(1536, 1)
        '1.5 KB'
        >>> format_bytes(0)
        '0 B'
    """
    bytes = max(bytes, 0)

    power = 0
    while power < len(BYTE_UNITS) - 1 and bytes >= 1024 ** (power + 1):
        power += 1

    with localcontext() as ctx:
        # Room for the integer digits plus every requested decimal place
        ctx.prec = 60 + max(precision, 0)
        value = Decimal(bytes) / (Decimal(1024) ** power)
        rounded = value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        text = format(rounded.normalize(), 'f')

    return f"{text} {BYTE_UNITS[power]}"
