"""Random file name generation."""
import random
import string

NAME_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def random_string(length: int = 32) -> str:
    """
    Generate a string of letters and digits.

    Characters are drawn uniformly, with replacement, from ``A-Z``, ``a-z``
    and ``0-9``. Uses the ``random`` module, so the result is not suitable
    for secrets; it is meant for low-collision file names.

    Args:
        length: Number of characters (``<= 0`` yields an empty string)
    """
    if length <= 0:
        return ""
    return "".join(random.choices(NAME_ALPHABET, k=length))
