"""
Environment variable readers used to build settings.

Each reader returns the supplied default when the variable is unset and raises
``ValueError`` when a value is present but malformed.
"""

import os
from typing import Callable, Optional, TypeVar

from loguru import logger

T = TypeVar('T')


def get_env_var(
    name: str,
    default: Optional[str] = None,
    required: bool = False
) -> Optional[str]:
    """
    Get an environment variable with consistent error handling.

    Args:
        name: Name of the environment variable
        default: Default value to return if not found
        required: If True, raise an error if not found

    Returns:
        Value of the environment variable or default

    Raises:
        ValueError: If required is True and the variable is not set

    Example:
        >>> get_env_var("FILEKIT_ENCODING", default="utf-8")
    """
    value = os.environ.get(name)

    if value is None:
        if required:
            raise ValueError(f"Required environment variable {name} is not set")
        return default

    return value


def get_env_var_as_type(
    name: str,
    default: Optional[T] = None,
    required: bool = False,
    converter: Callable[[str], T] = str,
    error_msg: Optional[str] = None
) -> Optional[T]:
    """
    Get an environment variable and convert it to a specific type.

    Args:
        name: Name of the environment variable
        default: Default value to return if not found
        required: If True, raise an error if not found
        converter: Function to convert the string value to the desired type
        error_msg: Custom error message for conversion failures

    Returns:
        Converted value of the environment variable or default

    Raises:
        ValueError: If required is True and the variable is not set
        ValueError: If conversion fails
    """
    value = get_env_var(name, default=None, required=required)

    if value is None:
        return default

    try:
        return converter(value)
    except Exception as e:
        msg = error_msg or f"Failed to convert environment variable {name}={value} using {converter.__name__}"
        logger.error(f"{msg}: {str(e)}")
        raise ValueError(f"{msg}: {str(e)}") from e


def get_env_int(
    name: str,
    default: Optional[int] = None,
    required: bool = False,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None
) -> Optional[int]:
    """
    Get an environment variable as an integer with optional range validation.

    Example:
        >>> get_env_int("FILEKIT_RANDOM_NAME_LENGTH", default=32, min_value=1)
    """
    def convert_and_validate(value: str) -> int:
        try:
            result = int(value)
        except ValueError:
            raise ValueError(f"Cannot convert {value} to integer")

        if min_value is not None and result < min_value:
            raise ValueError(f"Value {result} is less than minimum {min_value}")

        if max_value is not None and result > max_value:
            raise ValueError(f"Value {result} is greater than maximum {max_value}")

        return result

    return get_env_var_as_type(
        name,
        default=default,
        required=required,
        converter=convert_and_validate,
        error_msg=f"Failed to get valid integer from environment variable {name}"
    )


def get_env_octal(
    name: str,
    default: Optional[int] = None,
    required: bool = False
) -> Optional[int]:
    """
    Get an environment variable holding a permission mode written in octal.

    Accepts both ``755`` and ``0o755``.

    Example:
        >>> get_env_octal("FILEKIT_DIRECTORY_MODE", default=0o755)
    """
    def convert(value: str) -> int:
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            return int(text, 8)
        except ValueError:
            raise ValueError(f"Cannot convert {value} to an octal mode")

    return get_env_var_as_type(
        name,
        default=default,
        required=required,
        converter=convert,
        error_msg=f"Failed to get valid octal mode from environment variable {name}"
    )
