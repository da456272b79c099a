"""
filekit exception hierarchy.

Most filekit operations report failure through their return value (``False``
or ``None``). Exceptions are reserved for caller errors and for configuration
problems:

- FileKitError: Base exception for all filekit-specific errors
- ConfigError: Invalid settings, environment variables or settings files
- PathError: Malformed path requests (e.g. joining zero segments)
- LockError: A file locker could not operate on a handle

Each exception carries an error code for programmatic handling and a context
dictionary for debugging.

Usage Examples:
    >>> try:
    ...     settings = FileKitSettings.from_yaml("filekit.yaml")
    ... except ConfigError as e:
    ...     if e.error_code == "CONFIG_001":
    ...         settings = FileKitSettings()
"""

from typing import Any, Dict, Optional


class FileKitError(Exception):
    """
    Base exception class for all filekit-specific errors.

    Attributes:
        error_code (str): Unique identifier for programmatic error handling
        context (Dict[str, Any]): Additional context information for debugging

    Error Codes:
        FILEKIT_001: Generic filekit error
    """

    def __init__(
        self,
        message: str,
        error_code: str = "FILEKIT_001",
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = dict(context or {})

    def with_context(self, context: Dict[str, Any]) -> 'FileKitError':
        """
        Add additional context to the exception and return self for chaining.

        Example:
            >>> raise PathError("Cannot join paths").with_context({"parts": ()})
        """
        self.context.update(context)
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{message} [Error Code: {self.error_code}, Context: {context_str}]"
        return f"{message} [Error Code: {self.error_code}]"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={super().__str__()!r}, "
            f"error_code={self.error_code!r}, "
            f"context={self.context!r})"
        )


class ConfigError(FileKitError):
    """
    Settings validation and loading errors.

    Error Codes:
        CONFIG_001: Settings file not found
        CONFIG_002: YAML parsing error
        CONFIG_003: Pydantic validation failure
        CONFIG_006: Environment variable validation failed
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_001",
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code, context)
        if 'config_path' in self.context:
            self.context['config_path'] = str(self.context['config_path'])


class PathError(FileKitError, ValueError):
    """
    Malformed path requests.

    Error Codes:
        PATH_001: No path segments supplied
        PATH_002: Random name length below 1
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PATH_001",
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code, context)


class LockError(FileKitError):
    """
    Advisory lock failures raised by file lockers.

    Error Codes:
        LOCK_001: Handle has no usable file descriptor
        LOCK_002: Platform lock call failed
    """

    def __init__(
        self,
        message: str,
        error_code: str = "LOCK_002",
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code, context)
