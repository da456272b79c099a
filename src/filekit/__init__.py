"""
filekit - Filesystem convenience operations with collision-safe path resolution.

This module owns the package-wide loguru configuration. Every submodule logs
through the shared ``filekit.logger`` so sinks configured here (or by a host
application through the helpers below) apply to the whole library.
"""

__version__ = "0.1.0"

import sys
import os
from pathlib import Path
from typing import Optional, Dict, Union, TextIO
from loguru import logger
import warnings


log_format_console = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

log_format_file = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{name}:{function}:{line} - {message}"
)


# --- Logger Configuration Classes and Types ---

class LoggingConfigError(Exception):
    """Exception raised when logging configuration fails validation or setup."""
    pass


class LoggerState:
    """
    Tracks which sinks filekit has installed so they can be torn down again.
    """

    def __init__(self):
        self._initialized = False
        self._test_mode = False
        self._sink_ids = []

    def is_initialized(self) -> bool:
        """Check if logger has been initialized."""
        return self._initialized

    def is_test_mode(self) -> bool:
        """Check if logger is in test mode."""
        return self._test_mode

    def mark_initialized(self, test_mode: bool = False):
        """Mark logger as initialized."""
        self._initialized = True
        self._test_mode = test_mode

    def add_sink_id(self, sink_id: int):
        """Track sink IDs for cleanup."""
        self._sink_ids.append(sink_id)

    @property
    def sink_ids(self):
        return list(self._sink_ids)

    def reset(self):
        """Reset logger state."""
        self._initialized = False
        self._test_mode = False
        self._sink_ids.clear()


_logger_state = LoggerState()


# --- Configuration Validation Functions ---

def validate_log_level(level: str) -> str:
    """
    Validate a loguru log level name.

    Args:
        level: Log level string to validate (case insensitive)

    Returns:
        Upper-cased log level string

    Raises:
        LoggingConfigError: If log level is invalid
    """
    valid_levels = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
    level_upper = str(level).upper()

    if level_upper not in valid_levels:
        raise LoggingConfigError(
            f"Invalid log level '{level}'. Must be one of: {', '.join(sorted(valid_levels))}"
        )

    return level_upper


def validate_output_destination(destination: Union[str, Path, TextIO, None]) -> Union[str, TextIO, None]:
    """
    Validate a log output destination, creating the parent directory of file
    destinations when needed.

    Args:
        destination: Output destination to validate

    Returns:
        Validated destination (file paths are returned as strings)

    Raises:
        LoggingConfigError: If destination is invalid
    """
    if destination is None:
        return None

    if hasattr(destination, 'write'):
        return destination

    try:
        path_dest = Path(destination)

        if not path_dest.parent.exists():
            try:
                path_dest.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LoggingConfigError(
                    f"Cannot create directory for log destination '{destination}': {e}"
                )

        return str(path_dest)
    except (TypeError, ValueError) as e:
        raise LoggingConfigError(
            f"Invalid output destination '{destination}': {e}"
        )


# --- Core Logging Configuration Functions ---

def configure_console_logging(
    level: str = "WARNING",
    format_template: Optional[str] = None,
    colorize: bool = True,
    destination: TextIO = sys.stderr
) -> int:
    """
    Add a console sink for filekit messages.

    Args:
        level: Log level for console output
        format_template: Custom format template (uses ``log_format_console`` if None)
        colorize: Enable colored console output
        destination: Console destination (default: sys.stderr)

    Returns:
        Sink ID for tracking and cleanup

    Raises:
        LoggingConfigError: If configuration fails
    """
    try:
        validated_level = validate_log_level(level)

        sink_id = logger.add(
            destination,
            level=validated_level,
            format=format_template or log_format_console,
            colorize=colorize
        )

        _logger_state.add_sink_id(sink_id)
        return sink_id

    except LoggingConfigError:
        raise
    except Exception as e:
        raise LoggingConfigError(f"Failed to configure console logging: {e}") from e


def configure_file_logging(
    log_file_path: Union[str, Path],
    level: str = "DEBUG",
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    format_template: Optional[str] = None,
    encoding: str = "utf-8",
) -> int:
    """
    Add a rotating file sink for filekit messages.

    Args:
        log_file_path: Path to log file (parent directories are created)
        level: Log level for file output
        rotation: Log rotation setting
        retention: Log retention setting
        compression: Compression method for rotated logs
        format_template: Custom format template (uses ``log_format_file`` if None)
        encoding: File encoding

    Returns:
        Sink ID for tracking and cleanup

    Raises:
        LoggingConfigError: If configuration fails
    """
    try:
        validated_level = validate_log_level(level)
        validated_path = validate_output_destination(log_file_path)

        sink_id = logger.add(
            validated_path,
            rotation=rotation,
            retention=retention,
            compression=compression,
            level=validated_level,
            format=format_template or log_format_file,
            encoding=encoding
        )

        _logger_state.add_sink_id(sink_id)
        return sink_id

    except LoggingConfigError:
        raise
    except Exception as e:
        raise LoggingConfigError(f"Failed to configure file logging: {e}") from e


def configure_test_logging(
    console_level: str = "DEBUG",
    console_destination: Optional[TextIO] = None,
    file_destination: Optional[Union[str, Path]] = None,
) -> Dict[str, int]:
    """
    Configure logging for test scenarios: uncolored console output plus an
    optional file sink.

    Args:
        console_level: Console log level for tests
        console_destination: Console destination (None uses sys.stderr)
        file_destination: File destination for test logs

    Returns:
        Dictionary mapping sink types to sink IDs

    Raises:
        LoggingConfigError: If test logging configuration fails
    """
    reset_logging()

    sink_ids = {}
    sink_ids['console'] = configure_console_logging(
        level=console_level,
        destination=console_destination if console_destination is not None else sys.stderr,
        colorize=False,
    )

    if file_destination:
        sink_ids['file'] = configure_file_logging(log_file_path=file_destination)

    _logger_state.mark_initialized(test_mode=True)
    return sink_ids


def reset_logging():
    """
    Remove the sinks filekit installed and reset the tracked state.

    Raises:
        LoggingConfigError: If reset fails
    """
    try:
        for sink_id in _logger_state.sink_ids:
            try:
                logger.remove(sink_id)
            except ValueError:
                # Already removed by the host application
                pass
        _logger_state.reset()
    except Exception as e:
        raise LoggingConfigError(f"Failed to reset logging configuration: {e}") from e


def initialize_logging(
    console_level: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    file_level: str = "DEBUG",
) -> Dict[str, int]:
    """
    Initialize the default filekit logging configuration.

    The console level defaults to ``FileKitSettings.log_level`` of the active
    settings (``FILEKIT_LOG_LEVEL``, ``WARNING`` when unset). A file sink is only added when ``log_dir`` is given or
    ``FILEKIT_LOG_DIR`` is set.

    Args:
        console_level: Console logging level
        log_dir: Directory for rotating log files
        file_level: File logging level

    Returns:
        Dictionary mapping sink types to sink IDs

    Raises:
        LoggingConfigError: If initialization fails
    """
    try:
        logger.remove()
        _logger_state.reset()

        if console_level is None:
            # Imported here: filekit.config logs through this module's logger
            from filekit.config import get_settings
            console_level = get_settings().log_level
        if log_dir is None:
            log_dir = os.environ.get("FILEKIT_LOG_DIR") or None

        sink_ids = {}
        sink_ids['console'] = configure_console_logging(level=console_level)

        if log_dir is not None:
            sink_ids['file'] = configure_file_logging(
                log_file_path=Path(log_dir) / "filekit_{time:YYYYMMDD}.log",
                level=file_level,
            )

        _logger_state.mark_initialized(test_mode=False)
        logger.debug("--- filekit logger initialized ---")
        return sink_ids

    except LoggingConfigError:
        raise
    except Exception as e:
        raise LoggingConfigError(f"Failed to initialize logging: {e}") from e


# --- Module-Level Logger State Access ---

def get_logger_state() -> LoggerState:
    """Get current logger state for inspection."""
    return _logger_state


def is_logging_initialized() -> bool:
    """Check if logging has been initialized."""
    return _logger_state.is_initialized()


def is_test_mode() -> bool:
    """Check if logging is in test mode."""
    return _logger_state.is_test_mode()


def _auto_initialize_logging():
    if not _logger_state.is_initialized() and not _is_pytest_running():
        try:
            initialize_logging()
        except LoggingConfigError as e:
            warnings.warn(f"Failed to initialize filekit logging: {e}. Using basic stderr logging.")
            logger.add(sys.stderr, level="WARNING")
            _logger_state.mark_initialized(test_mode=False)


def _is_pytest_running() -> bool:
    return "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ


_auto_initialize_logging()

# --- End Logger Configuration ---


# Public API. Imported after the logger so submodules can bind ``filekit.logger``.
from filekit.exceptions import (  # noqa: E402
    FileKitError,
    ConfigError,
    PathError,
    LockError,
)
from filekit.config import (  # noqa: E402
    FileKitSettings,
    get_settings,
    configure,
    reset_settings,
)
from filekit.utils import (  # noqa: E402
    PathInfo,
    join_path,
    path_info,
    create_dir,
    list_dir,
    delete_dir,
    format_bytes,
    random_string,
    read,
    write,
    write_with_lock,
    WriteFlags,
    FileLocker,
    get_default_locker,
)
from filekit.resolution import (  # noqa: E402
    available_path,
    sequenced_path,
    increment_sequence_number,
    replace_filename,
)

__all__ = [
    "__version__",
    "logger",
    "log_format_console",
    "log_format_file",
    "LoggingConfigError",
    "configure_console_logging",
    "configure_file_logging",
    "configure_test_logging",
    "initialize_logging",
    "reset_logging",
    "is_logging_initialized",
    "is_test_mode",
    "get_logger_state",
    "FileKitError",
    "ConfigError",
    "PathError",
    "LockError",
    "FileKitSettings",
    "get_settings",
    "configure",
    "reset_settings",
    "PathInfo",
    "join_path",
    "path_info",
    "create_dir",
    "list_dir",
    "delete_dir",
    "format_bytes",
    "random_string",
    "read",
    "write",
    "write_with_lock",
    "WriteFlags",
    "FileLocker",
    "get_default_locker",
    "available_path",
    "sequenced_path",
    "increment_sequence_number",
    "replace_filename",
]
