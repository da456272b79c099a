"""
Pydantic settings model for filekit defaults.

Operations take explicit parameters; when a parameter is left as ``None`` the
value comes from the process-wide ``FileKitSettings`` returned by
``get_settings()``. Settings can be built from keyword arguments, from
``FILEKIT_*`` environment variables or from a YAML file.
"""

import codecs
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from filekit import logger, validate_log_level, LoggingConfigError
from filekit.config.env import get_env_int, get_env_octal, get_env_var
from filekit.exceptions import ConfigError


class FileKitSettings(BaseModel):
    """
    Defaults consulted by filekit operations.

    Attributes:
        random_name_length: Length of names generated by ``available_path``
        directory_mode: Permission bits used by ``create_dir``
        lock_mode: Open mode used by ``write_with_lock``
        encoding: Text encoding used by ``read`` and ``write``
        log_level: Default console level for ``initialize_logging``
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
        frozen=True,
    )

    random_name_length: int = Field(
        default=32,
        ge=1,
        description="Number of characters in generated file names",
    )
    directory_mode: int = Field(
        default=0o755,
        ge=0,
        le=0o7777,
        description="Permission bits for directories created by create_dir",
    )
    lock_mode: str = Field(
        default="w",
        description="open() mode used by write_with_lock",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding for read and write",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )

    @field_validator('lock_mode')
    @classmethod
    def validate_lock_mode(cls, v: str) -> str:
        if not v or any(c not in "rwaxbt+" for c in v):
            raise ValueError(f"Invalid open mode: {v!r}")
        if not any(c in v for c in "wax+"):
            raise ValueError(f"Open mode {v!r} does not allow writing")
        return v

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v!r}") from e
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level_name(cls, v: str) -> str:
        try:
            return validate_log_level(v)
        except LoggingConfigError as e:
            raise ValueError(str(e)) from e

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], source: Optional[str] = None) -> "FileKitSettings":
        """
        Build settings from a plain mapping.

        Raises:
            ConfigError: CONFIG_003 if validation fails
        """
        try:
            return cls(**data)
        except ValidationError as e:
            context = {"validation_errors": e.errors()}
            if source is not None:
                context["config_path"] = source
            raise ConfigError(
                f"Invalid filekit settings: {e.error_count()} validation error(s)",
                error_code="CONFIG_003",
                context=context,
            ) from e

    @classmethod
    def from_env(cls, prefix: str = "FILEKIT_") -> "FileKitSettings":
        """
        Build settings from environment variables; unset variables keep their
        defaults.

        Example:
            >>> # FILEKIT_DIRECTORY_MODE=700 FILEKIT_LOCK_MODE=a
            >>> FileKitSettings.from_env().directory_mode == 0o700
            True

        Raises:
            ConfigError: CONFIG_006 if a variable is malformed, CONFIG_003 if
                the resulting settings fail validation
        """
        try:
            values = {
                "random_name_length": get_env_int(f"{prefix}RANDOM_NAME_LENGTH"),
                "directory_mode": get_env_octal(f"{prefix}DIRECTORY_MODE"),
                "lock_mode": get_env_var(f"{prefix}LOCK_MODE"),
                "encoding": get_env_var(f"{prefix}ENCODING"),
                "log_level": get_env_var(f"{prefix}LOG_LEVEL"),
            }
        except ValueError as e:
            raise ConfigError(
                f"Invalid filekit environment variable: {e}",
                error_code="CONFIG_006",
                context={"prefix": prefix},
            ) from e

        overrides = {k: v for k, v in values.items() if v is not None}
        logger.debug(f"Settings overrides from environment: {sorted(overrides)}")
        return cls.from_mapping(overrides, source=f"env:{prefix}*")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "FileKitSettings":
        """
        Load settings from a YAML file holding a flat mapping of field names.

        An empty file yields the defaults.

        Raises:
            ConfigError: CONFIG_001 if the file is missing, CONFIG_002 if it is
                not valid YAML or not a mapping, CONFIG_003 on validation failure
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(
                f"Settings file not found: {path}",
                error_code="CONFIG_001",
                context={"config_path": path},
            )

        try:
            with open(path, 'r', encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in settings file {path}: {e}",
                error_code="CONFIG_002",
                context={"config_path": path},
            ) from e

        if data is None:
            logger.warning(f"Settings file is empty or contains only comments: {path}")
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Settings file {path} must contain a mapping, got {type(data).__name__}",
                error_code="CONFIG_002",
                context={"config_path": path},
            )

        return cls.from_mapping(data, source=str(path))


_active_settings: Optional[FileKitSettings] = None


def get_settings() -> FileKitSettings:
    """
    Return the process-wide settings, building them from the environment on
    first use.
    """
    global _active_settings
    if _active_settings is None:
        _active_settings = FileKitSettings.from_env()
    return _active_settings


def configure(settings: Optional[FileKitSettings] = None, **overrides: Any) -> FileKitSettings:
    """
    Replace the process-wide settings.

    Args:
        settings: Complete settings to install (current settings if None)
        **overrides: Individual fields to change on top of ``settings``

    Returns:
        The newly active settings

    Raises:
        ConfigError: CONFIG_003 if the overrides fail validation
    """
    global _active_settings
    base = settings if settings is not None else get_settings()
    if overrides:
        base = FileKitSettings.from_mapping({**base.model_dump(), **overrides})
    _active_settings = base
    logger.debug(f"filekit settings configured: {base.model_dump()}")
    return base


def reset_settings() -> None:
    """Drop the active settings so the next ``get_settings()`` rereads the environment."""
    global _active_settings
    _active_settings = None
