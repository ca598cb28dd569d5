"""
Configuration management for the MSBuild JUnit logger.
"""

import logging
import os
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# Module-level lock for thread-safe config loading
_config_lock = threading.Lock()

DEFAULT_COMPILED_EXTENSIONS = ["cpp", "hpp", "cs", "c"]

_EXTENSION_RE = re.compile(r"^[A-Za-z0-9_]+$")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class LoggerConfig:
    """Main configuration for the JUnit logger."""

    # Path of the JUnit XML report
    output: Optional[str] = None

    # Source extensions whose bare file names count as compiled units
    compiled_extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_COMPILED_EXTENSIONS)
    )

    # Pretty-print the report
    indent: bool = True

    def __post_init__(self) -> None:
        """Normalize extensions given with a leading dot or in upper case."""
        if isinstance(self.compiled_extensions, str):
            self.compiled_extensions = self.compiled_extensions.split(",")
        self.compiled_extensions = [
            str(ext).strip().lstrip(".").lower() for ext in self.compiled_extensions
        ]


def parse_parameters(parameters: Optional[str]) -> str:
    """
    Parse the logger parameter string into the output path.

    The parameter string holds exactly one ``;``-separated item: the report
    path. This check runs before any build event is accepted.

    Args:
        parameters: Raw parameter string passed to the logger

    Returns:
        The output path

    Raises:
        ConfigurationError: If the path is missing or extra items are present
    """
    if parameters is None:
        raise ConfigurationError("Log file was not set.")

    items = parameters.split(";")
    log_file = items[0].strip()
    if not log_file:
        raise ConfigurationError("Log file was not set.")

    if len(items) > 1:
        raise ConfigurationError("Too many parameters passed.")

    return log_file


def _parse_env_bool(var_name: str) -> Optional[bool]:
    """
    Parse a boolean from an environment variable.

    Returns:
        Parsed value, or None if the variable is not set

    Raises:
        ConfigurationError: If the value is not a recognized boolean
    """
    value = os.environ.get(var_name)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"Environment variable {var_name} must be a boolean, got: '{value}'")


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - MSBUILD_JUNIT_OUTPUT: Path of the JUnit XML report
    - MSBUILD_JUNIT_EXTENSIONS: Comma-separated compiled-unit extensions
    - MSBUILD_JUNIT_INDENT: Pretty-print the report (true/false)

    Returns:
        Dictionary of configuration values from environment

    Raises:
        ConfigurationError: If environment variable values are invalid
    """
    env_config: Dict[str, Any] = {}

    if "MSBUILD_JUNIT_OUTPUT" in os.environ:
        env_config["output"] = os.environ["MSBUILD_JUNIT_OUTPUT"]

    if "MSBUILD_JUNIT_EXTENSIONS" in os.environ:
        env_config["compiled_extensions"] = [
            ext for ext in os.environ["MSBUILD_JUNIT_EXTENSIONS"].split(",") if ext.strip()
        ]

    indent = _parse_env_bool("MSBUILD_JUNIT_INDENT")
    if indent is not None:
        env_config["indent"] = indent

    return env_config


def load_config(config_file: Optional[str] = None, parameters: Optional[str] = None) -> LoggerConfig:
    """
    Load configuration from file, environment variables and logger parameters.

    Configuration precedence (highest to lowest):
    1. Logger parameter string
    2. Environment variables
    3. Configuration file
    4. Default values

    Args:
        config_file: Path to YAML configuration file (optional)
        parameters: Logger parameter string holding the output path (optional)

    Returns:
        LoggerConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If the file, environment or parameters are invalid
    """
    with _config_lock:
        config_data: Dict[str, Any] = {}

        if config_file:
            logger.info("Loading configuration from %s", config_file)
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            except PermissionError:
                raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
            except OSError as e:
                raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file '{config_file}' must contain a mapping at the top level"
                )
            config_data.update(file_config)

        env_overrides = _load_from_env()
        config_data.update(env_overrides)
        if env_overrides:
            logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

        if parameters is not None:
            config_data["output"] = parse_parameters(parameters)

        try:
            return LoggerConfig(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")


def validate_config(config: LoggerConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: LoggerConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if not config.output:
        errors.append("output is required (pass the report path as the logger parameter)")

    if not config.compiled_extensions:
        errors.append("compiled_extensions must list at least one extension")
    for ext in config.compiled_extensions:
        if not _EXTENSION_RE.match(ext):
            errors.append(f"compiled_extensions contains an invalid extension: '{ext}'")

    if not isinstance(config.indent, bool):
        errors.append(f"indent must be true or false: {config.indent}")

    return errors
