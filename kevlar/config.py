"""Loading of the run configuration."""

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kevlar.workspace import create_unique_dir

log = logging.getLogger(__name__)

WORKSPACE_ENV_VAR = "KEVLAR_WORKSPACE"
LOG_LEVEL_ENV_VAR = "KEVLAR_LOG_LEVEL"


class ConfigError(ValueError):
    """Raised when the run configuration cannot be loaded."""


class TestConfig(BaseModel):
    """Configuration handed to the test body.

    Keys not listed here are kept so tests can carry their own settings.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True, extra="allow")

    path: Path = Field(..., description="Test workspace directory")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum level written to the log sinks"
    )


def load_config(test_name: str, config_file: Path | None = None) -> TestConfig:
    """Load the configuration and provision the test workspace.

    Args:
        test_name: Raw test name, used to name the workspace
        config_file: YAML or JSON file; the environment is used when omitted

    Returns:
        Configuration whose path is the newly created workspace

    Raises:
        ConfigError: If the configuration is missing or invalid
        WorkspaceError: If the workspace cannot be created

    """
    if config_file is not None:
        log.info("Loading configuration from %s", config_file)
        config = load_config_file(config_file)
    else:
        log.info("Loading configuration from environment")
        config = load_config_env()

    workspace = create_unique_dir(config.path, test_name)
    return config.model_copy(update={"path": workspace})


def load_config_file(config_file: Path) -> TestConfig:
    """Parse and validate a configuration file."""
    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_file}")

    try:
        content = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid config file {config_file}: {e}") from e

    if content is None:
        raise ConfigError(f"Empty config file: {config_file}")

    return _validate(content, str(config_file))


def load_config_env() -> TestConfig:
    """Build the configuration from environment variables."""
    if not (base_path := os.environ.get(WORKSPACE_ENV_VAR)):
        raise ConfigError(f"Environment variable {WORKSPACE_ENV_VAR} is not set")

    content: dict[str, str] = {"path": base_path}
    if log_level := os.environ.get(LOG_LEVEL_ENV_VAR):
        content["log_level"] = log_level.upper()

    return _validate(content, "environment")


def _validate(content: object, source: str) -> TestConfig:
    if not isinstance(content, dict):
        raise ConfigError(f"Invalid config schema in {source}: expected a mapping")
    try:
        return TestConfig.model_validate(content)
    except ValidationError as e:
        raise ConfigError(f"Invalid config schema in {source}: {e}") from e
