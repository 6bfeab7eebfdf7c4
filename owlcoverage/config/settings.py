"""Settings and configuration models.

This module defines the configuration schema for OWL Coverage and
implements configuration loading with proper precedence.

Configuration Precedence (highest to lowest):
1. CLI flags
2. Environment variables (OWLCOVERAGE_*)
3. Project config file (./owlcoverage.yaml)
4. User config file (~/.owlcoverage.yaml)
5. Defaults
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Supported report formats."""

    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"
    HTML = "html"
    TURTLE = "turtle"


class AnalysisConfig(BaseModel):
    """Configuration for coverage analysis."""

    min_coverage: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Coverage percentage below which the CLI exits non-zero",
    )
    fail_on_malformed: bool = Field(
        default=True,
        description="Exit with failure status when the document is malformed",
    )

    model_config = {"extra": "forbid"}


class OutputConfig(BaseModel):
    """Configuration for report generation."""

    format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        description="Primary report format",
    )
    show_parents: bool = Field(
        default=True,
        description="List named parents for each defined class",
    )
    include_timestamps: bool = Field(
        default=True,
        description="Include a generation timestamp in reports",
    )
    base_namespace: str = Field(
        default="http://example.org/ontology#",
        description="Namespace for class IRIs when the ontology has no IRI",
    )

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: str = Field(default="WARNING", description="Root log level")

    model_config = {"extra": "forbid"}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate that level is a standard logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class WebConfig(BaseModel):
    """Configuration for the web dashboard."""

    host: str = Field(default="127.0.0.1", description="Host to bind to")
    port: int = Field(default=8765, ge=1, le=65535, description="Port to listen on")
    max_document_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Largest accepted uploaded document, in bytes",
    )

    model_config = {"extra": "forbid"}


class Settings(BaseModel):
    """Root configuration for OWL Coverage."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def load_from_file(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        Args:
            path: Path to the configuration file.

        Returns:
            Loaded settings.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If YAML is invalid or doesn't match schema.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e

        if data is None:
            # Empty file, use defaults
            return cls()

        if not isinstance(data, dict):
            raise ValueError(
                "Configuration file must contain a YAML mapping (key: value pairs). "
                "Run 'owlcoverage init' to generate a valid config template."
            )

        return cls.model_validate(data)

    def merge_with(self, overrides: dict[str, Any]) -> "Settings":
        """Create a new Settings with values from overrides.

        Args:
            overrides: Dictionary of override values.

        Returns:
            New Settings instance with merged values.
        """
        current = self.model_dump()
        _deep_merge(current, overrides)
        return Settings.model_validate(current)


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> None:
    """Recursively merge overrides into base dict in-place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        elif value is not None:  # Don't override with None
            base[key] = value


class ConfigLoader:
    """Loads configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (passed as overrides)
    2. Environment variables (OWLCOVERAGE_*)
    3. Project config file (./owlcoverage.yaml)
    4. User config file (~/.owlcoverage.yaml)
    5. Defaults
    """

    ENV_PREFIX = "OWLCOVERAGE_"
    PROJECT_CONFIG_NAME = "owlcoverage.yaml"
    USER_CONFIG_NAME = ".owlcoverage.yaml"

    # Mapping of environment variables to config paths
    ENV_MAPPINGS = {
        "OWLCOVERAGE_FORMAT": ("output", "format"),
        "OWLCOVERAGE_MIN_COVERAGE": ("analysis", "min_coverage"),
        "OWLCOVERAGE_LOG_LEVEL": ("logging", "level"),
        "OWLCOVERAGE_HOST": ("web", "host"),
        "OWLCOVERAGE_PORT": ("web", "port"),
    }

    def __init__(
        self,
        project_dir: Path | None = None,
        user_dir: Path | None = None,
    ) -> None:
        """Initialize the config loader.

        Args:
            project_dir: Directory to look for project config (default: cwd).
            user_dir: User's home directory (default: ~).
        """
        self.project_dir = project_dir or Path.cwd()
        self.user_dir = user_dir or Path.home()

    def load(self, cli_overrides: dict[str, Any] | None = None) -> Settings:
        """Load settings with full precedence chain.

        Args:
            cli_overrides: Overrides from CLI flags.

        Returns:
            Merged settings.
        """
        settings = Settings()

        user_config_path = self.user_dir / self.USER_CONFIG_NAME
        if user_config_path.exists():
            try:
                settings = Settings.load_from_file(user_config_path)
            except (ValueError, FileNotFoundError) as e:
                logger.warning(f"Ignoring invalid user config {user_config_path}: {e}")

        project_config_path = self.project_dir / self.PROJECT_CONFIG_NAME
        if project_config_path.exists():
            try:
                project_data = self._load_yaml(project_config_path)
                settings = settings.merge_with(project_data)
            except (ValueError, yaml.YAMLError) as e:
                logger.warning(
                    f"Ignoring invalid project config {project_config_path}: {e}"
                )

        env_overrides = self._get_env_overrides()
        if env_overrides:
            settings = settings.merge_with(env_overrides)

        # CLI overrides win
        if cli_overrides:
            settings = settings.merge_with(cli_overrides)

        return settings

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}

    def _get_env_overrides(self) -> dict[str, Any]:
        """Get configuration overrides from environment variables.

        Returns:
            Nested dictionary of overrides.
        """
        overrides: dict[str, Any] = {}

        for env_var, path in self.ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if value is not None:
                self._set_nested(overrides, path, self._convert_value(value))

        return overrides

    def _set_nested(self, d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
        for key in path[:-1]:
            d = d.setdefault(key, {})
        d[path[-1]] = value

    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type.

        Args:
            value: String value from environment.

        Returns:
            Converted value.
        """
        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        return value


def load_settings(
    config_file: str | Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> Settings:
    """Convenience function to load settings.

    Args:
        config_file: Explicit config file path (optional).
        cli_overrides: Overrides from CLI.

    Returns:
        Loaded settings.
    """
    if config_file:
        settings = Settings.load_from_file(config_file)
        if cli_overrides:
            settings = settings.merge_with(cli_overrides)
        return settings

    loader = ConfigLoader()
    return loader.load(cli_overrides)


# Default settings instance
DEFAULT_SETTINGS = Settings()
