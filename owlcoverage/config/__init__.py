"""Configuration management for OWL Coverage.

This module handles loading and validating configuration from files and environment.
"""

from owlcoverage.config.settings import (
    DEFAULT_SETTINGS,
    AnalysisConfig,
    ConfigLoader,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    Settings,
    WebConfig,
    load_settings,
)

__all__ = [
    "AnalysisConfig",
    "ConfigLoader",
    "DEFAULT_SETTINGS",
    "LoggingConfig",
    "OutputConfig",
    "OutputFormat",
    "Settings",
    "WebConfig",
    "load_settings",
]
