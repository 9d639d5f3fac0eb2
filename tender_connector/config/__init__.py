"""Configuration management module for the tender connector."""

from .catalog import load_catalog
from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    CatalogOverrides,
    HttpConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ServerConfig,
    SourceMode,
    SourcesConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "load_catalog",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "SourcesConfig",
    "HttpConfig",
    "ServerConfig",
    "LoggingConfig",
    "CatalogOverrides",
    "EnvironmentConfig",
    # Enums
    "SourceMode",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
