"""Environment variable loading and validation."""

import os
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel, SourceMode

TRUTHY = {"1", "true", "yes", "on"}


class EnvironmentConfig:
    """Environment variable overrides for the application config."""

    def __init__(
        self,
        mode: Optional[str] = None,
        feed_url: Optional[str] = None,
        flat_feed_url: Optional[str] = None,
        allow_insecure: Optional[bool] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.mode = mode
        self.feed_url = feed_url
        self.flat_feed_url = flat_feed_url
        self.allow_insecure = allow_insecure
        self.host = host
        self.port = port
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment or "local"

    def as_overrides(self) -> Dict[str, Any]:
        """Return the set variables as a nested dict shaped like AppConfig."""
        overrides: Dict[str, Any] = {}
        if self.mode:
            overrides["mode"] = self.mode
        sources = {
            key: value
            for key, value in (("feed_url", self.feed_url), ("flat_feed_url", self.flat_feed_url))
            if value
        }
        if sources:
            overrides["sources"] = sources
        if self.allow_insecure is not None:
            overrides["http"] = {"allow_insecure": self.allow_insecure}
        server = {
            key: value
            for key, value in (("host", self.host), ("port", self.port))
            if value is not None
        }
        if server:
            overrides["server"] = server
        logging_section = {
            key: value
            for key, value in (("level", self.log_level), ("format", self.log_format))
            if value
        }
        if logging_section:
            overrides["logging"] = logging_section
        return overrides


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - SOURCE_MODE: mock, scrape, feed or flat_feed
    - USE_MOCK=1 / USE_HTML=1: shorthand for SOURCE_MODE=mock / scrape
      (ignored when SOURCE_MODE is set; USE_MOCK wins over USE_HTML)
    - PLACSP_FEED_URL: syndication index address
    - FLAT_FEED_URL: JSON document address
    - ALLOW_INSECURE=1: skip TLS certificate verification
    - HOST / PORT: HTTP surface bind address
    - LOG_LEVEL / LOG_FORMAT: logging overrides
    - ENVIRONMENT: environment label attached to log records

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable holds an invalid value
    """
    errors = []

    mode = _get("SOURCE_MODE")
    if mode:
        mode = mode.lower()
        valid_modes = [m.value for m in SourceMode]
        if mode not in valid_modes:
            errors.append(
                f"Invalid SOURCE_MODE: '{mode}'. Must be one of: {', '.join(valid_modes)}"
            )
    elif _flag("USE_MOCK"):
        mode = SourceMode.MOCK.value
    elif _flag("USE_HTML"):
        mode = SourceMode.SCRAPE.value

    allow_insecure = _flag("ALLOW_INSECURE") if _get("ALLOW_INSECURE") is not None else None

    port = None
    port_str = _get("PORT")
    if port_str:
        try:
            port = int(port_str)
            if not 1 <= port <= 65535:
                errors.append(f"Invalid PORT: {port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid PORT: '{port_str}'. Must be a valid integer.")

    log_level = _get("LOG_LEVEL")
    if log_level:
        log_level = log_level.upper()
        valid_levels = [level.value for level in LogLevel]
        if log_level not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )

    log_format = _get("LOG_FORMAT")
    if log_format:
        log_format = log_format.lower()
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format not in valid_formats:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the variables in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        mode=mode,
        feed_url=_get("PLACSP_FEED_URL"),
        flat_feed_url=_get("FLAT_FEED_URL"),
        allow_insecure=allow_insecure,
        host=_get("HOST"),
        port=port,
        log_level=log_level,
        log_format=log_format,
        environment=_get("ENVIRONMENT"),
    )


def _get(name: str) -> Optional[str]:
    """Read a variable, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _flag(name: str) -> bool:
    return (_get(name) or "").lower() in TRUTHY
