"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator, model_validator

DEFAULT_FEED_URL = "https://contrataciondelestado.es/sindicacion/sindicacion.atom"
DEFAULT_SEARCH_ENDPOINT = "https://duckduckgo.com/html/"
DEFAULT_SITE_DOMAIN = "contrataciondelestado.es"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124 Safari/537.36"
)


class SourceMode(str, Enum):
    """Upstream source selected for every search call."""

    MOCK = "mock"
    SCRAPE = "scrape"
    FEED = "feed"
    FLAT_FEED = "flat_feed"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourcesConfig(BaseModel):
    """Addresses of the upstream sources."""

    feed_url: HttpUrl = Field(
        DEFAULT_FEED_URL, description="Syndication index for the feed driver"
    )
    flat_feed_url: Optional[HttpUrl] = Field(
        None, description="JSON document for the flat-feed driver"
    )
    search_endpoint: HttpUrl = Field(
        DEFAULT_SEARCH_ENDPOINT, description="HTML search page for the scrape driver"
    )
    site_domain: str = Field(
        DEFAULT_SITE_DOMAIN,
        min_length=1,
        description="Domain that scraped result links must point at",
    )

    @field_validator("site_domain")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        """Lower-case and strip the domain."""
        stripped = v.strip().lower()
        if not stripped:
            raise ValueError("site_domain cannot be empty")
        return stripped


class HttpConfig(BaseModel):
    """Outbound HTTP settings shared by all drivers."""

    timeout: int = Field(20, ge=1, le=120, description="Request timeout (seconds)")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1)
    accept_language: str = Field("es-ES,es;q=0.9,en;q=0.8", min_length=1)
    allow_insecure: bool = Field(
        False, description="Skip TLS certificate verification"
    )

    @field_validator("user_agent", "accept_language")
    @classmethod
    def strip_header(cls, v: str) -> str:
        """Strip whitespace from header values."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Header value cannot be empty")
        return stripped


class ServerConfig(BaseModel):
    """HTTP surface settings."""

    host: str = Field("0.0.0.0", min_length=1)
    port: int = Field(3000, ge=1, le=65535)
    heartbeat_seconds: float = Field(
        25.0, gt=0, le=300, description="Idle heartbeat interval on /sse"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class CatalogOverrides(BaseModel):
    """Optional replacements for the packaged catalog defaults."""

    organizations: Optional[Dict[str, List[str]]] = None
    keywords: Optional[List[str]] = None


class AppConfig(BaseModel):
    """Root configuration object for the tender connector."""

    mode: SourceMode = Field(SourceMode.FEED, description="Upstream source to query")
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    catalog: CatalogOverrides = Field(default_factory=CatalogOverrides)

    model_config = {"use_enum_values": True, "validate_default": True}

    @model_validator(mode="after")
    def validate_mode_sources(self):
        """The flat-feed driver has no default address."""
        if self.mode == SourceMode.FLAT_FEED.value and self.sources.flat_feed_url is None:
            raise ValueError(
                "mode 'flat_feed' requires sources.flat_feed_url (or FLAT_FEED_URL) to be set"
            )
        return self
