"""Core domain models for search filters, listings, and the matching catalog.

This module defines the data structures used throughout the connector:
- SearchFilter: immutable, caller-owned query for one search call
- RawItem: opaque driver-specific mapping, consumed once by normalization
- CanonicalListing: normalized procurement listing returned to callers
- Catalog: process-wide organization aliases and keyword vocabulary
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Organization value that disables the organization predicate
WILDCARD_ORGANIZATION = "all"

DEFAULT_RECENCY_DAYS = 120
DEFAULT_LIMIT = 100
MAX_LIMIT = 500
MAX_RECENCY_DAYS = 3650

RawItem = Dict[str, Any]


class SearchFilter(BaseModel):
    """Query for a single search call.

    Every field has a default, so SearchFilter() matches everything published
    within the default recency window.

    Attributes:
        organization: Organization key from the catalog, or None/"all" for any
        extra_keyword: Optional free-text term added to the static keyword set
        recency_days: Trailing window in days; 0 or None means unbounded
        limit: Maximum number of listings returned
    """

    organization: Optional[str] = Field(
        None, description="Organization key (catalog key or 'all')"
    )
    extra_keyword: Optional[str] = Field(
        None, alias="keyword", description="Extra keyword unioned with the static set"
    )
    recency_days: Optional[int] = Field(
        DEFAULT_RECENCY_DAYS,
        ge=0,
        le=MAX_RECENCY_DAYS,
        alias="recencyDays",
        description="Trailing window in days (0 = unbounded)",
    )
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Result cap")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("organization", "extra_keyword")
    @classmethod
    def strip_optional_text(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank strings become None."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("organization")
    @classmethod
    def lowercase_organization(cls, v: Optional[str]) -> Optional[str]:
        """Organization keys are compared lower-cased."""
        return v.lower() if v else v

    @property
    def is_wildcard(self) -> bool:
        """Whether the filter accepts any organization."""
        return not self.organization or self.organization == WILDCARD_ORGANIZATION

    @property
    def has_recency_window(self) -> bool:
        """Whether a recency window applies."""
        return bool(self.recency_days)


class CanonicalListing(BaseModel):
    """Normalized procurement listing.

    All fields are strings as provided by the source. Amounts and dates are
    not coerced; the ranking layer parses dates only for comparison. Missing
    values are always empty strings, never None.

    searchable_text is the concatenation used for keyword matching and is
    never serialized back to callers.
    """

    title: str = ""
    organization_name: str = ""
    procedure_type: str = ""
    status: str = ""
    amount: str = ""
    publication_date: str = ""
    deadline_date: str = ""
    url: str = ""
    searchable_text: str = Field("", exclude=True)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"example": {
            "title": "Suministro máquina de corte por láser",
            "organizationName": "INTA",
            "procedureType": "Abierto",
            "status": "Publicado",
            "amount": "100000",
            "publicationDate": "2025-09-25",
            "deadlineDate": "2025-10-10",
            "url": "https://contrataciondelestado.es/licitacion/ejemplo-inta-laser",
        }},
    )

    @field_validator(
        "title",
        "organization_name",
        "procedure_type",
        "status",
        "amount",
        "publication_date",
        "deadline_date",
        "url",
        "searchable_text",
        mode="before",
    )
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        """Coerce None to empty string and scalars to stripped strings."""
        if v is None:
            return ""
        return str(v).strip()

    @model_validator(mode="after")
    def fill_searchable_text(self):
        """Derive searchable_text from listing fields when none was supplied."""
        if not self.searchable_text:
            self.searchable_text = " ".join(
                part
                for part in (self.title, self.organization_name, self.procedure_type, self.status)
                if part
            )
        return self

    def to_public_dict(self) -> Dict[str, str]:
        """Serialize to the camelCase shape returned by the search surfaces."""
        return self.model_dump(by_alias=True)


class Catalog(BaseModel):
    """Organization alias table and keyword vocabulary.

    Loaded once at process start and shared read-only by the matcher, the
    scrape driver, and the tool manifest.

    Attributes:
        organizations: Read-only mapping of organization key -> ordered alias tuple
        keywords: Ordered domain vocabulary always applied to keyword matching
    """

    organizations: Mapping[str, Tuple[str, ...]] = Field(default_factory=dict)
    keywords: Tuple[str, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    @field_validator("organizations", mode="before")
    @classmethod
    def normalize_organizations(cls, v: Any) -> Dict[str, Tuple[str, ...]]:
        """Lower-case keys, strip aliases, drop blanks and duplicates."""
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("organizations must be a mapping of key -> alias list")

        normalized: Dict[str, Tuple[str, ...]] = {}
        for key, aliases in v.items():
            org_key = str(key).strip().lower()
            if not org_key:
                raise ValueError("Organization keys cannot be empty")
            if org_key == WILDCARD_ORGANIZATION:
                raise ValueError(f"'{WILDCARD_ORGANIZATION}' is reserved and cannot be an organization key")
            if isinstance(aliases, str):
                aliases = [aliases]
            cleaned = []
            for alias in aliases or []:
                stripped = str(alias).strip()
                if stripped and stripped not in cleaned:
                    cleaned.append(stripped)
            normalized[org_key] = tuple(cleaned)
        return normalized

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v: Any) -> Tuple[str, ...]:
        """Strip keywords, drop blanks and duplicates, keep order."""
        if v is None:
            return ()
        cleaned = []
        for term in v:
            stripped = str(term).strip()
            if stripped and stripped not in cleaned:
                cleaned.append(stripped)
        return tuple(cleaned)

    @model_validator(mode="after")
    def freeze_organizations(self):
        """Expose the alias table as a read-only mapping."""
        if not isinstance(self.organizations, MappingProxyType):
            object.__setattr__(self, "organizations", MappingProxyType(dict(self.organizations)))
        return self

    @property
    def organization_keys(self) -> Tuple[str, ...]:
        """Known organization keys in declaration order."""
        return tuple(self.organizations.keys())
