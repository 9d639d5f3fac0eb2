"""Translation of caller-supplied arguments into a SearchFilter."""

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from tender_connector.domain.models import WILDCARD_ORGANIZATION, Catalog, SearchFilter

from .exceptions import ToolArgumentsError

# Short argument names accepted alongside the schema names
LEGACY_ARGUMENT_NAMES = {
    "org": "organization",
    "q": "keyword",
    "days": "recencyDays",
}


def build_search_filter(arguments: Optional[Mapping[str, Any]], catalog: Catalog) -> SearchFilter:
    """Validate search arguments and build a SearchFilter.

    Schema names (organization, keyword, recencyDays, limit) take precedence
    over the short names (org, q, days). Empty values fall back to the
    filter defaults. The organization must be a catalog key or "all".

    Args:
        arguments: Raw arguments (tool args or query parameters)
        catalog: Catalog defining the known organization keys

    Returns:
        Validated SearchFilter

    Raises:
        ToolArgumentsError: If any argument violates the schema
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ToolArgumentsError("Tool arguments must be an object")

    values = {}
    for legacy_name, schema_name in LEGACY_ARGUMENT_NAMES.items():
        if arguments.get(legacy_name) not in (None, ""):
            values[schema_name] = arguments[legacy_name]
    for schema_name in ("organization", "keyword", "recencyDays", "limit"):
        if arguments.get(schema_name) not in (None, ""):
            values[schema_name] = arguments[schema_name]

    # A zero/empty window or limit falls back to the defaults
    for numeric_name in ("recencyDays", "limit"):
        if values.get(numeric_name) in (0, "0"):
            del values[numeric_name]

    organization = values.get("organization")
    if organization is not None:
        key = str(organization).strip().lower()
        allowed = catalog.organization_keys + (WILDCARD_ORGANIZATION,)
        if key not in allowed:
            raise ToolArgumentsError(
                "Invalid tool arguments",
                errors=[f"organization must be one of: {', '.join(allowed)}"],
            )

    try:
        return SearchFilter.model_validate(values)
    except ValidationError as e:
        raise ToolArgumentsError(
            "Invalid tool arguments",
            errors=[
                f"{'.'.join(str(loc) for loc in detail['loc'])}: {detail['msg']}"
                for detail in e.errors()
            ],
        ) from e
