"""Loading of the organization alias table and keyword vocabulary."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from tender_connector.domain.models import Catalog

from .exceptions import ConfigurationError
from .models import CatalogOverrides

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yaml"


def load_catalog(
    overrides: Optional[CatalogOverrides] = None,
    catalog_path: Path = DEFAULT_CATALOG_PATH,
) -> Catalog:
    """
    Build the process-wide Catalog from the packaged defaults.

    Each top-level key present in overrides (organizations, keywords)
    replaces the corresponding default wholesale; aliases are not merged,
    so a config file fully controls the alias set it declares.

    Args:
        overrides: Catalog section from the application config
        catalog_path: YAML file with the default catalog

    Returns:
        Frozen Catalog instance

    Raises:
        ConfigurationError: If the defaults cannot be read or the result is invalid
    """
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to load catalog defaults from {catalog_path}: {e}",
            suggestions=["Reinstall the package or check the catalog file syntax"],
        ) from e

    if overrides is not None:
        if overrides.organizations is not None:
            data["organizations"] = overrides.organizations
        if overrides.keywords is not None:
            data["keywords"] = overrides.keywords

    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Catalog validation failed",
            e,
            suggestions=[
                "catalog.organizations must map keys to lists of alias strings",
                "catalog.keywords must be a list of strings",
            ],
        ) from e
