"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary (file values merged with environment)

    Returns:
        List of warning messages
    """
    warning_messages = []

    http = config_dict.get("http", {})
    if isinstance(http, dict) and http.get("allow_insecure") is True:
        warning_messages.append(
            "TLS certificate verification is disabled (allow_insecure); use only for diagnosis"
        )

    mode = config_dict.get("mode")
    if isinstance(mode, str) and mode.lower() == "mock":
        warning_messages.append(
            "Source mode is 'mock': searches return fixture listings, not upstream data"
        )

    catalog = config_dict.get("catalog", {})
    if isinstance(catalog, dict):
        keywords = catalog.get("keywords")
        if isinstance(keywords, list) and not [k for k in keywords if isinstance(k, str) and k.strip()]:
            warning_messages.append(
                "catalog.keywords is empty: only listings matching the caller's keyword will pass"
            )

        organizations = catalog.get("organizations")
        if isinstance(organizations, dict):
            for key, aliases in organizations.items():
                if isinstance(aliases, list) and not aliases:
                    warning_messages.append(
                        f"Organization '{key}' has no aliases; its key will be matched literally"
                    )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
