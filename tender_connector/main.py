"""Main entry point for the Tender Connector."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import uvicorn
from dotenv import load_dotenv

from tender_connector.api import create_app
from tender_connector.config.catalog import load_catalog
from tender_connector.config.environment import EnvironmentConfig
from tender_connector.config.exceptions import ConfigurationError
from tender_connector.config.loader import load_config
from tender_connector.config.models import AppConfig
from tender_connector.domain.models import Catalog
from tender_connector.drivers.exceptions import DriverError
from tender_connector.logging import get_logger
from tender_connector.logging.config import configure_logging
from tender_connector.pipeline.runner import SearchService
from tender_connector.tools import ToolArgumentsError, build_search_filter

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tender-connector",
        description="Tender Connector - search public procurement listings by organization and keyword",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Run one search and print the results as JSON")
    search_parser.add_argument("--organization", "--org", default=None, help="Organization key or 'all'")
    search_parser.add_argument("--keyword", "-q", default=None, help="Extra keyword to match")
    search_parser.add_argument("--days", type=int, default=None, help="Recency window in days")
    search_parser.add_argument("--limit", type=int, default=None, help="Maximum number of results")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", default=None, help="Bind address (overrides config)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (overrides config)")

    return parser


def load_runtime(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig, Catalog]:
    """
    Load configuration and catalog, then configure logging.

    Log level priority: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration or catalog is invalid
    """
    app_config, env_config = load_config(config_path)
    catalog = load_catalog(app_config.catalog)

    level = log_level_override or app_config.logging.level
    configure_logging(
        level=level,
        format_type=app_config.logging.format,
        environment=env_config.environment,
        stream=sys.stderr,
    )
    logger.info(
        "Configuration loaded",
        extra={
            "event": "config.loaded",
            "mode": app_config.mode,
            "organization_count": len(catalog.organizations),
            "keyword_count": len(catalog.keywords),
        },
    )
    return app_config, env_config, catalog


def run_search(args: argparse.Namespace, service: SearchService) -> int:
    arguments = {
        "organization": args.organization,
        "keyword": args.keyword,
        "recencyDays": args.days,
        "limit": args.limit,
    }
    try:
        search_filter = build_search_filter(arguments, service.catalog)
    except ToolArgumentsError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return EXIT_USAGE

    listings = service.search(search_filter)
    print(json.dumps([listing.to_public_dict() for listing in listings], ensure_ascii=False, indent=2))
    return EXIT_OK


def run_server(args: argparse.Namespace, app_config: AppConfig, service: SearchService) -> int:
    host = args.host or app_config.server.host
    port = args.port or app_config.server.port
    logger.info(
        f"Serving on {host}:{port}",
        extra={"event": "service.starting", "host": host, "port": port, "mode": service.mode},
    )
    # log_config=None keeps the handlers installed by configure_logging
    uvicorn.run(create_app(service, app_config.server), host=host, port=port, log_config=None)
    logger.info("Server stopped", extra={"event": "service.stopping"})
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Tender Connector.

    Returns:
        Exit code (0 for success, 1 for runtime failures, 2 for invalid arguments).
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        app_config, _, catalog = load_runtime(args.config, args.log_level)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        service = SearchService(app_config, catalog)
    except DriverError as e:
        print(f"Driver Error: {e}\nHint: {e.hint}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        if args.command == "search":
            return run_search(args, service)
        return run_server(args, app_config, service)
    except DriverError as e:
        print(f"Search failed: {e}\nHint: {e.hint}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return EXIT_OK
    finally:
        service.close()


if __name__ == "__main__":
    sys.exit(main())
