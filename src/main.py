#!/usr/bin/env python3
"""
Image Search - Main Entry Point

Search registries for a given image. Can search all the configured
registries or a specific registry, limit the number of results, and
filter the output based on certain conditions.

Examples:
    image-search --filter=is-official --limit 3 alpine
    image-search registry.fedoraproject.org/
    image-search --format "table {{.Index}} {{.Name}}" registry.fedoraproject.org/fedora
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from src.config.config import Config, load_config, load_config_from_env
from src.registry.auth import get_auth_file
from src.registry.registries import get_registries, split_term
from src.registry.types import OptionalBool
from src.search.aggregator import SearchAggregator
from src.search.filter import parse_filters
from src.search.formatter import SearchResultFormatter, gen_search_format
from src.search.options import SearchOptions
from src.utils.environment import load_env_file
from src.utils.errors import UsageError, handle_error
from src.utils.logging import configure_logging, get_logger


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "y"):
        return True
    if lowered in ("0", "false", "no", "n"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="image-search",
        description="Search registry for image",
    )
    parser.add_argument("term", nargs="*", help="Image to search for")
    parser.add_argument(
        "--authfile",
        help=(
            "Path of the authentication file. Default is "
            "${XDG_RUNTIME_DIR}/containers/auth.json. "
            "Use REGISTRY_AUTH_FILE environment variable to override"
        ),
        default=None,
    )
    parser.add_argument(
        "--filter", "-f",
        help="Filter output based on conditions provided (default [])",
        action="append",
        default=[],
    )
    parser.add_argument(
        "--format",
        help="Change the output format to a template",
        default="",
    )
    parser.add_argument(
        "--limit",
        help="Limit the number of results",
        type=int,
        default=None,
    )
    parser.add_argument(
        "--no-trunc",
        help="Do not truncate the output",
        action="store_true",
        default=None,
    )
    parser.add_argument(
        "--tls-verify",
        help="Require HTTPS and verify certificates when contacting registries (default: true)",
        type=_parse_bool,
        nargs="?",
        const=True,
        default=None,
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "--log-level", "-l",
        help="Logging level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )
    parser.add_argument(
        "--env-file", "-e",
        help="Path to .env file",
        default=None,
    )
    return parser.parse_args(argv)


def get_term(args: argparse.Namespace) -> str:
    """Return the single search term or raise a usage error."""
    if len(args.term) > 1:
        raise UsageError("too many arguments. Requires exactly 1")
    if not args.term:
        raise UsageError("no argument given, requires exactly 1 argument")
    return args.term[0]


def build_options(args: argparse.Namespace, config: Config) -> SearchOptions:
    """Combine command line arguments with configured defaults."""
    limit = args.limit if args.limit is not None else config.search.limit
    if limit < 0:
        raise UsageError(f"invalid limit {limit}, must not be negative")

    no_trunc = args.no_trunc if args.no_trunc is not None else config.search.no_trunc
    tls_verify = args.tls_verify if args.tls_verify is not None else config.search.tls_verify

    return SearchOptions(
        filters=list(args.filter),
        limit=limit,
        no_trunc=no_trunc,
        authfile=get_auth_file(args.authfile),
        tls_verify=OptionalBool.from_bool(tls_verify),
        format=gen_search_format(args.format),
    )


def run_search(
    args: argparse.Namespace,
    config: Config,
    aggregator: Optional[SearchAggregator] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Run a search and write its output.

    Raises:
        UsageError: If the argument count or a flag value is wrong
        FilterParseError: If a filter expression is invalid
        AggregateError: If no registries could be resolved
        TemplateError: If the output template is invalid
    """
    registry, term = split_term(get_term(args))
    options = build_options(args, config)
    registries = get_registries(registry, config)
    search_filter = parse_filters(options.filters)
    formatter = SearchResultFormatter(options.format)

    aggregator = aggregator or SearchAggregator(timeout=config.registries.timeout)
    records = aggregator.search_sync(term, registries, options, search_filter)
    formatter.write(records, stream)


def load_configuration(config_path: Optional[str]) -> Config:
    """Load configuration from a file when given, from the environment otherwise."""
    if config_path:
        return load_config(Path(config_path))
    return load_config_from_env()


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = parse_arguments(argv)

    if args.env_file:
        load_env_file(args.env_file)
    else:
        load_env_file()

    try:
        config = load_configuration(args.config)
    except (FileNotFoundError, ValueError) as e:
        configure_logging(log_level=args.log_level)
        get_logger(__name__).error(f"Error loading configuration: {e}")
        return 125

    configure_logging(
        config_path=config.logging.config_file,
        log_level=args.log_level or ("DEBUG" if config.debug else config.logging.level),
        log_file=config.logging.log_file,
    )
    logger = get_logger(__name__)

    try:
        run_search(args, config)
    except Exception as e:
        return handle_error(e)

    logger.debug("Search finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
