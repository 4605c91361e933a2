import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import colorlog
import yaml

from schema_catalog import __version__ as _PACKAGE_VERSION
from schema_catalog.core.errors import SchemaCatalogError
from schema_catalog.core.models import FIELD_DESCRIPTIONS, SchemaFilterConfig


DSN_ENV_VAR = "SCHEMA_CATALOG_DSN"
OUTPUT_FORMATS = ["json", "csv", "text"]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    # Results go to stdout, logs to stderr.
    stream_handler = colorlog.StreamHandler(sys.stderr)
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _resolve_config(args: argparse.Namespace) -> Optional[SchemaFilterConfig]:
    """Build the filter config from a named YAML filter or from flags.

    Logs the problem and returns None when the inputs are unusable.
    """
    filters_config = getattr(args, "filters_config", None)
    filter_name = getattr(args, "filter", None)

    if filter_name:
        from schema_catalog.filters.registry import FilterRegistry

        cfg_path = Path(filters_config or Path("config/filters.yaml"))
        try:
            registry = FilterRegistry(cfg_path)
            config = registry.get(filter_name).config
        except (FileNotFoundError, yaml.YAMLError, ValueError, KeyError) as e:
            logging.error("Failed to load filter '%s': %s", filter_name, e)
            return None
        # --database overrides the database named in the filter file
        database = getattr(args, "database", None)
        if database:
            config = SchemaFilterConfig.from_mapping({**config.to_dict(), "database": database})
        return config

    try:
        return SchemaFilterConfig.from_mapping(
            {
                "database": getattr(args, "database", None),
                "include_system_schemas": bool(getattr(args, "include_system_schemas", False)),
                "like_any_patterns": list(getattr(args, "like_any", None) or []),
                "like_all_patterns": list(getattr(args, "like_all", None) or []),
                "not_like_all_patterns": list(getattr(args, "not_like_all", None) or []),
                "regex_pattern": getattr(args, "regex", None) or "",
            }
        )
    except ValueError as e:
        logging.error("Invalid filter arguments: %s", e)
        return None


def cmd_query(args: argparse.Namespace) -> int:
    """Print the composed catalog query without touching a database."""
    from schema_catalog.core.query import build_query

    config = _resolve_config(args)
    if config is None:
        return 2

    query = build_query(config)
    print(query.to_literal())
    if getattr(args, "show_params", False):
        sql, params = query.to_sql()
        print(sql)
        print(yaml.safe_dump({"params": params}, sort_keys=False, allow_unicode=True).rstrip())
    return 0


def cmd_id(args: argparse.Namespace) -> int:
    """Print the identifier for a filter configuration."""
    from schema_catalog.core.query import generate_schemas_id

    config = _resolve_config(args)
    if config is None:
        return 2
    print(generate_schemas_id(config))
    return 0


def cmd_read(args: argparse.Namespace) -> int:
    """Read matching schema names from the database.

    Returns:
        0 on success
        1 if the read failed (transaction, query or row scan)
        2 on invalid arguments or configuration
        3 if the PostgreSQL driver is not installed
    """
    from schema_catalog.core.datasource import read_schemas
    from schema_catalog.core.query import materialize_result
    from schema_catalog.core.session import psycopg_connector

    config = _resolve_config(args)
    if config is None:
        return 2

    dsn = getattr(args, "dsn", None) or os.environ.get(DSN_ENV_VAR)
    if not dsn:
        logging.error("--dsn is required (or set %s)", DSN_ENV_VAR)
        return 2

    try:
        connect = psycopg_connector(dsn)
    except ImportError as e:
        logging.error(
            "PostgreSQL driver unavailable: %s. Install with: pip install 'schema-catalog-tools[postgres]'",
            e,
        )
        return 3

    try:
        result = read_schemas(connect, config)
    except SchemaCatalogError as e:
        logging.error("Reading schemas failed: %s", e)
        return 1

    logging.info("Filter id: %s", result.id)
    print(materialize_result(result, format=getattr(args, "format", None) or "json"))
    return 0


def _add_filter_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--database", default=None, help=FIELD_DESCRIPTIONS["database"])
    p.add_argument(
        "--include-system-schemas",
        action="store_true",
        help=FIELD_DESCRIPTIONS["include_system_schemas"],
    )
    p.add_argument(
        "--like-any",
        action="append",
        default=None,
        metavar="PATTERN",
        help=FIELD_DESCRIPTIONS["like_any_patterns"] + " (repeatable)",
    )
    p.add_argument(
        "--like-all",
        action="append",
        default=None,
        metavar="PATTERN",
        help=FIELD_DESCRIPTIONS["like_all_patterns"] + " (repeatable)",
    )
    p.add_argument(
        "--not-like-all",
        action="append",
        default=None,
        metavar="PATTERN",
        help=FIELD_DESCRIPTIONS["not_like_all_patterns"] + " (repeatable)",
    )
    p.add_argument("--regex", default=None, metavar="PATTERN", help=FIELD_DESCRIPTIONS["regex_pattern"])
    p.add_argument(
        "--filters-config",
        default=None,
        help="Path to filters.yaml (defaults to config/filters.yaml)",
    )
    p.add_argument(
        "--filter",
        default=None,
        metavar="NAME",
        help="Use a named filter from the filters config instead of the pattern flags",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="schema-catalog",
        description=f"Schema Catalog Tools (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_query = sub.add_parser("query", help="Print the composed schema catalog query")
    _add_filter_arguments(p_query)
    p_query.add_argument(
        "--show-params",
        action="store_true",
        help="Also print the parameterized query and its bound values",
    )
    p_query.set_defaults(func=cmd_query)

    p_id = sub.add_parser("id", help="Print the identifier of a filter configuration")
    _add_filter_arguments(p_id)
    p_id.set_defaults(func=cmd_id)

    p_read = sub.add_parser("read", help="Read matching schema names from PostgreSQL")
    _add_filter_arguments(p_read)
    p_read.add_argument(
        "--dsn",
        default=None,
        help=f"libpq connection string for the server (defaults to ${DSN_ENV_VAR})",
    )
    p_read.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="json",
        help="Output format (default json)",
    )
    p_read.set_defaults(func=cmd_read)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
