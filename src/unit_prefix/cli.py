"""CLI entrypoint for unit-prefix."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from unit_prefix.config import (
    PrefixConfig,
    default_config,
    discover_config,
    load_config,
)
from unit_prefix.measurement_system import (
    SYSTEM_NAMES,
    MeasurementSystem,
    get_measurement_system,
)
from unit_prefix.writers import SUPPORTED_FORMATS, build_frame, write_frame


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    """Add ``--system`` and ``--config`` to a subcommand parser."""
    parser.add_argument(
        "-s",
        "--system",
        type=str,
        choices=SYSTEM_NAMES,
        default=None,
        help="Measurement system (default: from config, else metric).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to unit_prefix.toml (default: auto-discover from CWD).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with ``parse`` and ``scan`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="unit-prefix",
        description="Express byte counts with metric or binary unit prefixes.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- parse ---
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse integer values and print a CSV table.",
    )
    parse_parser.add_argument(
        "values",
        type=int,
        nargs="+",
        help="Non-negative integer magnitudes.",
    )
    _add_common_options(parse_parser)

    # --- scan ---
    scan_parser = subparsers.add_parser(
        "scan",
        help="Report the size of each entry in a directory.",
    )
    scan_parser.add_argument(
        "directory",
        type=str,
        help="Directory to scan.",
    )
    scan_parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=SUPPORTED_FORMATS,
        default=None,
        help="Output format (default: from config, else csv).",
    )
    scan_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file (default: CSV on stdout).",
    )
    _add_common_options(scan_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )

    if args.command == "parse":
        _handle_parse(args)

    if args.command == "scan":
        _handle_scan(args)


def _resolve_config(args: argparse.Namespace) -> PrefixConfig:
    """Load config from ``--config`` or discovery, else use defaults.

    Args:
        args: Parsed CLI namespace (must have a ``config`` attribute).

    Returns:
        The effective ``PrefixConfig``.
    """
    if args.config:
        config_path = Path(args.config).resolve()
    else:
        try:
            config_path = discover_config()
        except FileNotFoundError:
            logging.debug("No config file found, using defaults.")
            return default_config()

    try:
        return load_config(config_path)
    except (OSError, ValueError) as exc:
        logging.error("%s", exc)
        sys.exit(1)


def _resolve_system(
    args: argparse.Namespace, config: PrefixConfig
) -> MeasurementSystem:
    """Pick the ``--system`` override, falling back to the config."""
    if args.system:
        return get_measurement_system(args.system)
    return config.measurement_system


def _handle_parse(args: argparse.Namespace) -> None:
    """Handle the ``parse`` subcommand."""
    config = _resolve_config(args)
    system = _resolve_system(args, config)

    try:
        df = build_frame(((str(value), value) for value in args.values), system)
    except ValueError as exc:
        logging.error("%s", exc)
        sys.exit(1)

    sys.stdout.write(df.write_csv())


def _handle_scan(args: argparse.Namespace) -> None:
    """Handle the ``scan`` subcommand."""
    from unit_prefix.scan import scan_directory

    config = _resolve_config(args)
    system = _resolve_system(args, config)
    fmt: str = args.format or config.output_format
    root = Path(args.directory)

    if fmt == "parquet" and not args.output:
        logging.error("Parquet output requires -o/--output.")
        sys.exit(1)

    try:
        entries = scan_directory(root)
    except OSError as exc:
        logging.error("%s", exc)
        sys.exit(1)

    logging.info("Scanned %d entries in %s", len(entries), root)
    df = build_frame(((entry.path.name, entry.size) for entry in entries), system)

    if args.output:
        dest = Path(args.output).resolve()
        try:
            write_frame(df, dest, fmt=fmt)
        except (OSError, ValueError) as exc:
            logging.error("%s", exc)
            sys.exit(1)
        logging.info("Saved %s", dest)
    else:
        sys.stdout.write(df.write_csv())
