"""CLI entrypoint for the storybook-api service."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, ServiceConfig, load_config
from .logging import configure_logging, get_logger
from .project import detect_storybook_version, find_storybook_config

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storybook-api",
        description="Expose Storybook stories via REST API.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (defaults to current directory).",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Port to run the API server on (default: 6006).",
    )
    parser.add_argument(
        "-s",
        "--storybook-port",
        type=int,
        default=None,
        help="Port of the Storybook dev server (default: 6010).",
    )
    parser.add_argument(
        "--storybook-url",
        default=None,
        help="URL of a running Storybook instance (overrides --storybook-port).",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML config file (defaults to <path>/.storybook-api.yml).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface to bind the API server to.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> ServiceConfig:
    """Merge the config file with command-line overrides."""
    project_dir = Path(args.path).expanduser().resolve()
    if args.config is None:
        settings = load_config(project_dir)
    else:
        if not args.config.expanduser().is_file():
            raise ConfigError(f"Config file not found: {args.config}")
        settings = load_config(args.config, project_dir=project_dir)
    if args.port is not None:
        settings.port = args.port
    if args.storybook_port is not None:
        settings.storybook_port = args.storybook_port
    if args.storybook_url:
        settings.storybook_url = args.storybook_url
    return settings


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for storybook-api."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        settings = resolve_settings(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    version = detect_storybook_version(settings.project_dir)
    if version:
        logger.info("Detected Storybook version: %s", version)
    else:
        logger.warning("Could not detect Storybook version")

    config_dir = find_storybook_config(settings.project_dir)
    if config_dir:
        logger.info("Found Storybook config: %s", config_dir)
    else:
        logger.warning("Could not find .storybook directory")

    logger.info("Reading stories from %s", settings.resolved_storybook_url)
    logger.info("API available at http://localhost:%s/api", settings.port)

    from .service import run_service

    try:
        run_service(settings, host=args.host)
    except OSError as exc:  # pragma: no cover - environment dependent
        parser.exit(1, f"Error starting server: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
