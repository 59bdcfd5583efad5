"""Issue tracker entry point.

Usage: issuetracker [--config config.yaml] [--host HOST] [--port PORT] [--check]
"""

import argparse
import logging
import sys
from pathlib import Path

from issuetracker.config import AppConfig, ServerConfig, load_config
from issuetracker.logging import IssueTrackerLogging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="issuetracker",
        description="Issue tracker - in-memory issues API over HTTP",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument("--host", default=None, help="Override server.host")
    parser.add_argument("--port", "-p", type=int, default=None, help="Override server.port")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    updates = {}
    if args.host is not None:
        updates["host"] = args.host
    if args.port is not None:
        updates["port"] = args.port
    if not updates:
        return config
    server = ServerConfig(**{**config.server.model_dump(), **updates})
    return config.model_copy(update={"server": server})


def run(config: AppConfig) -> None:
    """Set up logging, build the store and serve until interrupted."""
    from issuetracker.api.server import run_server
    from issuetracker.store import IssueStore

    IssueTrackerLogging(config.logging).setup()
    log = logging.getLogger("issuetracker.main")
    log.info("Issue tracker starting | environment=%s", config.environment)
    run_server(config, IssueStore())


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, then serve."""
    args = parse_args(argv)

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("issuetracker.main").warning("config.yaml not found, using config.example.yaml")

    config = _apply_overrides(load_config(config_path), args)

    if args.check:
        print("Config OK:", f"{config.server.host}:{config.server.port}{config.server.api_prefix}", config.environment)
        return 0

    try:
        run(config)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logging.getLogger("issuetracker.main").exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
