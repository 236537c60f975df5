from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from config import LOG_LEVELS, load_config
from confinement import ProvisioningError, ScopeRegistry
from console import Console
from logging_setup import configure_logging
from op_registry import autodiscover_operations


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Logistics role-scoped file manager")
    p.add_argument(
        "--home",
        default=None,
        help="Directory holding the logistics/ tree (default: LOGISTICS_HOME or cwd).",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Log level (default: LOGISTICS_LOG_LEVEL or WARNING).",
    )
    p.add_argument(
        "--log-destination",
        default=None,
        help="stderr, stdout or a file path.",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        config = load_config(
            home=args.home,
            log_level=args.log_level,
            log_destination=args.log_destination,
        )
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 2
    logger = configure_logging(config.log_level, config.log_destination)
    try:
        scopes = ScopeRegistry.provision(config.home)
    except ProvisioningError as exc:
        logger.critical("cannot provision logistics roots: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    console = Console(scopes, config, operations=autodiscover_operations())
    try:
        console.run()
    except KeyboardInterrupt:
        print("\nExiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
