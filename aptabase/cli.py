"""
aptabase-track
==============
Send a single analytics event to Aptabase from the shell, e.g. from a
deployment script or a cron job.

App key, host and app version come from ``aptabase_config.json`` and the
``APTABASE_*`` environment variables unless given on the command line.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Dict, List

from .config_manager import ConfigManager
from .factory import create_event_tracker
from .logging_config import setup_logging, stop_logging
from .models import PropValue
from .version import __version__

_LOG = logging.getLogger("aptabase.cli")


def parse_prop(raw: str) -> tuple[str, PropValue]:
    """Parse ``key=value`` into a property, coercing booleans and numbers."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")

    if value.lower() in ("true", "false"):
        return key, value.lower() == "true"
    for cast in (int, float):
        try:
            return key, cast(value)
        except ValueError:
            continue
    return key, value


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="aptabase-track",
        description="Send one event to an Aptabase collection endpoint.",
        epilog="""
Examples:
  %(prog)s app_deployed --app-key A-EU-1234567890 --prop env=prod --prop build=42

  Self-hosted server:
    %(prog)s app_deployed --app-key A-SH-1234567890 --host https://analytics.example.com
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("event_name", help="Name of the event to send")
    p.add_argument("--app-key", dest="app_key", help="Aptabase app key (<prefix>-<region>-<suffix>)")
    p.add_argument("--host", help="Base URL of a self-hosted Aptabase server")
    p.add_argument("--app-version", dest="app_version", help="Version of the reporting application")
    p.add_argument(
        "--prop",
        dest="props",
        action="append",
        type=parse_prop,
        default=[],
        metavar="KEY=VALUE",
        help="Event property; may be repeated",
    )
    p.add_argument(
        "--config",
        default="aptabase_config.json",
        help="JSON configuration file (default: aptabase_config.json)",
    )
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = _parse_args(argv)
    manager = ConfigManager(args.config)
    setup_logging(args.debug or manager.get_logging_config().debug)

    try:
        tracker = create_event_tracker(
            manager,
            app_key=args.app_key,
            host=args.host,
            app_version=args.app_version,
        )
        if not tracker.is_enabled:
            _LOG.warning("No valid app key configured; nothing sent.")
            return 1

        props: Dict[str, PropValue] = dict(args.props)
        result = asyncio.run(tracker.deliver(args.event_name, props or None))
        if result.sent:
            _LOG.info("Sent event %r to %s", args.event_name, tracker.config.event_url)
            return 0
        return 1
    finally:
        stop_logging()


if __name__ == "__main__":
    raise SystemExit(main())
