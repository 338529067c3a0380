# ABOUTME: CLI entry point for reddit-fire.
# ABOUTME: Provides subcommands: add, delete, list, get; runs all configured feeds by default.

import argparse
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from reddit_fire.config import ConfigurationError, Settings, get_settings
from reddit_fire.models import OutputMode, Subreddit
from reddit_fire.pipeline import run_pipeline
from reddit_fire.render import render_feed_list
from reddit_fire.store import ConfigStore


def configure_logging(settings: Settings) -> None:
    """Configure structlog for console or JSON output on stderr."""
    log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)

    if settings.log_format == "json":
        processors = [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def resolve_output_mode(args: argparse.Namespace) -> OutputMode:
    """Collapse the output flags into a single OutputMode."""
    if args.output:
        return OutputMode(args.output)
    if args.browser:
        return OutputMode.BROWSER
    if args.json:
        return OutputMode.JSON
    return OutputMode.TEXT


def build_settings(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    overrides: dict[str, object] = {}
    if args.config is not None:
        overrides["config_path"] = Path(args.config).expanduser()
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.port is not None:
        overrides["port"] = args.port
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return get_settings().model_copy(update=overrides)


def non_negative_float(value: str) -> float:
    """argparse type for timeouts: zero or a positive number of seconds."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or positive")
    return number


def port_number(value: str) -> int:
    """argparse type for the HTTP server port."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError("must be between 1 and 65535")
    return port


def _fail(log: structlog.BoundLogger, error: Exception) -> int:
    log.error("configuration_error", error=str(error))
    print(f"error: {error}", file=sys.stderr)
    return 1


def cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    """Add a subreddit, or replace its score threshold if already configured."""
    log = structlog.get_logger()
    store = ConfigStore(settings=settings)

    try:
        configuration = store.load()
        subreddit = configuration.upsert(args.name, args.score)
    except (ConfigurationError, ValidationError) as e:
        return _fail(log, e)

    store.save(configuration)
    log.info("subreddit_added", name=subreddit.name, threshold=subreddit.threshold)
    return 0


def cmd_delete(args: argparse.Namespace, settings: Settings) -> int:
    """Remove subreddits from the configuration."""
    log = structlog.get_logger()
    store = ConfigStore(settings=settings)

    try:
        configuration = store.load()
    except ConfigurationError as e:
        return _fail(log, e)

    for name in args.names:
        if not configuration.delete(name):
            log.info("subreddit_not_configured", name=name)

    store.save(configuration)
    return 0


def cmd_list(_args: argparse.Namespace, settings: Settings) -> int:
    """List configured subreddits with their thresholds."""
    log = structlog.get_logger()

    try:
        configuration = ConfigStore(settings=settings).load()
    except ConfigurationError as e:
        return _fail(log, e)

    render_feed_list(configuration.subreddits, sys.stdout)
    return 0


def cmd_get(args: argparse.Namespace, settings: Settings) -> int:
    """Fetch a single subreddit filtered by score, without touching the configuration."""
    log = structlog.get_logger()

    try:
        feeds = [Subreddit(name=args.name, threshold=args.score)]
        run_pipeline(feeds, resolve_output_mode(args), settings)
    except (ConfigurationError, ValidationError) as e:
        return _fail(log, e)
    return 0


def cmd_run(args: argparse.Namespace, settings: Settings) -> int:
    """Fetch every configured subreddit and render the result."""
    log = structlog.get_logger()

    try:
        configuration = ConfigStore(settings=settings).load()
        run_pipeline(configuration.subreddits, resolve_output_mode(args), settings)
    except ConfigurationError as e:
        return _fail(log, e)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with global flags and subcommands."""
    parser = argparse.ArgumentParser(
        prog="fire",
        description="View posts from your favorite subreddits filtered by score",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="Path to JSON configuration file (default: ~/.fire.json)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=non_negative_float,
        help="Seconds to wait for all subreddits, 0 waits indefinitely (default: 3)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=port_number,
        help="HTTP server port for browser output (default: 17000)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    output = parser.add_mutually_exclusive_group()
    output.add_argument("-j", "--json", action="store_true", help="JSON output")
    output.add_argument("-b", "--browser", action="store_true", help="Browser output")
    output.add_argument(
        "-o",
        "--output",
        choices=[mode.value for mode in OutputMode],
        help="Output mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser(
        "add",
        help="Add or replace subreddit with score in configuration",
    )
    add_parser.add_argument("name", help="Subreddit name")
    add_parser.add_argument("score", type=int, help="Minimum post score")

    delete_parser = subparsers.add_parser(
        "delete",
        help="Remove subreddits from configuration",
    )
    delete_parser.add_argument("names", nargs="+", help="Subreddit names")

    subparsers.add_parser(
        "list",
        help="List subreddits from configuration",
    )

    get_parser = subparsers.add_parser(
        "get",
        help="Filter single subreddit by score",
    )
    get_parser.add_argument("name", help="Subreddit name")
    get_parser.add_argument("score", type=int, help="Minimum post score")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = build_settings(args)
    configure_logging(settings)

    commands = {
        None: cmd_run,
        "add": cmd_add,
        "delete": cmd_delete,
        "list": cmd_list,
        "get": cmd_get,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args, settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
