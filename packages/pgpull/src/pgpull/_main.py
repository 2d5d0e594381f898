"""Replace the development PostgreSQL DB with a dump from a Heroku app's DB."""

from __future__ import annotations

import logging as _logging
import typing as _typing

from . import _util


if _typing.TYPE_CHECKING:
    import argparse as _argparse


__all__ = [
    "CONFIRM_PROMPT",
    "LOG_LEVELS",
    "create_argument_parser",
    "main",
    "main_cli",
]


_LOGGER = _util.PrefixLoggerAdapter(_logging.getLogger(__name__), prefix="[pgpull]")

CONFIRM_PROMPT = "This will drop your local database. Continue?"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def create_argument_parser() -> _argparse.ArgumentParser:
    import argparse

    p = argparse.ArgumentParser(
        prog="pgpull",
        description=__doc__,
    )
    p.add_argument(
        "--app",
        "-a",
        required=True,
        metavar="<app>",
        help="Source Heroku app name.",
    )
    p.add_argument(
        "--force",
        "-f",
        action="store_true",
        default=False,
        help="Continue without user input.",
    )
    p.add_argument(
        "--config",
        metavar="<path>",
        help="Local database config (default: env PGPULL_CONFIG or config-dev.yml)",
    )
    p.add_argument(
        "--log-level",
        metavar="<level>",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help=f"Console log level, one of {', '.join(LOG_LEVELS)} (default: INFO)",
    )
    p.add_argument(
        "--log-file",
        metavar="<path>",
        help="Also write a DEBUG log to <path>",
    )
    return p


def main(argv: list[str] | None = None, *, setup_logging: bool = True) -> int:
    from . import _config, _pull
    from ._process import PgPullError

    args = create_argument_parser().parse_args(argv)

    if setup_logging:
        _util.configure_console_logging(args.log_level)
    if args.log_file:
        _LOGGER.info("Writing log file %s", args.log_file)
        _util.configure_file_logging(args.log_file, level=_logging.DEBUG)

    if not args.force and not _util.console_confirm(CONFIRM_PROMPT):
        _LOGGER.debug("No user approval given")
        return 0

    try:
        config = _config.PgPullConfig.from_file(args.config)
        _pull.replace_local_db_with_heroku_db(args.app, config)
    except PgPullError as exc:
        _LOGGER.error("%s", exc)
        return 1
    return 0


def main_cli() -> None:
    import sys

    sys.exit(main())
