from __future__ import annotations

import logging as _logging
import typing as _typing

from . import _process, _util


if _typing.TYPE_CHECKING:
    import collections.abc as _collections_abc
    import os as _os

    from ._dsn import ConnectionConfig


__all__ = [
    "PASSWORD_ENV",
    "pg_args",
    "pg_dump_to_file",
    "pg_env",
    "psql_import",
    "recreate_database",
]


_LOGGER = _logging.getLogger(__name__)

PASSWORD_ENV = "PGPASSWORD"
_PASSWORD_NOTE = f"passing password in env {PASSWORD_ENV}"

_Logger = _logging.Logger | _logging.LoggerAdapter


def pg_args(
    config: ConnectionConfig, args: _collections_abc.Iterable[str] = ()
) -> list[str]:
    """Connection arguments for ``pg_dump`` / ``psql`` around *args*.

    >>> from pgpull import ConnectionConfig
    >>> c = ConnectionConfig(username="dev", hostname="localhost", port="5432", database="devapp")
    >>> pg_args(c, ["-f", "dump.sql"])
    ['-U', 'dev', '-h', 'localhost', '-p', '5432', '-f', 'dump.sql', 'devapp']
    """
    return [
        "-U",
        config.username,
        "-h",
        config.hostname,
        "-p",
        config.port,
        *(str(a) for a in args),
        config.database,
    ]


def pg_env(
    config: ConnectionConfig, env: _collections_abc.Mapping[str, str] | None = None
) -> dict[str, str]:
    import os

    env = dict(os.environ if env is None else env)
    env[PASSWORD_ENV] = config.password or ""
    return env


def pg_dump_to_file(
    config: ConnectionConfig,
    dump_path: str | _os.PathLike[str],
    *,
    logger: _Logger | None = None,
) -> None:
    import os

    import humanfriendly as _humanfriendly

    if logger is None:
        logger = _util.PrefixLoggerAdapter(_LOGGER, prefix="[pg_dump]")
    args = pg_args(config, ["-f", os.fspath(dump_path), "--no-acl", "--no-owner"])
    _process.check_command(
        ["pg_dump", *args], env=pg_env(config), logger=logger, log_note=_PASSWORD_NOTE
    )
    size = os.path.getsize(dump_path)
    logger.info(
        "Wrote %s (%s / %s bytes)",
        os.fspath(dump_path),
        _humanfriendly.format_size(size, binary=True),
        size,
    )


def psql_import(
    config: ConnectionConfig,
    dump_path: str | _os.PathLike[str],
    *,
    logger: _Logger | None = None,
) -> None:
    import os

    if logger is None:
        logger = _util.PrefixLoggerAdapter(_LOGGER, prefix="[psql]")
    args = pg_args(config, ["-f", os.fspath(dump_path)])
    _process.check_command(
        ["psql", *args], env=pg_env(config), logger=logger, log_note=_PASSWORD_NOTE
    )
    logger.info("Loaded %s into %s", os.fspath(dump_path), config.database)


def recreate_database(
    config: ConnectionConfig,
    *,
    recreate_commands: _collections_abc.Sequence[_collections_abc.Sequence[str]] = (),
    terminate_other_clients: bool = False,
    logger: _Logger | None = None,
) -> None:
    """Drop the local database and create an empty one.

    If *recreate_commands* is given (e.g. ``mix ecto.drop`` and
    ``mix ecto.create``) they are run in order and the project tooling
    owns the drop/create. Otherwise ``psql`` is run against the
    ``postgres`` maintenance database.
    """
    import dataclasses

    if logger is None:
        logger = _util.PrefixLoggerAdapter(_LOGGER, prefix="[recreate]")

    if recreate_commands:
        for cmd in recreate_commands:
            _process.check_command(cmd, logger=logger)
        return

    maintenance = dataclasses.replace(config, database="postgres")
    env = pg_env(config)

    def run_psql(command: str) -> None:
        _process.check_command(
            ["psql", *pg_args(maintenance, ["-c", command])],
            env=env,
            logger=logger,
            log_note=_PASSWORD_NOTE,
        )

    db_name = config.database
    quoted_db_name = '"' + db_name.replace('"', '""') + '"'
    if terminate_other_clients:
        quoted_literal = "'" + db_name.replace("'", "''") + "'"
        run_psql(
            "SELECT pg_terminate_backend(pid) FROM pg_stat_activity "
            f"WHERE datname = {quoted_literal} AND pid <> pg_backend_pid();"
        )
    run_psql(f"DROP DATABASE IF EXISTS {quoted_db_name};")
    run_psql(f"CREATE DATABASE {quoted_db_name};")
    logger.info("Recreated database %s", db_name)
