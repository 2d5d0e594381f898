from __future__ import annotations

import contextlib as _contextlib
import logging as _logging
import typing as _typing

from . import _util


if _typing.TYPE_CHECKING:
    import pathlib as _pathlib

    from ._config import PgPullConfig


__all__ = [
    "replace_local_db_with_heroku_db",
    "temporary_dump_file",
]


_LOGGER = _logging.getLogger(__name__)


@_contextlib.contextmanager
def temporary_dump_file(suffix: str = ".sql") -> _typing.Iterator[_pathlib.Path]:
    """Yield the path of a fresh temporary file, removed on exit.

    >>> with temporary_dump_file() as tmp:
    ...     tmp.suffix, tmp.exists()
    ('.sql', True)
    >>> tmp.exists()
    False
    """
    import os
    import pathlib
    import tempfile

    fd, name = tempfile.mkstemp(suffix=suffix)
    os.close(fd)
    path = pathlib.Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
        _LOGGER.debug("[pull] Removed %s", path)


def replace_local_db_with_heroku_db(
    app: str,
    config: PgPullConfig,
    *,
    logger: _logging.Logger | _logging.LoggerAdapter | None = None,
) -> None:
    """Replace the local database of *config* with a dump of Heroku app *app*.

    Fetch ``DATABASE_URL`` of *app*, ``pg_dump`` it into a temporary
    file, drop and create the local database, then load the dump with
    ``psql``.  Each failure aborts the remaining steps.  The temporary
    file is removed in all cases.

    An injected *logger* also receives the lines of every step, prefixed
    with the step name (``[heroku]``, ``[pg_dump]``, ...).
    """
    from . import _dsn, _heroku, _pg
    from ._process import ConfigError

    def step_logger(prefix: str) -> _logging.LoggerAdapter | None:
        if injected is None:
            return None
        return _util.PrefixLoggerAdapter(injected, prefix=prefix)

    injected = logger
    if logger is None:
        logger = _util.PrefixLoggerAdapter(_LOGGER, prefix="[pull]")

    local = config.to_connection_config()
    if config.is_production:
        raise ConfigError(
            f"Refusing to replace database {local.database!r} of a production config"
        )

    with temporary_dump_file(config.dump_suffix) as tmp:
        logger.info("Dumping Heroku app `%s` DB to %s...", app, tmp)
        dsn = _heroku.fetch_heroku_dsn(
            app,
            env_var=config.database_url_env,
            heroku_cli=config.heroku_cli,
            logger=step_logger("[heroku]"),
        )
        remote = _dsn.parse_dsn(dsn)
        logger.debug("Remote database %s", remote.redacted())
        _pg.pg_dump_to_file(remote, tmp, logger=step_logger("[pg_dump]"))

        logger.info("Recreating local DB %s...", local.redacted())
        _pg.recreate_database(
            local,
            recreate_commands=config.recreate_commands,
            terminate_other_clients=config.terminate_other_clients,
            logger=step_logger("[recreate]"),
        )

        logger.info("Loading to local DB from %s ...", tmp)
        _pg.psql_import(local, tmp, logger=step_logger("[psql]"))
    logger.info("Finished: %s now holds the data of %s", local.database, app)
