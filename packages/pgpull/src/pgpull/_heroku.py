from __future__ import annotations

import logging as _logging

from . import _process, _util


__all__ = [
    "fetch_heroku_dsn",
    "heroku_run_command",
]


_LOGGER = _logging.getLogger(__name__)


def heroku_run_command(
    app: str, *, env_var: str = "DATABASE_URL", heroku_cli: str = "heroku"
) -> list[str]:
    """Command printing *env_var* inside a one-off dyno of *app*.

    >>> heroku_run_command("tilex-prod")
    ['heroku', 'run', '-a', 'tilex-prod', '--no-notify', '--no-tty', '-x', "sh -c 'echo $DATABASE_URL'"]
    """
    return [
        heroku_cli,
        "run",
        "-a",
        app,
        "--no-notify",
        "--no-tty",
        "-x",
        f"sh -c 'echo ${env_var}'",
    ]


def fetch_heroku_dsn(
    app: str,
    *,
    env_var: str = "DATABASE_URL",
    heroku_cli: str = "heroku",
    logger: _logging.Logger | _logging.LoggerAdapter | None = None,
) -> str:
    """Return the database connection string of Heroku app *app*.

    Raises :obj:`~pgpull.NoOutputError` if the command printed nothing
    (whatever its exit status) and :obj:`~pgpull.ProcessFailedError` if it
    printed something but exited with a non-zero status.
    """
    if logger is None:
        logger = _util.PrefixLoggerAdapter(_LOGGER, prefix="[heroku]")
    cmd = heroku_run_command(app, env_var=env_var, heroku_cli=heroku_cli)
    output, returncode = _process.run_command(cmd, logger=logger)
    dsn = output.strip()
    if not dsn:
        logger.error("No output from %s (exit status %s)", app, returncode)
        raise _process.NoOutputError(app, env_var)
    elif returncode == 0:
        logger.info("Fetched %s of %s", env_var, app)
        return dsn
    else:
        raise _process.ProcessFailedError(heroku_cli, dsn, returncode)
