from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

from . import _util
from ._process import ConfigError


if _typing.TYPE_CHECKING:
    from ._dsn import ConnectionConfig


__all__ = [
    "CONFIG_ENV",
    "DEFAULT_CONFIG_PATH",
    "PgPullConfig",
]


_LOGGER = _util.PrefixLoggerAdapter(_logging.getLogger(__name__), prefix="[config]")

CONFIG_ENV = "PGPULL_CONFIG"
DEFAULT_CONFIG_PATH = "config-dev.yml"


@_dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class PgPullConfig:
    """Settings of the local development database and the Heroku CLI."""

    is_production: bool = False

    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = ""
    db_password: str = ""
    db_name: str = ""

    heroku_cli: str = "heroku"
    database_url_env: str = "DATABASE_URL"
    dump_suffix: str = ".sql"

    recreate_commands: tuple[tuple[str, ...], ...] = ()
    terminate_other_clients: bool = False

    def to_connection_config(self) -> ConnectionConfig:
        from ._dsn import ConnectionConfig

        try:
            return ConnectionConfig(
                username=self.db_username,
                password=self.db_password,
                hostname=self.db_host,
                port=str(self.db_port),
                database=self.db_name,
            )
        except ValueError as exc:
            raise ConfigError(f"Incomplete local database config: {exc}") from None

    @classmethod
    def from_dict(cls, config: _typing.Mapping[str, _typing.Any]) -> _typing.Self:
        from ._dsn import parse_dsn_fields

        kwargs: dict[str, _typing.Any] = {}

        if database_url := config.get("database_url"):
            fields = parse_dsn_fields(str(database_url))
            try:
                url_port = int(fields["port"])
            except (TypeError, ValueError):
                raise ConfigError(
                    f"Invalid port in config database_url! Expected int, got {fields['port']!r}"
                ) from None
            kwargs.update(
                db_host=fields["hostname"],
                db_port=url_port,
                db_username=fields["username"],
                db_password=fields["password"],
                db_name=fields["database"],
            )

        for key in ("db_host", "db_username", "db_password", "db_name"):
            if (value := config.get(key)) is not None:
                kwargs[key] = str(value)
        if (db_port := config.get("db_port")) is not None:
            try:
                kwargs["db_port"] = int(db_port)
            except (TypeError, ValueError):
                raise ConfigError(
                    f"Invalid config db_port! Expected int, got {db_port!r}"
                ) from None

        for key in ("heroku_cli", "database_url_env", "dump_suffix"):
            if (value := config.get(key)) is not None:
                kwargs[key] = str(value)

        try:
            for key in ("is_production", "terminate_other_clients"):
                if (value := config.get(key)) is not None:
                    kwargs[key] = _util.to_bool(key, value)
        except ValueError as exc:
            raise ConfigError(str(exc)) from None

        if (recreate_commands := config.get("recreate_commands")) is not None:
            kwargs["recreate_commands"] = _to_commands(recreate_commands)

        for key in ("db_username", "db_name"):
            if not kwargs.get(key):
                raise ConfigError(f"Missing config {key} (or database_url)")

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | _pathlib.Path | None = None) -> _typing.Self:
        import yaml as _yaml

        if path is None:
            _LOGGER.debug("Check if env %s is set", CONFIG_ENV)
            if (path_from_env := _os.environ.get(CONFIG_ENV)) is not None:
                _LOGGER.info("Use env %s=%s", CONFIG_ENV, path_from_env)
                path = path_from_env
            else:
                path = DEFAULT_CONFIG_PATH
        _LOGGER.info("Read config file %s", path)
        path = _pathlib.Path(path)
        with open(path, "r", encoding="utf-8") as f:
            config = _yaml.safe_load(f)

        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(config)


def _to_commands(value: _typing.Any) -> tuple[tuple[str, ...], ...]:
    """Normalize ``recreate_commands`` to a tuple of argv tuples.

    >>> _to_commands(["mix ecto.drop", ["mix", "ecto.create"]])
    (('mix', 'ecto.drop'), ('mix', 'ecto.create'))
    """
    import shlex

    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(
            f"Invalid config recreate_commands! Expected list, got {value!r}"
        )
    commands = []
    for cmd in value:
        if isinstance(cmd, str):
            argv = tuple(shlex.split(cmd))
        elif isinstance(cmd, (list, tuple)):
            argv = tuple(str(a) for a in cmd)
        else:
            raise ConfigError(f"Invalid recreate command {cmd!r}")
        if not argv:
            raise ConfigError("Empty recreate command")
        commands.append(argv)
    return tuple(commands)
