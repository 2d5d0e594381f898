from __future__ import annotations

from ._config import (
    PgPullConfig as PgPullConfig,
)
from ._dsn import (
    ConnectionConfig as ConnectionConfig,
    parse_dsn as parse_dsn,
    parse_dsn_fields as parse_dsn_fields,
)
from ._heroku import (
    fetch_heroku_dsn as fetch_heroku_dsn,
)
from ._pg import (
    pg_dump_to_file as pg_dump_to_file,
    psql_import as psql_import,
    recreate_database as recreate_database,
)
from ._process import (
    ConfigError as ConfigError,
    DsnMismatchError as DsnMismatchError,
    NoOutputError as NoOutputError,
    PgPullError as PgPullError,
    ProcessFailedError as ProcessFailedError,
)
from ._pull import (
    replace_local_db_with_heroku_db as replace_local_db_with_heroku_db,
    temporary_dump_file as temporary_dump_file,
)
from ._util import (
    console_confirm as console_confirm,
)


__all__ = [
    "ConfigError",
    "ConnectionConfig",
    "DsnMismatchError",
    "NoOutputError",
    "PgPullConfig",
    "PgPullError",
    "ProcessFailedError",
    "console_confirm",
    "fetch_heroku_dsn",
    "parse_dsn",
    "parse_dsn_fields",
    "pg_dump_to_file",
    "psql_import",
    "recreate_database",
    "replace_local_db_with_heroku_db",
    "temporary_dump_file",
]
