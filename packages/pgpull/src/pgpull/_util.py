from __future__ import annotations

import logging as _logging
import typing as _typing


if _typing.TYPE_CHECKING:
    import pathlib as _pathlib


__all__ = [
    "PrefixLoggerAdapter",
    "configure_console_logging",
    "configure_file_logging",
    "console_confirm",
    "to_bool",
    "to_log_level",
]


_LOG_FORMAT = "%(asctime)s %(levelname)-1s %(message)s"


class PrefixLoggerAdapter(_logging.LoggerAdapter):
    def __init__(
        self,
        logger: _logging.Logger | _logging.LoggerAdapter,
        *,
        prefix: str,
    ) -> None:
        self._prefix = prefix
        super().__init__(logger)

    def process(self, msg, kwargs):
        return (f"{self._prefix} {msg}", kwargs)


def console_confirm(question: str) -> bool:
    """Ask *question* on the console; only a ``y`` answer confirms.

    ..
       >>> import io
       >>> monkeypatch = getfixture("monkeypatch")
       >>> monkeypatch.setattr("sys.stdin", io.StringIO(" Y \\n"))

    >>> console_confirm("Continue?")
    Continue? [YyNn] True
    """
    try:
        raw_user_input = input(f"{question} [YyNn] ")
    except EOFError:
        return False
    return raw_user_input.strip().lower() == "y"


def to_bool(name: str, value: bool | str) -> bool:
    """Convert a config value to bool.

    >>> to_bool("x", "Yes"), to_bool("x", "0"), to_bool("x", True)
    (True, False, True)
    """
    if isinstance(value, bool):
        return value
    s_low = str(value).lower()
    if s_low in {"true", "t", "1", "yes"}:
        return True
    elif s_low in {"false", "f", "0", "no"}:
        return False
    else:
        raise ValueError(f"Invalid config {name}! Expected bool, got {value!r}")


def to_log_level(level: int | str | None, default: int | None = None) -> int:
    import logging

    if default is None:
        default = logging.DEBUG
    if level is None:
        return default
    elif isinstance(level, str):
        try:
            return logging.getLevelNamesMapping()[level.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level {level!r}") from None
    else:
        return level


def configure_console_logging(
    level: int | str | None = None,
    *,
    logger: _logging.Logger | str | None = None,
) -> _logging.Handler:
    """Log to stderr at *level*.

    The handler carries its own level, so a more verbose log file added
    later via :func:`configure_file_logging` does not leak into the console.
    """
    import logging

    if logger is None:
        logger = logging.getLogger()
    elif isinstance(logger, str):
        logger = logging.getLogger(logger)
    level = to_log_level(level, default=logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def configure_file_logging(
    filename: str | _pathlib.Path,
    *,
    level: int | str | None,
    logger: _logging.Logger | str | None = None,
) -> _logging.Handler:
    import logging

    if logger is None:
        logger = logging.getLogger()
    elif isinstance(logger, str):
        logger = logging.getLogger(logger)
    level = to_log_level(level, default=logging.NOTSET)

    formatter = logging.Formatter(_LOG_FORMAT)
    handler = logging.FileHandler(filename, encoding="utf-8")
    handler.setFormatter(formatter)
    handler.setLevel(level)
    logger.addHandler(handler)
    if level != logging.NOTSET and logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler
