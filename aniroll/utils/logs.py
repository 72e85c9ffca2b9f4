"""A module that sets up the log files."""

import logging
import os
import typing
from logging.handlers import RotatingFileHandler

__all__: typing.Final[typing.List[str]] = ["setup_file_logging"]

LOG_FORMAT: typing.Final[
    str
] = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_file_logging(
    log_dir: str,
    level: typing.Union[int, str] = logging.INFO,
    *,
    max_bytes: int = 10 * 1_024**2,
    backup_count: int = 3,
) -> typing.Optional[RotatingFileHandler]:
    """
    Attaches a rotating file handler to the root logger.

    Console output is left to hikari, which sets it up from the `logs` argument.
    Returns None if `log_dir` is empty.
    """
    if not log_dir:
        return None

    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, "aniroll.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler
