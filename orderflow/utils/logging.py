# orderflow/utils/logging.py
import logging
import sys

from orderflow.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root = logging.getLogger("orderflow")


def _configure():
    if _root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    _root.addHandler(handler)
    _root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # SQL echo is noise in service logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    _configure()
    return logging.getLogger(name)
