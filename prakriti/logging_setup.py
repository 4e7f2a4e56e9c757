"""Central logging configuration for the survey service.

Applies a root stdout handler so all module loggers emit without per-module
setup. SQLAlchemy's engine logger is held at WARNING so statement echo never
puts respondent data in the logs.
"""
from __future__ import annotations
import copy
import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "prakriti": {"level": "INFO"},
        "sqlalchemy.engine": {"level": "WARNING"},
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging once.

    If the root logger already has handlers, only the levels are adjusted to
    prevent duplicate output under reloaders and test runners.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        logging.getLogger("prakriti").setLevel(level)
        return
    config = copy.deepcopy(_DICT_CONFIG)
    config["handlers"]["console"]["level"] = level
    config["root"]["level"] = level
    config["loggers"]["prakriti"]["level"] = level
    dictConfig(config)
