import logging
import logging.config
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def setup_logging(level=None):
    level = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    logging.config.dictConfig(build_logging_config(level))
