"""
Application-wide logging initialization.

Call `initialize_logging()` once at startup, before the app starts serving.
Modules log through `logging.getLogger(__name__)`.
"""

import logging
import logging.config


def initialize_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stdout handler."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                }
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": level.upper(),
                "handlers": ["stdout"],
            },
        }
    )
