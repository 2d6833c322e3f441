import os
import sys
from logging.config import dictConfig
from app.core.config import APP_ENV

LOG_LEVEL = os.getenv(
    "LOG_LEVEL", "DEBUG" if APP_ENV == "development" else "INFO"
).upper()

ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(user_id)s | "
    "%(method)s %(path)s | complaint=%(complaint_id)s | "
    "%(status_code)s | %(process_time_ms)sms"
)


def setup_logging():
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                },
                "access": {"format": ACCESS_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "default",
                },
                "access_console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "access",
                },
            },
            "loggers": {
                "access": {
                    "handlers": ["access_console"],
                    "level": "INFO",
                    "propagate": False,
                },
                "complaints": {"level": LOG_LEVEL},
                "auth": {"level": LOG_LEVEL},
                # heartbeat and pool events at DEBUG
                "pymongo": {"level": "WARNING"},
            },
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["console"],
            },
        }
    )
