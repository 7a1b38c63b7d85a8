"""Process-wide logging setup.

``local`` logs readable text at DEBUG. ``dev`` and ``prod`` log one JSON
object per line, at DEBUG and INFO respectively:

    {"timestamp": "2026-01-05T12:00:00.000Z", "level": "INFO",
     "logger": "urlshortener.main", "message": "url added", "request_id": "..."}
"""

import json
import logging
import logging.config
from datetime import datetime, timezone

# attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log = {
            "timestamp": timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log[key] = value
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log, default=str)


def setup_logging(environment: str = "local") -> None:
    formatter = "text" if environment == "local" else "json"
    level = "INFO" if environment == "prod" else "DEBUG"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {"format": "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"},
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {"level": level, "handlers": ["stdout"]},
            # the database driver is too chatty at DEBUG
            "loggers": {"sqlalchemy": {"level": "WARNING"}},
        }
    )
