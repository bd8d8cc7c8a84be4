import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone

LOG_LEVEL_ENV: str = "DISTRIBUTION_LOG_LEVEL"
QUIET_LOGGERS: tuple[str, ...] = ("asyncio", "aiohttp")


class JSONFormatter(logging.Formatter):
    """
    Render each record as a single JSON line. A dict passed as the only
    logging argument is merged into the `fields` object.
    """

    def formatTime(self, record: logging.LogRecord, datefmt=None) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{created.microsecond // 1000:03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        fields = {"message": record.getMessage()}
        if isinstance(record.args, dict):
            fields.update(record.args)

        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "log_file": record.filename,
            "log_line": record.lineno,
            "fields": fields,
        }

        if record.exc_info:
            entry["full_message"] = traceback.format_exception(*record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging():
    level = os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper()

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JSONFormatter())
    logging.basicConfig(level=level, handlers=[handler])

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
