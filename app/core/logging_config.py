"""
Root logging setup for the API and the seeding script.

Production emits one JSON object per line; development uses plain text.
"""

import logging
import sys
from typing import Any, Dict
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

from app.core.config import settings

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers and the minimum level they may emit at
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


class JobTrackerJsonFormatter(jsonlogger.JsonFormatter):
    """
    Adds service name, UTC timestamp and call site to every record.
    Warnings and errors also carry the source line.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = settings.PROJECT_NAME
        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['function'] = record.funcName

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.pathname}:{record.lineno}"


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Replace the root logger's handlers with a single stdout handler.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON lines when True, PLAIN_FORMAT otherwise
    """
    if json_logs:
        formatter = JobTrackerJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    for name, level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
