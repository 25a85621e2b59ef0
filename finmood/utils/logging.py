"""Logging setup shared by the analytics core and the persistence layer."""
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Context keys callers attach with ``extra=``; emitted when present
CONTEXT_FIELDS = (
    "correlation_id",
    "user_id",
    "transaction_id",
    "mood",
    "function",
    "execution_time_ms",
)

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "json",
    enabled: bool = True,
    sql_echo: bool = False
) -> None:
    """
    Configure the root logger for finmood.

    Args:
        level: Level name for the root logger
        log_file: Optional file that receives a copy of every record
        format_type: "json" for one JSON object per line, anything else for text
        enabled: When False all logging is switched off
        sql_echo: Let SQLAlchemy engine logs through at INFO
    """
    if not enabled:
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    formatter = JsonFormatter() if format_type == "json" else ContextTextFormatter(TEXT_FORMAT)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=_build_handlers(formatter, log_file),
        force=True
    )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)


def _build_handlers(formatter: logging.Formatter, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _context(record: logging.LogRecord) -> dict:
    return {key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with mood/user context inlined."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_context(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text with any context fields appended as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


class CorrelationFilter(logging.Filter):
    """Stamp a fixed correlation id on records that lack one."""

    def __init__(self, correlation_id: str):
        super().__init__()
        self.correlation_id = correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = self.correlation_id
        return True


def get_logger(name: str, correlation_id: Optional[str] = None) -> logging.Logger:
    """Get a named logger, optionally tagging its records with ``correlation_id``."""
    logger = logging.getLogger(name)

    if correlation_id:
        for existing in list(logger.filters):
            if isinstance(existing, CorrelationFilter):
                logger.removeFilter(existing)
        logger.addFilter(CorrelationFilter(correlation_id))

    return logger
