import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from app.core.config import settings

# Correlation id of the request being served; set by CorrelationIdMiddleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "slowapi")
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    """Copies the current request id onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class ConsoleJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.app_name
        log_record["environment"] = settings.environment
        if log_record.get("request_id") == "-":
            log_record.pop("request_id")


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None):
    """
    Configure the root logger once. JSON lines by default; plain text when
    LOG_FORMAT=text (handy for local runs).
    """
    root = logging.getLogger()
    if any(isinstance(h.filters[0], RequestIdFilter) for h in root.handlers if h.filters):
        return

    level = (level or settings.log_level).upper()
    json_output = settings.log_format == "json" if json_output is None else json_output

    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    if json_output:
        handler.setFormatter(ConsoleJsonFormatter("%(name)s %(message)s %(request_id)s"))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
