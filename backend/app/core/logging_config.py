"""
ScaffoldAI - Logging Configuration

One named logger ("scaffoldai") shared by the HTTP layer, the agents and the
CLI. Development gets readable single-line output, production gets one JSON
object per record so the output can be shipped to a log aggregator as is.

The virtual file tree never logs; its callers do.
"""

import logging
import sys
import json
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from app.core.config import settings


# Request correlation id, set by RequestLoggingMiddleware for each request
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

# LogRecord attributes that are not user-supplied `extra` fields
_STANDARD_ATTRS = set(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'request_id'}

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "uvicorn.access")


def get_request_id() -> str:
    return request_id_var.get() or ''


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def generate_request_id() -> str:
    """Short random id for correlating the log lines of one request"""
    return uuid.uuid4().hex[:8]


def _exception_payload(exc_info) -> Optional[Dict[str, Any]]:
    exc_type, exc_value, _ = exc_info
    if exc_type is None:
        return None
    return {
        "type": exc_type.__name__,
        "message": str(exc_value),
        "traceback": traceback.format_exception(*exc_info),
    }


class JSONFormatter(logging.Formatter):
    """One JSON document per record, with request id and `extra` fields"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id

        if record.exc_info:
            payload["exception"] = _exception_payload(record.exc_info)

        payload.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith('_')
        )
        return json.dumps(payload, default=str)


class ContextualFormatter(logging.Formatter):
    """Plain-text formatter exposing %(request_id)s"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        return super().format(record)


class ScaffoldLogger(logging.Logger):
    """Logger with typed events for requests, agents, errors and timings"""

    def _event(self, level: int, message: str, event_type: str, exc_info: bool = False, **fields) -> None:
        # stacklevel=3 attributes the record to the caller of log_*()
        self.log(level, message, exc_info=exc_info, extra={"event_type": event_type, **fields}, stacklevel=3)

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float, **kwargs) -> None:
        """Completed HTTP request; 4xx logs a warning and 5xx an error"""
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        self._event(
            level,
            f"← {method} {path} - {status_code} ({duration_ms:.2f}ms)",
            "http_request",
            http_method=method,
            http_path=path,
            http_status=status_code,
            duration_ms=duration_ms,
            **kwargs
        )

    def log_agent_event(self, agent_name: str, event: str, tokens_used: int = 0, **kwargs) -> None:
        suffix = f" (tokens: {tokens_used})" if tokens_used else ""
        self._event(
            logging.INFO,
            f"Agent {agent_name}: {event}{suffix}",
            "agent",
            agent_name=agent_name,
            agent_event=event,
            tokens_used=tokens_used,
            **kwargs
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None, **kwargs) -> None:
        """Error with traceback and the operation it happened in"""
        self._event(
            logging.ERROR,
            f"Error in {context}: {type(error).__name__}: {error}",
            "error",
            exc_info=True,
            error_type=type(error).__name__,
            error_message=str(error),
            error_context=context,
            **kwargs
        )

    def log_performance(self, operation: str, duration_ms: float, threshold_ms: float = 1000, **kwargs) -> None:
        """Timing of an operation; a warning once it exceeds threshold_ms"""
        slow = duration_ms > threshold_ms
        message = f"Performance: {operation} took {duration_ms:.2f}ms"
        if slow:
            message += f" (threshold: {threshold_ms}ms)"
        self._event(
            logging.WARNING if slow else logging.DEBUG,
            message,
            "performance",
            operation=operation,
            duration_ms=duration_ms,
            threshold_ms=threshold_ms,
            exceeded_threshold=slow,
            **kwargs
        )


def _formatters(json_logs: bool):
    if json_logs:
        formatter = JSONFormatter()
        return formatter, formatter
    console = ContextualFormatter("%(levelname)-8s | %(message)s")
    detailed = ContextualFormatter(
        "%(asctime)s | %(levelname)-8s | [%(request_id)s] | %(funcName)s:%(lineno)d | %(message)s"
    )
    return console, detailed


def setup_logging() -> ScaffoldLogger:
    """Configure the "scaffoldai" logger for the current ENVIRONMENT"""
    logging.setLoggerClass(ScaffoldLogger)
    logger = logging.getLogger("scaffoldai")
    logger.__class__ = ScaffoldLogger  # already created before setLoggerClass
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    json_logs = settings.ENVIRONMENT == "production"
    console_formatter, file_formatter = _formatters(json_logs)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=10 if json_logs else 5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(
        "Logging initialized",
        extra={"environment": settings.ENVIRONMENT, "log_level": settings.LOG_LEVEL, "json_logging": json_logs}
    )
    return logger


logger: ScaffoldLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'get_request_id',
    'set_request_id',
    'generate_request_id',
    'ScaffoldLogger',
    'JSONFormatter',
    'ContextualFormatter',
]
