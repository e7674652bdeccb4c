import contextvars
import json
import logging
import sys
import traceback
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from ..core.errors import DomainError
from .config_types import Settings

# Context variables carried into every JSON log record
correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)
operation_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "operation", default=None
)

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

SENSITIVE_PATTERNS = {
    "password",
    "secret",
    "token",
    "api_key",
    "authorization",
    "credentials",
}


def set_correlation_id(cid: Optional[str] = None) -> str:
    """
    Sets a correlation ID for the current context.
    If no ID is provided, a new UUID is generated.
    """
    if cid is None:
        cid = f"cid_{uuid.uuid4()}"
    correlation_id_var.set(cid)
    return cid


def set_logging_context(
    correlation_id: Optional[str] = None,
    operation: Optional[str] = None,
) -> Dict[str, str]:
    """Sets the context variables that are given and returns them."""
    context = {}

    if correlation_id is not None:
        correlation_id_var.set(correlation_id)
        context["correlation_id"] = correlation_id

    if operation is not None:
        operation_var.set(operation)
        context["operation"] = operation

    return context


def get_logging_context() -> Dict[str, Optional[str]]:
    return {
        "correlation_id": correlation_id_var.get(),
        "operation": operation_var.get(),
    }


def clear_logging_context() -> None:
    correlation_id_var.set(None)
    operation_var.set(None)


def mask_sensitive_data(data: Any, additional_patterns: Optional[set] = None) -> Any:
    """
    Recursively mask sensitive information in data structures.

    Args:
        data: Data to sanitize
        additional_patterns: Additional sensitive field patterns

    Returns:
        Sanitized data with sensitive fields masked
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns.union(additional_patterns)

    def _mask_recursive(obj: Any) -> Any:
        if isinstance(obj, dict):
            return {
                k: "***MASKED***"
                if any(pattern in str(k).lower() for pattern in patterns)
                else _mask_recursive(v)
                for k, v in obj.items()
            }
        elif isinstance(obj, list):
            return [_mask_recursive(item) for item in obj]
        elif isinstance(obj, tuple):
            return tuple(_mask_recursive(item) for item in obj)
        return obj

    return _mask_recursive(data)


class JsonFormatter(logging.Formatter):
    """
    JSON formatter with context variables and sensitive data masking.

    Domain errors attached via exc_info are rendered through
    DomainError.to_dict() so the error kind and its context survive as
    structured fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "correlation_id": correlation_id_var.get(),
            "operation": operation_var.get(),
        }

        if record.exc_info:
            error = record.exc_info[1]
            if isinstance(error, DomainError):
                log_record["domain_error"] = error.to_dict()
            else:
                log_record["exception"] = "".join(
                    traceback.format_exception(*record.exc_info)
                )

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_record.update(extra_data)

        return json.dumps(mask_sensitive_data(log_record), default=str)


def configure_logging(
    settings: Settings,
    log_file: Optional[str] = None,
    structured: Optional[bool] = None,
    log_level_override: Optional[str] = None,
    module_levels: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configure root logging for a host application.

    Args:
        settings: Application settings.
        log_file: Optional path to a log file; defaults to settings.log_file.
        structured: If True, logs are JSON; defaults to settings.structured_logging.
        log_level_override: Optional log level string to override settings.
        module_levels: Module name -> level, merged over settings.module_levels.
    """
    level_name = (log_level_override or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    if structured is None:
        structured = settings.structured_logging
    if log_file is None and settings.log_file is not None:
        log_file = str(settings.log_file)

    if structured:
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.dev.set_exc_info,
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )
        console_formatter: logging.Formatter = JsonFormatter()
        file_formatter: logging.Formatter = JsonFormatter()
    else:
        console_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"
        )
        # File formatter includes filename and line number for debugging
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - [%(levelname)s] - %(filename)s:%(lineno)d - %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    levels = {**settings.module_levels, **(module_levels or {})}
    for module_name, module_level in levels.items():
        logging.getLogger(module_name).setLevel(
            getattr(logging, module_level.upper(), logging.INFO)
        )

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "extra_data": {
                "level": logging.getLevelName(log_level),
                "structured": structured,
                "file_logging": log_file is not None,
                "module_levels": levels,
            }
        },
    )
