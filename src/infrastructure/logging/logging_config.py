"""
Logging configuration for the MyFood bot

Console output for development, rotating JSON files for the main and
error logs, and structlog routed through the standard library.
"""

import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from src.config import get_config
from src.infrastructure.utilities.constants import FileSettings, LoggingSettings


class ProductionLogger:
    """Production-ready logging configuration"""

    @staticmethod
    def setup_logging(log_dir: Optional[Path] = None) -> None:
        """
        Setup logging for the whole process

        Features:
        - Console output outside production
        - Structured JSON main log and error-only log
        - structlog bound loggers rendered through stdlib handlers
        """
        config = get_config()

        logs_dir = Path(log_dir or FileSettings.LOGS_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

        # Clear existing handlers
        root_logger.handlers.clear()

        if config.environment != "production":
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / FileSettings.MAIN_LOG_FILE,
            maxBytes=LoggingSettings.MAX_LOG_FILE_SIZE,
            backupCount=LoggingSettings.MAIN_LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        app_handler.setFormatter(JsonLogFormatter())
        app_handler.setLevel(logging.INFO)
        root_logger.addHandler(app_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / FileSettings.ERROR_LOG_FILE,
            maxBytes=LoggingSettings.MAX_LOG_FILE_SIZE,
            backupCount=LoggingSettings.ERROR_LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        error_handler.setFormatter(JsonLogFormatter())
        error_handler.setLevel(logging.ERROR)
        root_logger.addHandler(error_handler)

        ProductionLogger._configure_structlog()
        ProductionLogger._configure_specific_loggers()

        logging.getLogger(__name__).info(
            "Logging configured",
            extra={"environment": config.environment, "log_level": config.log_level},
        )

    @staticmethod
    def _configure_structlog() -> None:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def _configure_specific_loggers() -> None:
        """Quiet chatty third-party loggers"""
        for name in ("telegram", "httpx", "httpcore", "uvicorn.access"):
            logging.getLogger(name).setLevel(logging.WARNING)


class JsonLogFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with process and user context"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "user_id"):
            log_record["user_id"] = record.user_id

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time


class PerformanceLogger:
    """Context manager timing one operation"""

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None, details: Optional[Dict[str, Any]] = None):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.monotonic() - self.start_time) * 1000
        extra = {
            "operation": self.operation_name,
            "operation_time": self.duration_ms,
            "success": exc_type is None,
            **self.details,
        }
        if exc_type is None:
            self.logger.debug("Completed %s in %.1f ms", self.operation_name, self.duration_ms, extra=extra)
        else:
            self.logger.warning("Failed %s after %.1f ms", self.operation_name, self.duration_ms, extra=extra)
        return False


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
