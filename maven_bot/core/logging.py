"""
Logging system for the Maven bot.
Provides structured JSON logging and helpers for user, AI and error events.
"""

import json
import logging
import sys
import traceback
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Any, Optional

from .config import Settings

# Extra attributes copied verbatim into the JSON entry
_EXTRA_FIELDS = (
    "user_id",
    "username",
    "chat_id",
    "session_id",
    "topic_id",
    "stage",
    "ai_model",
    "response_time",
    "error_code",
    "context",
)


class MavenFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_entry, ensure_ascii=False, separators=(",", ":"), default=str)


def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger and the named maven loggers.

    Console output always goes to stdout. When ``log_to_file`` is enabled the
    JSON formatter writes rotating files under ``log_dir``:
    - maven.log (everything, rotated by size)
    - errors/errors.log (ERROR and above, rotated daily)
    - ai/ai_interactions.log (generation calls, rotated every 6 hours)
    """
    root_logger = logging.getLogger()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(console_handler)

    if not settings.log_to_file:
        return

    log_dir = settings.log_dir
    (log_dir / "errors").mkdir(parents=True, exist_ok=True)
    (log_dir / "ai").mkdir(parents=True, exist_ok=True)

    app_handler = RotatingFileHandler(
        log_dir / "maven.log",
        maxBytes=50 * 1024 * 1024,  # 50MB
        backupCount=10,
        encoding="utf-8",
    )
    app_handler.setLevel(logging.INFO)
    app_handler.setFormatter(MavenFormatter())
    root_logger.addHandler(app_handler)

    error_handler = TimedRotatingFileHandler(
        log_dir / "errors" / "errors.log",
        when="midnight",
        interval=1,
        backupCount=30,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(MavenFormatter())
    root_logger.addHandler(error_handler)

    ai_handler = TimedRotatingFileHandler(
        log_dir / "ai" / "ai_interactions.log",
        when="H",
        interval=6,
        backupCount=120,  # Keep 30 days
        encoding="utf-8",
    )
    ai_handler.setLevel(logging.INFO)
    ai_handler.setFormatter(MavenFormatter())
    logging.getLogger("maven.ai").addHandler(ai_handler)


class LoggerMixin:
    """Mixin to add logging capabilities to any class"""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, "_logger"):
            self._logger = logging.getLogger(f"maven.{self.__class__.__name__}")
        return self._logger

    def log_user_action(self, action: str, user_id: Any, **kwargs):
        """Log user action with structured data"""
        extra = {"user_id": user_id, "context": kwargs}
        user_logger.info(f"User action: {action}", extra=extra)

    def log_ai_interaction(
        self,
        model: str,
        response_time: Optional[float] = None,
        **kwargs,
    ):
        """Log AI interaction with metrics"""
        extra = {
            "ai_model": model,
            "response_time": response_time,
            "context": kwargs,
        }
        ai_logger.info(f"AI interaction: {model}", extra=extra)


@contextmanager
def log_performance(operation_name: str, logger_instance: Optional[logging.Logger] = None):
    """Context manager to log operation duration"""
    start_time = datetime.now()
    logger_instance = logger_instance or bot_logger

    try:
        yield
    except Exception as e:
        duration = (datetime.now() - start_time).total_seconds()
        logger_instance.warning(
            f"Operation failed: {operation_name}",
            extra={
                "response_time": duration,
                "context": {"operation": operation_name, "error_type": type(e).__name__},
            },
        )
        raise

    duration = (datetime.now() - start_time).total_seconds()
    logger_instance.info(
        f"Operation completed: {operation_name}",
        extra={"response_time": duration, "context": {"operation": operation_name}},
    )


bot_logger = logging.getLogger("maven.bot")
user_logger = logging.getLogger("maven.users")
ai_logger = logging.getLogger("maven.ai")


def get_logger(name: str = "maven") -> logging.Logger:
    """Get logger instance by name"""
    return logging.getLogger(name)
