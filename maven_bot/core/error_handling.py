"""
Error handling and tracking for the Maven bot.

Every failure is caught at the event-handler boundary by ``handle_errors``,
recorded by the ``ErrorTracker`` and, where appropriate, turned into a short
user-facing message. Provider payloads and tracebacks stay in the logs.
"""

import asyncio
import functools
import inspect
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .logging import LoggerMixin, get_logger

GENERIC_ERROR_MESSAGE = "Something went wrong with Maven. Please try `/maven` again in a moment."


class ErrorCode(Enum):
    """Standardized error codes for tracking and debugging"""

    # User interaction errors
    TOPIC_NOT_FOUND = "USER_001"
    USER_INPUT_INVALID = "USER_002"

    # AI service errors
    AI_API_ERROR = "AI_001"
    AI_TIMEOUT_ERROR = "AI_002"
    AI_EMPTY_RESPONSE = "AI_003"
    AI_CONFIGURATION_ERROR = "AI_004"

    # Content errors
    TOPIC_MALFORMED = "DATA_001"

    # Host platform errors
    HOST_DELIVERY_ERROR = "HOST_001"
    HOST_FORM_ERROR = "HOST_002"

    # System errors
    SESSION_STATE_ERROR = "SYS_001"
    UNKNOWN_ERROR = "SYS_999"


class MavenException(Exception):
    """Base exception class for the Maven bot"""

    default_code = ErrorCode.UNKNOWN_ERROR
    # Text shown to the user when the error reaches a handler; None means silent
    user_message: Optional[str] = GENERIC_ERROR_MESSAGE

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        user_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.user_id = user_id
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging"""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "user_id": self.user_id,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "type": self.__class__.__name__,
        }


class TopicNotFound(MavenException):
    """Unknown topic id or slug. User-correctable."""

    default_code = ErrorCode.TOPIC_NOT_FOUND
    user_message = None


class InvalidInput(MavenException):
    """Missing or empty required input. Aborted silently at the handler boundary."""

    default_code = ErrorCode.USER_INPUT_INVALID
    user_message = None


class GenerationFailure(MavenException):
    """Text generation failed, timed out or returned nothing usable."""

    default_code = ErrorCode.AI_API_ERROR


class MalformedTopic(MavenException):
    """Topic content is missing a field the formatter needs."""

    default_code = ErrorCode.TOPIC_MALFORMED


class HostDeliveryFailure(MavenException):
    """The chat platform refused to render a form or post a message."""

    default_code = ErrorCode.HOST_DELIVERY_ERROR
    # Nothing can be delivered when delivery itself is broken
    user_message = None


class SessionStateError(MavenException):
    """A session was asked to make a transition its stage does not allow."""

    default_code = ErrorCode.SESSION_STATE_ERROR
    user_message = None


class ErrorTracker(LoggerMixin):
    """
    Central error tracking.
    Logs errors with context and keeps per-code counts for monitoring.
    """

    def __init__(self, history_size: int = 1000):
        self.error_counts: Dict[str, int] = {}
        self.error_history = []
        self.history_size = history_size
        self.error_logger = get_logger("maven.errors")

    def track_error(
        self,
        error: Exception,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        user_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
        severity: str = "ERROR",
    ) -> Dict[str, Any]:
        """Track error with full context and metrics"""
        error_data = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "error_code": error_code.value,
            "user_id": user_id,
            "context": context or {},
            "traceback": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": severity,
        }

        extra = {"error_code": error_code.value, "user_id": user_id, "context": context or {}}

        if severity == "CRITICAL":
            self.error_logger.critical(f"Critical error: {error}", extra=extra, exc_info=error)
        elif severity == "ERROR":
            self.error_logger.error(f"Error: {error}", extra=extra, exc_info=error)
        elif severity == "WARNING":
            self.error_logger.warning(f"Warning: {error}", extra=extra)
        else:
            self.error_logger.info(f"Handled: {error}", extra=extra)

        self.error_counts[error_code.value] = self.error_counts.get(error_code.value, 0) + 1
        self.error_history.append(error_data)

        if len(self.error_history) > self.history_size:
            self.error_history = self.error_history[-self.history_size:]

        return error_data

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics for monitoring"""
        return {
            "total_errors": sum(self.error_counts.values()),
            "error_counts_by_code": self.error_counts.copy(),
        }


# Global error tracker instance
error_tracker = ErrorTracker()

# User-correctable and silent-abort errors are expected traffic, not faults
_SEVERITY_BY_TYPE = {
    TopicNotFound: "WARNING",
    InvalidInput: "WARNING",
    SessionStateError: "WARNING",
}


def handle_errors(
    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
    user_message: str = GENERIC_ERROR_MESSAGE,
):
    """
    Decorator for bot handlers.

    Known ``MavenException`` subclasses are tracked and answered with their own
    ``user_message`` (or nothing when it is None). Anything else is tracked under
    ``error_code`` and answered with ``user_message``. Nothing propagates to
    the dispatcher.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except MavenException as e:
                user_id = e.user_id or extract_user_id_from_args(args)
                severity = _SEVERITY_BY_TYPE.get(type(e), "ERROR")
                error_tracker.track_error(e, e.error_code, user_id, e.context, severity)
                if e.user_message:
                    await handle_user_error(args, e.user_message, user_id)
                return None
            except Exception as e:
                user_id = extract_user_id_from_args(args)
                context = {"function": func.__name__}
                error_tracker.track_error(e, error_code, user_id, context)
                await handle_user_error(args, user_message, user_id)
                return None

        if not asyncio.iscoroutinefunction(func):
            raise TypeError("handle_errors only wraps coroutine handlers")
        # aiogram reads handler params without following __wrapped__
        async_wrapper.__signature__ = inspect.signature(func)
        return async_wrapper

    return decorator


def extract_user_id_from_args(args) -> Optional[Any]:
    """Extract user ID from handler arguments"""
    for arg in args:
        from_user = getattr(arg, "from_user", None)
        if from_user is not None and getattr(from_user, "id", None) is not None:
            return from_user.id
    return None


async def handle_user_error(args, message: str, user_id: Optional[Any] = None):
    """Send error message to user if possible"""
    try:
        for arg in args:
            # CallbackQuery: reply in the chat the button lives in
            callback_message = getattr(arg, "message", None)
            if callback_message is not None and hasattr(arg, "data"):
                await callback_message.answer(message)
                return
            if hasattr(arg, "answer") and hasattr(arg, "text"):
                await arg.answer(message)
                return
    except Exception as e:
        logger = get_logger("maven.errors")
        logger.warning(f"Failed to send error message to user {user_id}: {e}")
