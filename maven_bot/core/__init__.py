from .config import Settings, get_settings
from .error_handling import (
    ErrorCode,
    ErrorTracker,
    GenerationFailure,
    HostDeliveryFailure,
    InvalidInput,
    MalformedTopic,
    MavenException,
    SessionStateError,
    TopicNotFound,
    error_tracker,
    handle_errors,
)
from .logging import LoggerMixin, get_logger, log_performance, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "ErrorCode",
    "ErrorTracker",
    "GenerationFailure",
    "HostDeliveryFailure",
    "InvalidInput",
    "MalformedTopic",
    "MavenException",
    "SessionStateError",
    "TopicNotFound",
    "error_tracker",
    "handle_errors",
    "LoggerMixin",
    "get_logger",
    "log_performance",
    "setup_logging",
]
