"""
Middleware

Modules:
- state_logger: FSM state transition logging
"""

from .state_logger import StateLoggerMiddleware

__all__ = ["StateLoggerMiddleware"]
