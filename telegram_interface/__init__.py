"""
Telegram Interface - Maven on Telegram

Architecture:
- controller: composition root
- lifecycle: polling, instance lock, graceful shutdown
- host: FormHost / MessageHost / UserDirectory over aiogram
- handlers: commands, intake form, branch buttons
- middleware: FSM logging
- utilities: segment rendering, long message splitting
- handler_registry: handler registration with DI
- states: FSM states of the intake form
- config: adapter constants
"""

from .controller import MavenController
from .lifecycle import BotInstanceLock, BotLifecycle
from .handler_registry import HandlerRegistry
from .host import FormTrigger, TelegramHost
from .states import IntakeStates
from .handlers import BranchHandlers, CommandHandlers, IntakeHandlers
from .middleware import StateLoggerMiddleware
from .utilities import render_segments, send_long_message

__all__ = [
    # Main controller
    "MavenController",

    # Lifecycle
    "BotInstanceLock",
    "BotLifecycle",

    # Registry
    "HandlerRegistry",

    # Host
    "FormTrigger",
    "TelegramHost",

    # States
    "IntakeStates",

    # Handlers
    "BranchHandlers",
    "CommandHandlers",
    "IntakeHandlers",

    # Middleware
    "StateLoggerMiddleware",

    # Utilities
    "render_segments",
    "send_long_message",
]
