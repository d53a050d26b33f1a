"""
Handlers - Telegram command, message and callback handlers

Modules:
- command_handlers: /start, /help, /maven, /maven_guide
- intake_handlers: two-step intake form
- branch_handlers: dig deeper / done buttons
"""

from .branch_handlers import BranchHandlers
from .command_handlers import CommandHandlers
from .intake_handlers import IntakeHandlers

__all__ = [
    "BranchHandlers",
    "CommandHandlers",
    "IntakeHandlers",
]
