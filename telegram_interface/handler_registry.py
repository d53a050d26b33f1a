"""
Handler Registry - registers every bot handler

Responsible for:
- handler registration with dependency injection (functools.partial)
- binding handlers to commands, states and callback data
- middleware registration

Order matters: commands first, so "/maven" typed while a form is open starts
over instead of being read as the situation text.
"""

import logging
from functools import partial

from aiogram import Dispatcher, F
from aiogram.filters import Command, CommandStart, StateFilter

from maven_bot.core.error_handling import ErrorCode, handle_errors
from maven_bot.messages.constants import BranchAction

from .config import CALLBACK_SEPARATOR, COACH_COMMAND, GUIDE_COMMANDS, INTAKE_CLOSE_DATA, INTAKE_TOPIC_PREFIX
from .handlers import BranchHandlers, CommandHandlers, IntakeHandlers
from .middleware import StateLoggerMiddleware
from .states import IntakeStates

logger = logging.getLogger(__name__)

UNKNOWN_TEXT = "🤔 I didn't catch that. Type /maven to get coached or /help for commands."


class HandlerRegistry:
    """
    Registers all bot handlers.

    Args:
        dp: Aiogram Dispatcher
        machine: CoachingSessionMachine
        guide_service: GuideService
        registry: TopicRegistry
    """

    def __init__(self, dp: Dispatcher, machine, guide_service, registry):
        self.dp = dp
        self.machine = machine
        self.guide_service = guide_service
        self.registry = registry

    def register_all(self):
        logger.info("🔧 Registering all handlers...")

        self._register_middleware()
        self._register_command_handlers()
        self._register_intake_handlers()
        self._register_branch_handlers()
        self._register_fallback_handlers()

        logger.info("✅ All handlers registered successfully")

    def _register_middleware(self):
        self.dp.message.middleware(StateLoggerMiddleware())
        self.dp.callback_query.middleware(StateLoggerMiddleware())
        logger.info("🔄 Middleware registered: StateLoggerMiddleware")

    def _register_command_handlers(self):
        self.dp.message.register(CommandHandlers.cmd_help, CommandStart())
        self.dp.message.register(CommandHandlers.cmd_help, Command("help"))

        self.dp.message.register(
            partial(IntakeHandlers.cmd_cancel, machine=self.machine),
            Command("cancel"),
        )

        self.dp.message.register(
            partial(CommandHandlers.cmd_maven, machine=self.machine),
            Command(COACH_COMMAND),
        )

        self.dp.message.register(
            partial(CommandHandlers.cmd_guide, guide_service=self.guide_service),
            Command(*GUIDE_COMMANDS),
        )

        logger.info(f"📝 Command handlers registered: /start, /help, /cancel, /{COACH_COMMAND}, /{GUIDE_COMMANDS[0]}")

    def _register_intake_handlers(self):
        topic_prefix = f"{INTAKE_TOPIC_PREFIX}{CALLBACK_SEPARATOR}"

        self.dp.callback_query.register(
            partial(IntakeHandlers.callback_pick_topic, registry=self.registry),
            IntakeStates.choosing_topic,
            F.data.startswith(topic_prefix),
        )

        self.dp.callback_query.register(
            partial(IntakeHandlers.callback_close, machine=self.machine),
            F.data == INTAKE_CLOSE_DATA,
        )

        # Topic buttons of a form that is no longer open
        self.dp.callback_query.register(
            IntakeHandlers.callback_expired,
            F.data.startswith(topic_prefix),
        )

        self.dp.message.register(
            partial(IntakeHandlers.handle_situation, machine=self.machine),
            StateFilter(IntakeStates.describing_situation),
            F.text,
        )

        logger.info("🧠 Intake handlers registered")

    def _register_branch_handlers(self):
        prefixes = tuple(f"{action.value}{CALLBACK_SEPARATOR}" for action in BranchAction)

        self.dp.callback_query.register(
            partial(BranchHandlers.callback_branch, machine=self.machine),
            F.data.startswith(prefixes),
        )

        logger.info("🔘 Branch handler registered")

    def _register_fallback_handlers(self):
        @handle_errors(ErrorCode.HOST_DELIVERY_ERROR)
        async def handle_unknown(message):
            """Handle unknown messages"""
            await message.answer(UNKNOWN_TEXT)

        self.dp.message.register(handle_unknown, F.text)
        logger.info("❓ Fallback handler registered")
