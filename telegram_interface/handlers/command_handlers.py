"""
Command Handlers - bot commands

Handlers for:
- /start, /help - short introduction
- /maven - open the intake form (starts a coaching session)
- /maven_guide [topic] - standalone 1-pager
"""

import logging

from aiogram.filters import CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from maven_bot.core.error_handling import ErrorCode, handle_errors

from ..host import FormTrigger

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "<b>Maven ⚡</b>\n\n"
    "Your on-the-go leadership coaching toolkit.\n\n"
    "/maven — pick a topic, describe your situation, get coached\n"
    "/maven_guide [topic] — a one-page guide on a topic\n"
    "/cancel — close an open form"
)


class CommandHandlers:
    """
    Bot command handlers

    All methods are static; dependencies arrive as keyword arguments.
    """

    @staticmethod
    @handle_errors(ErrorCode.HOST_DELIVERY_ERROR)
    async def cmd_help(message: Message):
        """/start and /help"""
        await message.answer(HELP_TEXT, parse_mode="HTML")

    @staticmethod
    @handle_errors(ErrorCode.HOST_FORM_ERROR)
    async def cmd_maven(message: Message, state: FSMContext, machine):
        """
        /maven - open the intake form

        Any half-filled form from an earlier invocation is dropped.
        """
        user_id = message.from_user.id
        logger.info(f"👤 Coaching requested by user {user_id}")

        await state.clear()
        await machine.start(user_id, message.chat.id, FormTrigger(message=message, state=state))

    @staticmethod
    @handle_errors(ErrorCode.UNKNOWN_ERROR)
    async def cmd_guide(message: Message, command: CommandObject, guide_service):
        """/maven_guide [topic] - listing, guide or not-found notice"""
        user_id = message.from_user.id
        logger.info(f"📄 Guide requested by user {user_id}: {command.args!r}")

        await guide_service.handle(user_id, message.chat.id, command.args)
