"""
Telegram Host - chat platform capabilities for the coaching flow

Implements the FormHost / MessageHost / UserDirectory interfaces from
maven_bot.session.host on top of aiogram.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from maven_bot.core.error_handling import ErrorCode, HostDeliveryFailure
from maven_bot.messages.constants import DEFAULT_DISPLAY_NAME
from maven_bot.messages.segments import FormDescription, MessageSegment
from maven_bot.session.host import CoachingHost

from .states import IntakeStates
from .utilities import render_intake, render_segments, send_long_message

logger = logging.getLogger(__name__)


@dataclass
class FormTrigger:
    """The command message that opened the form, plus its FSM context."""

    message: Message
    state: FSMContext


class TelegramHost(CoachingHost):
    """Telegram implementation of the coaching host interfaces."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def show_form(self, trigger: FormTrigger, form: FormDescription) -> None:
        rendered = render_intake(form)
        try:
            await trigger.message.answer(rendered.text, reply_markup=rendered.keyboard, parse_mode="HTML")
        except TelegramAPIError as e:
            raise HostDeliveryFailure(
                f"Telegram rejected the intake form: {e}",
                ErrorCode.HOST_FORM_ERROR,
                context={"callback_id": form.callback_id},
            ) from e

        await trigger.state.set_state(IntakeStates.choosing_topic)
        await trigger.state.set_data({"form": form.callback_id})

    async def post_message(
        self,
        recipient_ref: Any,
        segments: Sequence[MessageSegment],
        fallback_text: Optional[str] = None,
    ) -> None:
        rendered = render_segments(segments)
        text = rendered.text or fallback_text
        if not text:
            raise HostDeliveryFailure("Nothing to post", context={"recipient": recipient_ref})

        try:
            await send_long_message(self.bot, recipient_ref, text, reply_markup=rendered.keyboard)
        except TelegramAPIError as e:
            raise HostDeliveryFailure(
                f"Telegram rejected the message: {e}",
                context={"recipient": recipient_ref, "fallback_text": fallback_text},
            ) from e

    async def get_display_name(self, user_ref: Any) -> str:
        try:
            chat = await self.bot.get_chat(user_ref)
        except TelegramAPIError as e:
            logger.warning(f"Could not look up user {user_ref}: {e}")
            return DEFAULT_DISPLAY_NAME
        return chat.full_name or chat.first_name or DEFAULT_DISPLAY_NAME

    async def retire_controls(self, control_ref: Any) -> bool:
        """``control_ref`` is the message carrying the branch keyboard."""
        if not isinstance(control_ref, Message):
            # None, or a message too old for the bot to see
            return False
        if control_ref.reply_markup is None:
            return False
        try:
            await control_ref.edit_reply_markup(reply_markup=None)
        except TelegramBadRequest as e:
            # "message is not modified": a concurrent click got there first
            logger.info(f"Controls on message {control_ref.message_id} already retired: {e}")
            return False
        except TelegramAPIError as e:
            logger.warning(f"Could not retire controls on message {control_ref.message_id}: {e}")
            return False
        return True
