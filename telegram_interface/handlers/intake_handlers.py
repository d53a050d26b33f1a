"""
Intake Handlers - the two-step intake form

Callbacks and messages:
- topic picked from the inline keyboard
- situation text reply (submits the form)
- "Not now" button and /cancel (close the form)
- buttons of a form that is no longer open
"""

import html
import logging

from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from maven_bot.core.error_handling import ErrorCode, handle_errors
from maven_bot.messages.constants import QUESTION_BLOCK_ID
from maven_bot.messages.formatters import format_intake

from ..states import IntakeStates
from ..utilities import decode_callback, render_text_prompt

logger = logging.getLogger(__name__)

FORM_EXPIRED_TEXT = "This form has expired. Type /maven to start again."
FORM_CLOSED_TEXT = "No problem. Type /maven whenever you need a thought partner."


def _chat_id(callback: CallbackQuery):
    return callback.message.chat.id if callback.message else callback.from_user.id


class IntakeHandlers:
    """Intake form handlers"""

    @staticmethod
    @handle_errors(ErrorCode.HOST_FORM_ERROR)
    async def callback_pick_topic(callback: CallbackQuery, state: FSMContext, registry):
        """Topic picked: remember it and ask for the situation."""
        await callback.answer()

        _, topic_id = decode_callback(callback.data)
        topic = registry.get(topic_id)

        await state.update_data(topic_id=topic.id)
        await state.set_state(IntakeStates.describing_situation)

        prompt = render_text_prompt(format_intake(registry).input(QUESTION_BLOCK_ID))
        await callback.message.edit_text(
            f"📌 <b>{html.escape(topic.label, quote=False)}</b>\n\n{prompt}",
            parse_mode="HTML",
        )
        logger.info(f"📌 User {callback.from_user.id} picked topic {topic.id}")

    @staticmethod
    @handle_errors(ErrorCode.UNKNOWN_ERROR)
    async def handle_situation(message: Message, state: FSMContext, machine):
        """Situation text received: submit the form to the session machine."""
        data = await state.get_data()
        await state.clear()

        await machine.submit_intake(
            message.from_user.id,
            message.chat.id,
            data.get("topic_id"),
            message.text,
        )

    @staticmethod
    @handle_errors(ErrorCode.HOST_FORM_ERROR)
    async def callback_close(callback: CallbackQuery, state: FSMContext, machine):
        """'Not now' button"""
        await callback.answer()
        await state.clear()
        await machine.close_intake(callback.from_user.id, _chat_id(callback))
        if callback.message:
            await callback.message.edit_text(FORM_CLOSED_TEXT)

    @staticmethod
    @handle_errors(ErrorCode.HOST_FORM_ERROR)
    async def cmd_cancel(message: Message, state: FSMContext, machine):
        """/cancel while a form is open"""
        await state.clear()
        await machine.close_intake(message.from_user.id, message.chat.id)
        await message.answer(FORM_CLOSED_TEXT)

    @staticmethod
    @handle_errors(ErrorCode.HOST_DELIVERY_ERROR)
    async def callback_expired(callback: CallbackQuery):
        """Topic button of a form that is no longer open"""
        await callback.answer(FORM_EXPIRED_TEXT, show_alert=True)
