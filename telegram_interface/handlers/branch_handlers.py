"""
Branch Handlers - "dig deeper" / "done" buttons under a coaching reply

One generic handler serves every topic: the button payload carries both the
action id and the topic id, so the buttons keep working after a restart.
"""

import logging

from aiogram.types import CallbackQuery

from maven_bot.core.error_handling import ErrorCode, handle_errors
from maven_bot.messages.constants import BranchAction

from ..utilities import decode_callback

logger = logging.getLogger(__name__)

BUTTON_USED_TEXT = "You already picked an option here. Type /maven to start a new session."


class BranchHandlers:
    @staticmethod
    @handle_errors(ErrorCode.HOST_DELIVERY_ERROR)
    async def callback_branch(callback: CallbackQuery, machine):
        action_id, topic_id = decode_callback(callback.data)
        action = BranchAction.from_action_id(action_id)
        chat_id = callback.message.chat.id if callback.message else callback.from_user.id

        logger.info(f"🔘 Branch {action.value} for {topic_id} by user {callback.from_user.id}")
        posted = await machine.branch(
            callback.from_user.id, chat_id, action, topic_id, control_ref=callback.message
        )

        if posted:
            await callback.answer()
        else:
            await callback.answer(BUTTON_USED_TEXT, show_alert=True)
