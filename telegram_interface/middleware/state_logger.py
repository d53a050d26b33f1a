"""
State Logger Middleware - logs intake form FSM transitions
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

logger = logging.getLogger(__name__)


class StateLoggerMiddleware(BaseMiddleware):
    """Logs the FSM state before each handler and any change after it."""

    async def __call__(
        self,
        handler: Callable[[Message | CallbackQuery, Dict[str, Any]], Awaitable[Any]],
        event: Message | CallbackQuery,
        data: Dict[str, Any],
    ) -> Any:
        user_id = event.from_user.id if getattr(event, "from_user", None) else None

        state: FSMContext = data.get("state")
        current_state = await state.get_state() if state else None

        if state and user_id:
            logger.debug(f"🔄 FSM state [BEFORE]: user={user_id}, state={current_state or 'None'}")

        result = await handler(event, data)

        if state and user_id:
            new_state = await state.get_state()
            if new_state != current_state:
                logger.info(
                    f"✨ FSM state [CHANGED]: user={user_id}, "
                    f"{current_state or 'None'} → {new_state or 'None'}"
                )

        return result
