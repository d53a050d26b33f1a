"""
Unit Tests: Telegram handlers and host

Handlers are called directly with mocked aiogram objects, the way the
dispatcher would call them after dependency injection.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram import Dispatcher
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import Message

from maven_bot.core.error_handling import ErrorCode, HostDeliveryFailure, error_tracker
from maven_bot.messages.constants import BranchAction
from maven_bot.messages.formatters import format_intake, format_plain
from telegram_interface.handlers import BranchHandlers, CommandHandlers, IntakeHandlers
from telegram_interface.handlers.branch_handlers import BUTTON_USED_TEXT
from telegram_interface.handlers.intake_handlers import FORM_CLOSED_TEXT, FORM_EXPIRED_TEXT
from telegram_interface.handler_registry import HandlerRegistry
from telegram_interface.host import FormTrigger, TelegramHost
from telegram_interface.states import IntakeStates


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def message():
    """Mock incoming message"""
    msg = MagicMock()
    msg.from_user.id = 11
    msg.chat.id = 22
    msg.text = "My team avoids conflict."
    msg.answer = AsyncMock()
    return msg


@pytest.fixture
def callback():
    """Mock callback query"""
    cb = MagicMock()
    cb.from_user.id = 11
    cb.message.chat.id = 22
    cb.message.answer = AsyncMock()
    cb.message.edit_text = AsyncMock()
    cb.answer = AsyncMock()
    return cb


@pytest.fixture
def state():
    """Mock FSM context"""
    fsm = AsyncMock()
    fsm.get_data.return_value = {"form": "maven_topic_modal", "topic_id": "team_conflict"}
    return fsm


@pytest.fixture
def machine():
    return AsyncMock()


# ============================================================================
# COMMANDS
# ============================================================================

@pytest.mark.asyncio
async def test_cmd_maven_starts_session(message, state, machine):
    await CommandHandlers.cmd_maven(message, state=state, machine=machine)

    state.clear.assert_awaited_once()
    user, chat, trigger = machine.start.call_args.args
    assert (user, chat) == (11, 22)
    assert trigger == FormTrigger(message=message, state=state)


@pytest.mark.asyncio
async def test_cmd_maven_form_failure_is_tracked(message, state, machine):
    machine.start.side_effect = HostDeliveryFailure("rejected", ErrorCode.HOST_FORM_ERROR)

    await CommandHandlers.cmd_maven(message, state=state, machine=machine)

    assert error_tracker.error_counts["HOST_002"] == 1
    message.answer.assert_not_awaited()


@pytest.mark.asyncio
async def test_cmd_guide_passes_slug(message):
    guide_service = AsyncMock()

    await CommandHandlers.cmd_guide(message, command=SimpleNamespace(args="team-conflict"), guide_service=guide_service)

    guide_service.handle.assert_awaited_once_with(11, 22, "team-conflict")


# ============================================================================
# INTAKE
# ============================================================================

@pytest.mark.asyncio
async def test_pick_topic_moves_to_situation_step(callback, state, registry):
    callback.data = "intake_topic:team_conflict"

    await IntakeHandlers.callback_pick_topic(callback, state=state, registry=registry)

    callback.answer.assert_awaited_once()
    state.update_data.assert_awaited_once_with(topic_id="team_conflict")
    state.set_state.assert_awaited_once_with(IntakeStates.describing_situation)
    text = callback.message.edit_text.call_args.args[0]
    assert "🔥 Team Conflict" in text
    assert "Describe your specific situation" in text


@pytest.mark.asyncio
async def test_pick_unknown_topic_keeps_state(callback, state, registry):
    callback.data = "intake_topic:nonexistent"

    await IntakeHandlers.callback_pick_topic(callback, state=state, registry=registry)

    state.set_state.assert_not_awaited()
    assert error_tracker.error_counts["USER_001"] == 1


@pytest.mark.asyncio
async def test_situation_submits_intake(message, state, machine):
    await IntakeHandlers.handle_situation(message, state=state, machine=machine)

    state.clear.assert_awaited_once()
    machine.submit_intake.assert_awaited_once_with(11, 22, "team_conflict", "My team avoids conflict.")


@pytest.mark.asyncio
async def test_close_drops_intake(callback, state, machine):
    await IntakeHandlers.callback_close(callback, state=state, machine=machine)

    state.clear.assert_awaited_once()
    machine.close_intake.assert_awaited_once_with(11, 22)
    callback.message.edit_text.assert_awaited_once_with(FORM_CLOSED_TEXT)


@pytest.mark.asyncio
async def test_expired_topic_button_alerts(callback):
    await IntakeHandlers.callback_expired(callback)
    callback.answer.assert_awaited_once_with(FORM_EXPIRED_TEXT, show_alert=True)


# ============================================================================
# BRANCH
# ============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("data,action", [
    ("dig_deeper_yes:better_11s", BranchAction.DIG_DEEPER),
    ("dig_deeper_no:better_11s", BranchAction.DONE),
])
async def test_branch_button_routes_to_machine(callback, machine, data, action):
    callback.data = data

    await BranchHandlers.callback_branch(callback, machine=machine)

    callback.answer.assert_awaited_once_with()
    machine.branch.assert_awaited_once_with(11, 22, action, "better_11s", control_ref=callback.message)


@pytest.mark.asyncio
async def test_used_branch_button_alerts(callback, machine):
    callback.data = "dig_deeper_no:better_11s"
    machine.branch.return_value = False

    await BranchHandlers.callback_branch(callback, machine=machine)

    callback.answer.assert_awaited_once_with(BUTTON_USED_TEXT, show_alert=True)


# ============================================================================
# HOST
# ============================================================================

@pytest.mark.asyncio
async def test_host_shows_form_and_enters_topic_step(message, state, registry):
    host = TelegramHost(bot=AsyncMock())

    await host.show_form(FormTrigger(message=message, state=state), format_intake(registry))

    assert message.answer.call_args.kwargs["parse_mode"] == "HTML"
    state.set_state.assert_awaited_once_with(IntakeStates.choosing_topic)


@pytest.mark.asyncio
async def test_host_wraps_telegram_errors():
    bot = AsyncMock()
    bot.send_message.side_effect = TelegramAPIError(method=MagicMock(), message="Forbidden: bot was blocked")
    host = TelegramHost(bot=bot)

    with pytest.raises(HostDeliveryFailure):
        await host.post_message(22, format_plain("hello"), "hello")


@pytest.mark.asyncio
async def test_host_display_name_falls_back():
    bot = AsyncMock()
    bot.get_chat.side_effect = TelegramAPIError(method=MagicMock(), message="chat not found")

    assert await TelegramHost(bot=bot).get_display_name(11) == "Manager"


@pytest.mark.asyncio
async def test_host_display_name_from_chat():
    bot = AsyncMock()
    bot.get_chat.return_value = SimpleNamespace(full_name="Dana Scully", first_name="Dana")

    assert await TelegramHost(bot=bot).get_display_name(11) == "Dana Scully"


def _reply_with_buttons(edit_error=None):
    """Mock bot message carrying a branch keyboard"""
    reply = MagicMock(spec=Message)
    reply.message_id = 7
    reply.reply_markup = MagicMock()
    reply.edit_reply_markup = AsyncMock(side_effect=edit_error)
    return reply


@pytest.mark.asyncio
async def test_host_retires_branch_buttons():
    reply = _reply_with_buttons()

    assert await TelegramHost(bot=AsyncMock()).retire_controls(reply) is True
    reply.edit_reply_markup.assert_awaited_once_with(reply_markup=None)


@pytest.mark.asyncio
async def test_host_reports_buttons_already_retired():
    reply = _reply_with_buttons(
        TelegramBadRequest(method=MagicMock(), message="Bad Request: message is not modified")
    )

    assert await TelegramHost(bot=AsyncMock()).retire_controls(reply) is False


@pytest.mark.asyncio
async def test_host_cannot_retire_unknown_controls():
    host = TelegramHost(bot=AsyncMock())
    reply = _reply_with_buttons()
    reply.reply_markup = None

    assert await host.retire_controls(None) is False
    assert await host.retire_controls(reply) is False
    reply.edit_reply_markup.assert_not_awaited()


# ============================================================================
# ERROR BOUNDARY
# ============================================================================

@pytest.mark.asyncio
async def test_help_failure_is_tracked_not_raised(message):
    message.answer.side_effect = TelegramAPIError(method=MagicMock(), message="Forbidden: bot was blocked")

    await CommandHandlers.cmd_help(message)

    assert error_tracker.error_counts["HOST_001"] == 1


@pytest.mark.asyncio
async def test_close_on_old_form_is_tracked_not_raised(callback, state, machine):
    callback.message.edit_text.side_effect = TelegramBadRequest(
        method=MagicMock(), message="Bad Request: message can't be edited"
    )

    await IntakeHandlers.callback_close(callback, state=state, machine=machine)

    machine.close_intake.assert_awaited_once_with(11, 22)
    assert error_tracker.error_counts["HOST_002"] == 1


@pytest.mark.asyncio
async def test_cancel_failure_is_tracked_not_raised(message, state, machine):
    machine.close_intake.side_effect = RuntimeError("store unavailable")

    await IntakeHandlers.cmd_cancel(message, state=state, machine=machine)

    assert error_tracker.error_counts["HOST_002"] == 1


@pytest.mark.asyncio
async def test_expired_button_failure_is_tracked_not_raised(callback):
    callback.answer.side_effect = TelegramBadRequest(method=MagicMock(), message="Bad Request: query is too old")

    await IntakeHandlers.callback_expired(callback)

    assert error_tracker.error_counts["HOST_001"] == 1


@pytest.mark.asyncio
async def test_unknown_text_fallback_is_wrapped(message):
    dp = Dispatcher()
    HandlerRegistry(dp, machine=AsyncMock(), guide_service=AsyncMock(), registry=MagicMock())._register_fallback_handlers()
    (handler,) = dp.message.handlers
    message.answer.side_effect = TelegramAPIError(method=MagicMock(), message="Forbidden: bot was blocked")

    await handler.callback(message)

    assert error_tracker.error_counts["HOST_001"] == 1
