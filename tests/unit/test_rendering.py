"""
Unit Tests: Telegram rendering and message splitting
"""

from unittest.mock import AsyncMock, patch

import pytest

from maven_bot.messages.formatters import format_coaching_reply, format_deep_dive, format_intake
from telegram_interface.config import DIVIDER_LINE, INTAKE_CLOSE_DATA
from telegram_interface.utilities import (
    decode_callback,
    encode_callback,
    markup_to_html,
    render_intake,
    render_segments,
    send_long_message,
    split_message,
)


# ============================================================================
# MARKUP
# ============================================================================

def test_markup_to_html_converts_chat_markup():
    assert markup_to_html("*Bold* and _italic_ and `/maven`") == (
        "<b>Bold</b> and <i>italic</i> and <code>/maven</code>"
    )


def test_markup_to_html_escapes_user_text_first():
    assert markup_to_html("a < b & *c*") == "a &lt; b &amp; <b>c</b>"


def test_markup_to_html_keeps_snake_case_words():
    assert markup_to_html("type team_conflict here") == "type team_conflict here"


def test_quote_line_becomes_blockquote():
    assert markup_to_html("Next:\n> Ask me anything") == "Next:\n<blockquote>Ask me anything</blockquote>"


def test_crossed_markup_never_produces_misnested_tags():
    assert markup_to_html("*a _b* c_") == "<b>a _b</b> c_"
    assert markup_to_html("_a *b_ c*") == "<i>a *b</i> c*"


def test_nested_markup_is_kept():
    assert markup_to_html("*a _b_ c*") == "<b>a <i>b</i> c</b>"


def test_code_spans_are_left_verbatim():
    assert markup_to_html("`*not bold*` and *bold*") == "<code>*not bold*</code> and <b>bold</b>"


# ============================================================================
# CALLBACK DATA
# ============================================================================

def test_callback_data_round_trip():
    data = encode_callback("dig_deeper_yes", "better_11s")

    assert data == "dig_deeper_yes:better_11s"
    assert decode_callback(data) == ("dig_deeper_yes", "better_11s")


@pytest.mark.parametrize("data,expected", [
    ("intake_close", ("intake_close", None)),
    ("", ("", None)),
    (None, ("", None)),
])
def test_decode_callback_without_value(data, expected):
    assert decode_callback(data) == expected


def test_every_callback_fits_telegram_limit(registry):
    for topic in registry:
        for row in render_segments(format_coaching_reply(topic, "x", "Dana")).keyboard.inline_keyboard:
            for button in row:
                assert len(button.callback_data.encode("utf-8")) <= 64


# ============================================================================
# SEGMENTS
# ============================================================================

def test_coaching_reply_renders_in_order_with_one_keyboard_row(registry):
    topic = registry.get("better_11s")

    rendered = render_segments(format_coaching_reply(topic, "*Generated.*", "Dana"))

    assert rendered.text.startswith("<b>Maven Coaching 🎯</b>")
    assert rendered.text.index("Why This Matters") < rendered.text.index("1. ") < rendered.text.index("Generated.")
    assert DIVIDER_LINE in rendered.text
    (row,) = rendered.keyboard.inline_keyboard
    assert [button.callback_data for button in row] == ["dig_deeper_yes:better_11s", "dig_deeper_no:better_11s"]


def test_deep_dive_has_no_keyboard(registry):
    rendered = render_segments(format_deep_dive(registry.get("team_conflict")))

    assert rendered.keyboard is None
    assert "<blockquote>" in rendered.text


def test_intake_renders_topic_buttons_and_close(registry):
    rendered = render_intake(format_intake(registry))

    rows = rendered.keyboard.inline_keyboard
    assert len(rows) == len(registry) + 1
    assert rows[0][0].callback_data == "intake_topic:hard_conversations"
    assert rows[-1][0].callback_data == INTAKE_CLOSE_DATA
    assert rendered.text.startswith("<b>Maven ⚡</b>")
    # The situation prompt is asked for in the second step
    assert "Describe your specific situation" not in rendered.text


# ============================================================================
# SPLITTING
# ============================================================================

def test_short_message_is_not_split():
    assert split_message("hello") == ["hello"]


def test_long_message_splits_on_paragraphs():
    paragraphs = [f"paragraph {i} " + "x" * 80 for i in range(10)]

    parts = split_message("\n\n".join(paragraphs), limit=300)

    assert all(len(part) <= 300 for part in parts)
    assert "\n\n".join(parts) == "\n\n".join(paragraphs)


@pytest.mark.asyncio
async def test_send_long_message_puts_keyboard_on_last_part(registry):
    bot = AsyncMock()
    keyboard = render_segments(format_coaching_reply(registry.get("better_11s"), "x", "Dana")).keyboard
    text = "\n\n".join(["y" * 3000, "z" * 3000])

    with patch("telegram_interface.utilities.message_splitter.asyncio.sleep", new=AsyncMock()):
        sent = await send_long_message(bot, 42, text, reply_markup=keyboard)

    assert sent == 2
    first, last = bot.send_message.call_args_list
    assert first.kwargs["reply_markup"] is None
    assert last.kwargs["reply_markup"] is keyboard
    assert first.args[0] == 42
