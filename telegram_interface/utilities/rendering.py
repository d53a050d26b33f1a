"""
Segment Renderer - MessageSegment tuples → Telegram HTML + inline keyboard

Chat markup used in topic content and generated text:
*bold*, _italic_, `code` and "> " quoted lines.
"""

import html
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from maven_bot.messages.segments import (
    Actions,
    Context,
    Divider,
    FormDescription,
    Header,
    MessageSegment,
    Section,
    SelectInput,
    TextInput,
)

from ..config import (
    CALLBACK_SEPARATOR,
    DIVIDER_LINE,
    INTAKE_CLOSE_DATA,
    INTAKE_TOPIC_PREFIX,
)

# Leftmost span wins; bold and italic content is rendered again, code is not
_INLINE = re.compile(
    r"`(?P<code>[^`\n]+)`"
    r"|\*(?P<bold>[^*\n]+)\*"
    r"|(?<!\w)_(?P<italic>[^_\n]+)_(?!\w)"
)
_QUOTE = re.compile(r"^&gt; ?(.*)$", re.MULTILINE)


@dataclass
class RenderedMessage:
    text: str
    keyboard: Optional[InlineKeyboardMarkup] = None


def _inline_to_html(text: str) -> str:
    def replace(match: re.Match) -> str:
        if match.group("code") is not None:
            return f"<code>{match.group('code')}</code>"
        if match.group("bold") is not None:
            return f"<b>{_inline_to_html(match.group('bold'))}</b>"
        return f"<i>{_inline_to_html(match.group('italic'))}</i>"

    return _INLINE.sub(replace, text)


def markup_to_html(text: str) -> str:
    """
    Convert chat markup to Telegram HTML. Input is escaped first.

    Spans never overlap, so crossed markup like ``*a _b* c_`` keeps the
    unmatched marker as text instead of producing mis-nested tags.
    """
    return _QUOTE.sub(r"<blockquote>\1</blockquote>", _inline_to_html(html.escape(text, quote=False)))


def encode_callback(action_id: str, value: str) -> str:
    return f"{action_id}{CALLBACK_SEPARATOR}{value}"


def decode_callback(data: Optional[str]) -> tuple:
    """``"dig_deeper_yes:better_11s"`` → ``("dig_deeper_yes", "better_11s")``"""
    action_id, _, value = (data or "").partition(CALLBACK_SEPARATOR)
    return action_id, value or None


def _render_block(segment: MessageSegment) -> Optional[str]:
    if isinstance(segment, Header):
        return f"<b>{html.escape(segment.text, quote=False)}</b>"
    if isinstance(segment, (Section, Context)):
        return markup_to_html(segment.text)
    if isinstance(segment, Divider):
        return DIVIDER_LINE
    if isinstance(segment, SelectInput):
        return f"<b>{html.escape(segment.label, quote=False)}</b>"
    if isinstance(segment, TextInput):
        return render_text_prompt(segment)
    return None


def _keyboard_rows(segment: MessageSegment) -> List[List[InlineKeyboardButton]]:
    if isinstance(segment, Actions):
        return [[
            InlineKeyboardButton(text=button.label, callback_data=encode_callback(button.action_id, button.value))
            for button in segment.buttons
        ]]
    if isinstance(segment, SelectInput):
        return [
            [InlineKeyboardButton(text=option.label, callback_data=encode_callback(INTAKE_TOPIC_PREFIX, option.value))]
            for option in segment.options
        ]
    return []


def render_segments(segments: Sequence[MessageSegment]) -> RenderedMessage:
    """Render a reply in segment order. Interactive groups become one keyboard."""
    blocks = []
    rows: List[List[InlineKeyboardButton]] = []

    for segment in segments:
        block = _render_block(segment)
        if block:
            blocks.append(block)
        rows.extend(_keyboard_rows(segment))

    keyboard = InlineKeyboardMarkup(inline_keyboard=rows) if rows else None
    return RenderedMessage(text="\n\n".join(blocks), keyboard=keyboard)


def render_text_prompt(field: TextInput) -> str:
    lines = [f"<b>{html.escape(field.label, quote=False)}</b>"]
    if field.hint:
        lines.append(html.escape(field.hint, quote=False))
    if field.placeholder:
        lines.append(f"\n<i>{html.escape(field.placeholder, quote=False)}</i>")
    return "\n".join(lines)


def render_intake(form: FormDescription) -> RenderedMessage:
    """
    First step of the intake form: title, welcome and the topic keyboard.
    The situation prompt is sent once a topic is picked.
    """
    first_step = [segment for segment in form.segments if not isinstance(segment, TextInput)]
    rendered = render_segments(first_step)

    title = f"<b>{html.escape(form.title, quote=False)}</b>"
    rows = list(rendered.keyboard.inline_keyboard) if rendered.keyboard else []
    rows.append([InlineKeyboardButton(text=form.close_label, callback_data=INTAKE_CLOSE_DATA)])

    return RenderedMessage(
        text=f"{title}\n\n{rendered.text}",
        keyboard=InlineKeyboardMarkup(inline_keyboard=rows),
    )
