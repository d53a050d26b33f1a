"""
Utilities - helper functions

Modules:
- message_splitter: split long messages for Telegram
- rendering: MessageSegment → Telegram HTML and inline keyboards
"""

from .message_splitter import send_long_message, split_message
from .rendering import (
    RenderedMessage,
    decode_callback,
    encode_callback,
    markup_to_html,
    render_intake,
    render_segments,
    render_text_prompt,
)

__all__ = [
    "send_long_message",
    "split_message",
    "RenderedMessage",
    "decode_callback",
    "encode_callback",
    "markup_to_html",
    "render_intake",
    "render_segments",
    "render_text_prompt",
]
