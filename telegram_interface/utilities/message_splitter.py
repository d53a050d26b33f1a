"""
Message Splitter - split long messages for Telegram

Telegram limit: 4096 characters per message.
Splits on paragraphs, then on lines, so HTML tags (which never span a line
in rendered output) stay balanced in every part.
"""

import asyncio
import logging
from typing import List, Optional

from aiogram import Bot
from aiogram.types import InlineKeyboardMarkup

from ..config import MAX_MESSAGE_LENGTH

logger = logging.getLogger(__name__)


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Split text into parts no longer than ``limit`` (single lines are never cut)."""
    if len(text) <= limit:
        return [text]

    parts = []
    current_part = ""

    for paragraph in text.split("\n\n"):
        if len(paragraph) > limit:
            # Paragraph alone is too long: fall back to single lines
            for line in paragraph.split("\n"):
                if len(current_part) + len(line) + 1 <= limit:
                    current_part += line + "\n"
                else:
                    if current_part:
                        parts.append(current_part.strip())
                    current_part = line + "\n"
        else:
            if len(current_part) + len(paragraph) + 2 <= limit:
                current_part += paragraph + "\n\n"
            else:
                if current_part:
                    parts.append(current_part.strip())
                current_part = paragraph + "\n\n"

    if current_part.strip():
        parts.append(current_part.strip())

    return parts


async def send_long_message(
    bot: Bot,
    chat_id,
    text: str,
    reply_markup: Optional[InlineKeyboardMarkup] = None,
    parse_mode: str = "HTML",
) -> int:
    """
    Send text in as many parts as needed. The keyboard goes on the last part.

    Returns the number of messages sent.
    """
    parts = split_message(text)

    for i, part in enumerate(parts):
        is_last = i == len(parts) - 1
        await bot.send_message(
            chat_id,
            part,
            parse_mode=parse_mode,
            reply_markup=reply_markup if is_last else None,
        )

        # Small pause between parts keeps them in order on the client
        if not is_last:
            await asyncio.sleep(0.3)

    if len(parts) > 1:
        logger.info(f"📤 Long message sent in {len(parts)} parts")

    return len(parts)
