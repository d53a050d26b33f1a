"""
Configuration - Telegram adapter constants

Runtime settings (tokens, provider, redis) live in maven_bot.core.config.
"""

# Callback data
INTAKE_TOPIC_PREFIX = "intake_topic"
INTAKE_CLOSE_DATA = "intake_close"
CALLBACK_SEPARATOR = ":"

# Telegram limit is 4096 characters; keep room for formatting
MAX_MESSAGE_LENGTH = 4000

# Rendering
DIVIDER_LINE = "───────────────"

# Bot Instance Lock Configuration (only with REDIS_URL)
BOT_INSTANCE_LOCK_KEY = "maven:bot:instance_lock"
BOT_INSTANCE_LOCK_TTL = 30  # seconds

# Commands
COACH_COMMAND = "maven"
GUIDE_COMMANDS = ("maven_guide", "maven_pdf")
