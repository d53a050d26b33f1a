"""
Maven - leadership coaching assistant for team chat

Platform-agnostic core: topic registry, prompt composer, generation clients,
response formatter and the coaching session state machine. The Telegram
adapter lives in ``telegram_interface``.
"""

__version__ = "1.0.0"
