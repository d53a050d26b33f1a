"""
Maven Bot Controller - composition root

Only wiring and composition, no business logic:
- settings and logging
- Bot and Dispatcher (Redis FSM storage when REDIS_URL is set)
- coaching session machine and guide service over the Telegram host
- handler registration via HandlerRegistry
- startup and shutdown via BotLifecycle
"""

import asyncio
import logging
import sys
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.base import BaseStorage
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.fsm.storage.redis import RedisStorage

from maven_bot.ai import PromptComposer, create_generation_client
from maven_bot.core.config import Settings, get_settings
from maven_bot.core.error_handling import MavenException
from maven_bot.core.logging import setup_logging
from maven_bot.session import CoachingSessionMachine, GuideService, InMemorySessionStore
from maven_bot.topics import get_topic_registry

from .config import BOT_INSTANCE_LOCK_KEY, BOT_INSTANCE_LOCK_TTL
from .handler_registry import HandlerRegistry
from .host import TelegramHost
from .lifecycle import BotInstanceLock, BotLifecycle

logger = logging.getLogger(__name__)


class MavenController:
    """
    Maven bot controller

    Responsibilities:
    - composition of all components
    - Bot and Dispatcher creation
    - handler registration through HandlerRegistry
    - startup through BotLifecycle

    Does NOT contain business logic, command handlers or utilities.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        logger.info("🤖 Initializing Maven Controller...")

        if not self.settings.telegram_bot_token:
            raise ValueError("TELEGRAM_BOT_TOKEN is not set")

        # 1. Bot and Dispatcher
        self.bot = Bot(token=self.settings.telegram_bot_token)
        self.dp = Dispatcher(storage=self._create_storage())
        logger.info("✅ Bot and Dispatcher created")

        # 2. Coaching core
        self.registry = get_topic_registry()
        self.composer = PromptComposer.from_settings(self.settings)
        self.generation_client = create_generation_client(self.settings)
        self.host = TelegramHost(self.bot)

        self.machine = CoachingSessionMachine(
            host=self.host,
            client=self.generation_client,
            composer=self.composer,
            registry=self.registry,
            store=InMemorySessionStore(
                ttl_seconds=self.settings.session_ttl_seconds,
                max_sessions=self.settings.max_sessions,
            ),
        )
        self.guide_service = GuideService(
            host=self.host,
            client=self.generation_client,
            composer=self.composer,
            registry=self.registry,
        )
        logger.info(f"✅ Coaching core ready ({len(self.registry)} topics)")

        # 3. Handlers
        self.handler_registry = HandlerRegistry(
            dp=self.dp,
            machine=self.machine,
            guide_service=self.guide_service,
            registry=self.registry,
        )
        self.handler_registry.register_all()

        # 4. Instance lock (Redis only)
        self.instance_lock = None
        if self.settings.redis_url:
            self.instance_lock = BotInstanceLock(
                redis_url=self.settings.redis_url,
                lock_key=BOT_INSTANCE_LOCK_KEY,
                lock_ttl=BOT_INSTANCE_LOCK_TTL,
            )
            logger.info("✅ BotInstanceLock created")

        # 5. Lifecycle
        self.lifecycle = BotLifecycle(
            bot=self.bot,
            dispatcher=self.dp,
            settings=self.settings,
            instance_lock=self.instance_lock,
            generation_client=self.generation_client,
        )

        logger.info("🎉 Maven Controller initialized successfully")

    def _create_storage(self) -> BaseStorage:
        if self.settings.redis_url:
            logger.info("🗄 FSM storage: Redis")
            return RedisStorage.from_url(self.settings.redis_url)
        logger.info("🗄 FSM storage: memory (set REDIS_URL to persist open forms)")
        return MemoryStorage()

    async def start(self):
        logger.info("🚀 Starting Maven Bot...")
        await self.lifecycle.start_polling()


async def main():
    """
    Entry point

    Usage:
        python -m telegram_interface.controller
    """
    settings = get_settings()
    setup_logging(settings)

    try:
        controller = MavenController(settings)
    except (MavenException, ValueError) as e:
        logger.error(f"❌ Cannot start Maven: {e}")
        sys.exit(1)

    await controller.start()


def run():
    """Console script entry point (maven-bot)."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
