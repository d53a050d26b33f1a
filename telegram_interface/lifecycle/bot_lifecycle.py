"""
Bot Lifecycle Manager

Responsible for:
- polling with graceful shutdown
- signal handling (SIGINT, SIGTERM)
- releasing the instance lock, the generation client and the bot session
"""

import asyncio
import logging
import os
import signal
from typing import Optional

from aiogram import Bot, Dispatcher

logger = logging.getLogger(__name__)


class BotLifecycle:
    """
    Runs the Telegram bot from startup to shutdown.

    The instance lock is optional: without Redis the bot runs unguarded.
    """

    def __init__(
        self,
        bot: Bot,
        dispatcher: Dispatcher,
        settings,
        instance_lock=None,
        generation_client=None,
    ):
        self.bot = bot
        self.dp = dispatcher
        self.settings = settings
        self.instance_lock = instance_lock
        self.generation_client = generation_client

        self._polling_task: Optional[asyncio.Task] = None
        self._shutdown_event = asyncio.Event()

    async def setup_signal_handlers(self):
        loop = asyncio.get_running_loop()

        def signal_handler(sig):
            logger.info(f"🛑 Received signal {sig}, initiating graceful shutdown...")
            self.request_shutdown()

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
            except NotImplementedError:
                # Windows event loops have no add_signal_handler
                logger.warning(f"⚠️ Signal handler for {sig} not supported on this platform")

        logger.info("📡 Signal handlers configured (SIGINT, SIGTERM)")

    def request_shutdown(self):
        self._shutdown_event.set()

    async def start_polling(self):
        """
        Acquire the lock, poll until a shutdown signal, then stop.
        """
        try:
            if self.instance_lock:
                if not await self.instance_lock.acquire():
                    logger.error("🚫 Aborting startup - another instance is running")
                    return
                await self.instance_lock.start_refresh()

            await self.setup_signal_handlers()
            self._print_startup_banner()

            logger.info("Starting Maven Bot polling...")
            self._polling_task = asyncio.create_task(self.dp.start_polling(self.bot, handle_signals=False))

            shutdown_waiter = asyncio.create_task(self._shutdown_event.wait())
            done, _ = await asyncio.wait(
                {self._polling_task, shutdown_waiter},
                return_when=asyncio.FIRST_COMPLETED,
            )

            if self._polling_task in done:
                shutdown_waiter.cancel()
                # Re-raises if polling crashed
                self._polling_task.result()
            else:
                logger.info("🛑 Initiating graceful shutdown...")
                self._polling_task.cancel()
                try:
                    await self._polling_task
                except asyncio.CancelledError:
                    logger.info("✅ Polling task cancelled")

        except KeyboardInterrupt:
            logger.info("Bot stopped by user (Ctrl+C)")
        except Exception as e:
            logger.error(f"Bot error: {e}", exc_info=True)
            raise
        finally:
            await self.stop()

    async def stop(self):
        """Release every resource; each step runs even if an earlier one failed."""
        logger.info("🛑 Stopping bot gracefully...")

        if self.instance_lock:
            await self.instance_lock.release()

        if self.generation_client is not None:
            try:
                await self.generation_client.close()
                logger.info("✅ Generation client closed")
            except Exception as e:
                logger.error(f"❌ Error closing generation client: {e}", exc_info=True)

        try:
            await self.bot.session.close()
            logger.info("✅ Bot session closed")
        except Exception as e:
            logger.error(f"❌ Error closing bot session: {e}", exc_info=True)

        await self.dp.storage.close()
        logger.info("🎉 Bot stopped successfully")

    def _print_startup_banner(self):
        storage = "Redis" if self.settings.redis_url else "in-memory"
        model = (
            self.settings.anthropic_model
            if self.settings.generation_provider == "anthropic"
            else self.settings.openai_model
        )

        print("🚀 Maven Bot")
        print("=" * 40)
        print(f"✅ Generation provider: {self.settings.generation_provider} ({model})")
        print(f"✅ Generation timeout: {self.settings.generation_timeout_seconds:.0f}s")
        print(f"✅ FSM storage: {storage}")
        print(f"✅ Instance lock: {'Active' if self.instance_lock else 'Disabled'} (PID: {os.getpid()})")
        print("🔗 Ready for managers!")
        print("=" * 40)
