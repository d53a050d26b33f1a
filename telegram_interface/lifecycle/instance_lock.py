"""
Bot Instance Lock - keeps a single polling process per bot token

Redis SET NX with a TTL:
- only one process may poll Telegram getUpdates at a time
- the TTL is refreshed every lock_ttl/2 seconds while the bot runs
- released on shutdown
"""

import asyncio
import logging
import os
from datetime import datetime
from typing import Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class BotInstanceLock:
    """
    Redis lock guarding against duplicate bot processes.

    Two processes polling the same token fight over getUpdates, and each
    session would then only see half of the button presses.
    """

    def __init__(self, redis_url: str, lock_key: str, lock_ttl: int = 30, client=None):
        """
        Args:
            redis_url: Redis connection URL
            lock_key: Key name for the lock in Redis
            lock_ttl: Lock TTL in seconds (default: 30)
            client: Ready Redis client (tests)
        """
        self.redis_url = redis_url
        self.lock_key = lock_key
        self.lock_ttl = lock_ttl

        self.redis_client: Optional[redis.Redis] = client
        self.refresh_task: Optional[asyncio.Task] = None
        self._shutdown_event = asyncio.Event()
        self._acquired = False

    async def acquire(self) -> bool:
        """
        Take the lock.

        Returns:
            True if acquired, False if another instance holds it or Redis is unreachable
        """
        try:
            if not self.redis_client:
                self.redis_client = redis.from_url(self.redis_url, decode_responses=True)

            lock_acquired = await self.redis_client.set(
                self.lock_key,
                f"pid:{os.getpid()}:started:{datetime.now().isoformat()}",
                nx=True,
                ex=self.lock_ttl,
            )

            if lock_acquired:
                self._acquired = True
                logger.info(f"✅ Bot instance lock acquired (PID: {os.getpid()})")
                return True

            existing_lock = await self.redis_client.get(self.lock_key)
            logger.error(
                f"❌ Another bot instance is already running!\n"
                f"   Lock holder: {existing_lock}\n"
                f"   Please stop other instances before starting a new one."
            )
            return False

        except redis.RedisError as e:
            logger.error(f"❌ Failed to acquire instance lock: {e}")
            return False

    async def start_refresh(self):
        self.refresh_task = asyncio.create_task(self._refresh_loop())
        logger.info(f"🔄 Instance lock refresh task started (interval: {self.lock_ttl // 2}s)")

    async def _refresh_loop(self):
        try:
            while not self._shutdown_event.is_set():
                await self.redis_client.expire(self.lock_key, self.lock_ttl)
                logger.debug(f"🔄 Instance lock refreshed (TTL: {self.lock_ttl}s)")
                await asyncio.sleep(self.lock_ttl // 2)

        except asyncio.CancelledError:
            logger.info("🛑 Instance lock refresh task cancelled")
        except redis.RedisError as e:
            logger.error(f"❌ Error refreshing instance lock: {e}")

    async def release(self):
        """Stop refreshing, delete the key and close the client."""
        if self.refresh_task and not self.refresh_task.done():
            self._shutdown_event.set()
            self.refresh_task.cancel()
            try:
                await self.refresh_task
            except asyncio.CancelledError:
                pass
            logger.info("✅ Instance lock refresh task stopped")

        if not self.redis_client:
            return

        try:
            # Never delete a lock held by another instance
            if self._acquired:
                await self.redis_client.delete(self.lock_key)
                self._acquired = False
                logger.info("✅ Bot instance lock released")
        except redis.RedisError as e:
            logger.error(f"❌ Error releasing instance lock: {e}")
        finally:
            await self.redis_client.aclose()
            self.redis_client = None
