"""
Lifecycle Management

Modules:
- instance_lock: Redis lock against duplicate polling processes
- bot_lifecycle: polling, signal handling, graceful shutdown
"""

from .instance_lock import BotInstanceLock
from .bot_lifecycle import BotLifecycle

__all__ = ["BotInstanceLock", "BotLifecycle"]
