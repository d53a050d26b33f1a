"""
Unit Tests: Settings, logging and the instance lock
"""

import json
import logging
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from maven_bot.core.config import Settings
from maven_bot.core.logging import LoggerMixin, MavenFormatter, setup_logging
from telegram_interface.lifecycle import BotInstanceLock


# ============================================================================
# SETTINGS
# ============================================================================

def test_settings_defaults(monkeypatch):
    for name in ("GENERATION_PROVIDER", "GENERATION_TIMEOUT_SECONDS", "COACHING_MAX_WORDS", "REDIS_URL", "SESSION_TTL_SECONDS", "MAX_SESSIONS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.generation_provider == "anthropic"
    assert settings.generation_timeout_seconds == 60.0
    assert settings.coaching_max_tokens == 700
    assert settings.coaching_max_words == 350
    assert settings.guide_max_tokens == 1000
    assert settings.redis_url is None
    assert settings.session_ttl_seconds == 3600.0
    assert settings.max_sessions == 10000


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GENERATION_PROVIDER", "openai")
    monkeypatch.setenv("GENERATION_TIMEOUT_SECONDS", "15")

    settings = Settings(_env_file=None)

    assert settings.generation_provider == "openai"
    assert settings.generation_timeout_seconds == 15.0


def test_settings_reject_unknown_provider():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, generation_provider="cohere")


# ============================================================================
# LOGGING
# ============================================================================

def test_formatter_emits_json_with_extra_fields():
    record = logging.LogRecord(
        "maven.test", logging.INFO, __file__, 10, "Session %s", ("u:c",), None
    )
    record.session_id = "u:c"
    record.stage = "awaiting_branch"

    entry = json.loads(MavenFormatter().format(record))

    assert entry["message"] == "Session u:c"
    assert entry["level"] == "INFO"
    assert entry["session_id"] == "u:c"
    assert entry["stage"] == "awaiting_branch"


def test_setup_logging_writes_files(tmp_path):
    settings = Settings(_env_file=None, log_to_file=True, log_dir=tmp_path)
    root_logger = logging.getLogger()
    ai_logger = logging.getLogger("maven.ai")
    saved_root, saved_ai, saved_level = root_logger.handlers[:], ai_logger.handlers[:], root_logger.level

    try:
        setup_logging(settings)
        logging.getLogger("maven.test").error("boom")

        assert (tmp_path / "maven.log").exists()
        assert (tmp_path / "errors" / "errors.log").exists()
        assert (tmp_path / "ai" / "ai_interactions.log").exists()
    finally:
        for handler in set(root_logger.handlers + ai_logger.handlers) - set(saved_root + saved_ai):
            handler.close()
        root_logger.handlers[:] = saved_root
        ai_logger.handlers[:] = saved_ai
        root_logger.setLevel(saved_level)


def test_logger_mixin_names_logger_after_class():
    class CoachThing(LoggerMixin):
        pass

    assert CoachThing().logger.name == "maven.CoachThing"


# ============================================================================
# INSTANCE LOCK
# ============================================================================

@pytest.mark.asyncio
async def test_lock_acquired_when_free():
    redis_client = AsyncMock()
    redis_client.set.return_value = True
    lock = BotInstanceLock("redis://localhost:6379/0", "maven:test:lock", client=redis_client)

    assert await lock.acquire() is True
    assert redis_client.set.call_args.kwargs == {"nx": True, "ex": 30}

    await lock.release()
    redis_client.delete.assert_awaited_once_with("maven:test:lock")
    redis_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_lock_refused_when_held():
    redis_client = AsyncMock()
    redis_client.set.return_value = None
    redis_client.get.return_value = "pid:1:started:now"
    lock = BotInstanceLock("redis://localhost:6379/0", "maven:test:lock", client=redis_client)

    assert await lock.acquire() is False

    await lock.release()
    redis_client.delete.assert_not_awaited()
    redis_client.aclose.assert_awaited_once()
