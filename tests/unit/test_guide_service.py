"""
Unit Tests: Guide Service (standalone 1-pager command)
"""

import pytest

from maven_bot.core.error_handling import ErrorCode, HostDeliveryFailure, error_tracker
from maven_bot.messages import constants as c
from maven_bot.messages.segments import Context, Header
from maven_bot.session import GuideService

USER = 7
CHAT = 7


@pytest.fixture
def guide(host, client, registry):
    return GuideService(host=host, client=client, registry=registry)


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", [None, "", "   "])
async def test_no_slug_posts_topic_listing(guide, host, client, registry, slug):
    result = await guide.handle(USER, CHAT, slug)

    assert result is None
    assert client.calls == []
    assert len(host.posts) == 1
    text = host.sections()[0]
    for topic_slug in registry.slugs():
        assert topic_slug in text


@pytest.mark.asyncio
async def test_unknown_slug_posts_one_not_found_notice(guide, host, client):
    result = await guide.handle(USER, CHAT, "nonexistent-topic")

    assert result is None
    assert client.calls == []
    assert len(host.posts) == 1
    assert host.sections()[0].startswith('Topic "nonexistent-topic" not found. Try: ')
    assert error_tracker.error_counts[ErrorCode.TOPIC_NOT_FOUND.value] == 1
    assert error_tracker.error_history[-1]["severity"] == "WARNING"


@pytest.mark.asyncio
async def test_known_slug_posts_pending_then_guide(guide, host, client):
    client.reply = "*Conflict is data.*\n\nThree tips follow."

    topic = await guide.handle(USER, CHAT, "Team-Conflict")

    assert topic.id == "team_conflict"
    assert len(client.calls) == 1
    system, user_content, max_tokens = client.calls[0]
    assert '"🔥 Team Conflict"' in user_content
    assert max_tokens == 1000

    assert len(host.posts) == 2
    assert host.sections(0) == [c.GUIDE_PENDING.format(label="🔥 Team Conflict")]
    guide_post = host.posts[1]["segments"]
    assert guide_post[0] == Header("Maven 1-Pager: 🔥 Team Conflict")
    assert guide_post[-1] == Context(c.GUIDE_FOOTER)
    assert "*Conflict is data.*\n\nThree tips follow." in host.texts(1)


@pytest.mark.asyncio
async def test_guide_is_not_word_limited(guide, host, client):
    client.reply = " ".join(["idea"] * 600)

    await guide.handle(USER, CHAT, "better-11s")

    assert " ".join(["idea"] * 600) in host.texts(1)


@pytest.mark.asyncio
async def test_generation_failure_posts_guide_error(guide, host, client):
    client.error = RuntimeError("provider down")

    topic = await guide.handle(USER, CHAT, "better-11s")

    assert topic.id == "better_11s"
    assert len(host.posts) == 2
    assert host.sections() == [c.GUIDE_FAILED]
    assert error_tracker.error_counts[ErrorCode.AI_API_ERROR.value] == 1


@pytest.mark.asyncio
async def test_delivery_failure_propagates(guide, host):
    host.fail_post = RuntimeError("chat not found")

    with pytest.raises(HostDeliveryFailure):
        await guide.handle(USER, CHAT, "better-11s")
