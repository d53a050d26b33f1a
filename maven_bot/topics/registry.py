"""
Topic Registry - read-only catalog of coaching topics

Lookup by id (session flow, button payloads) and by slug (guide command).
Topics are validated once at construction; a registry that exists only holds
well-formed topics.
"""

import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..core.error_handling import MalformedTopic, TopicNotFound
from .catalog import TOPICS
from .models import Topic

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("id", "label", "emoji", "why", "deep_dive_intro", "dig_deeper_prompt")


def validate_topic(topic: Topic) -> Topic:
    """Raise MalformedTopic when a field the formatters rely on is missing or empty."""
    topic_id = getattr(topic, "id", None)

    for field in _TEXT_FIELDS:
        value = getattr(topic, field, None)
        if not isinstance(value, str) or not value.strip():
            raise MalformedTopic(
                f"Topic {topic_id!r} has no {field}",
                context={"topic_id": topic_id, "field": field},
            )

    for field in ("tips", "big_ideas"):
        items = getattr(topic, field, None)
        if not items or any(not isinstance(item, str) or not item.strip() for item in items):
            raise MalformedTopic(
                f"Topic {topic_id!r} has empty or missing {field}",
                context={"topic_id": topic_id, "field": field},
            )

    return topic


class TopicRegistry:
    """Immutable, insertion-ordered topic table."""

    def __init__(self, topics: Iterable[Topic] = TOPICS):
        by_id: Dict[str, Topic] = {}
        for topic in topics:
            validate_topic(topic)
            if topic.id in by_id:
                raise MalformedTopic(
                    f"Duplicate topic id {topic.id!r}",
                    context={"topic_id": topic.id},
                )
            by_id[topic.id] = topic

        self._by_id = by_id
        self._by_slug = {topic.slug: topic for topic in by_id.values()}
        logger.info(f"📚 Topic registry loaded: {len(by_id)} topics")

    def get(self, topic_id: Optional[str]) -> Topic:
        try:
            return self._by_id[topic_id]
        except KeyError:
            raise TopicNotFound(
                f"Unknown topic id {topic_id!r}",
                context={"topic_id": topic_id},
            ) from None

    def list(self) -> Tuple[Topic, ...]:
        return tuple(self._by_id.values())

    def resolve_slug(self, slug: str) -> Topic:
        """Resolve a user-typed slug such as ``Team-Conflict`` to its topic."""
        key = (slug or "").strip().lower()
        try:
            return self._by_slug[key]
        except KeyError:
            raise TopicNotFound(
                f"Unknown topic slug {slug!r}",
                context={"slug": slug},
            ) from None

    def slugs(self) -> Tuple[str, ...]:
        return tuple(self._by_slug)

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._by_id

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


_default_registry: Optional[TopicRegistry] = None


def get_topic_registry() -> TopicRegistry:
    """Shared registry built from the bundled catalog."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TopicRegistry()
    return _default_registry
