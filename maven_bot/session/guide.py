"""
Guide Service - standalone 1-pager command

Session-less path: slug → topic → guide request → generation → post.
It never touches the coaching state machine.
"""

from typing import Any, Optional

from ..ai.clients import BaseGenerationClient
from ..ai.prompts import PromptComposer
from ..core.error_handling import GenerationFailure, HostDeliveryFailure, TopicNotFound, error_tracker
from ..core.logging import LoggerMixin, log_performance
from ..messages import constants as c
from ..messages.formatters import (
    Segments,
    format_guide_help,
    format_guide_pending,
    format_plain,
    format_standalone_guide,
    guide_fallback_text,
    guide_not_found_text,
)
from ..topics.models import Topic
from ..topics.registry import TopicRegistry, get_topic_registry
from .host import MessageHost


class GuideService(LoggerMixin):
    def __init__(
        self,
        host: MessageHost,
        client: BaseGenerationClient,
        composer: Optional[PromptComposer] = None,
        registry: Optional[TopicRegistry] = None,
    ):
        self.host = host
        self.client = client
        self.composer = composer or PromptComposer()
        self.registry = registry or get_topic_registry()

    async def handle(self, user_ref: Any, recipient_ref: Any, slug: Optional[str]) -> Optional[Topic]:
        """
        Run the guide command.

        No slug posts the topic listing; an unknown slug posts a not-found
        notice without calling the generator. Returns the resolved topic, if any.
        """
        slug = (slug or "").strip()
        if not slug:
            await self._post(recipient_ref, format_guide_help(self.registry), "Maven guide generator")
            return None

        try:
            topic = self.registry.resolve_slug(slug)
        except TopicNotFound as e:
            error_tracker.track_error(e, e.error_code, user_ref, e.context, severity="WARNING")
            text = guide_not_found_text(slug, self.registry)
            await self._post(recipient_ref, format_plain(text), text)
            return None

        self.log_user_action("guide_requested", user_ref, topic_id=topic.id)
        await self._post(recipient_ref, format_guide_pending(topic), guide_fallback_text(topic))

        request = self.composer.compose_guide_request(topic)
        try:
            with log_performance(f"guide_generation:{topic.id}", self.logger):
                guide_text = await self.client.generate(request)
        except GenerationFailure as e:
            error_tracker.track_error(e, e.error_code, user_ref, e.context)
            await self._post(recipient_ref, format_plain(c.GUIDE_FAILED), c.GUIDE_FAILED)
            return topic

        segments = format_standalone_guide(topic, guide_text)
        await self._post(recipient_ref, segments, guide_fallback_text(topic))
        return topic

    async def _post(self, recipient_ref: Any, segments: Segments, fallback_text: str) -> None:
        try:
            await self.host.post_message(recipient_ref, segments, fallback_text)
        except HostDeliveryFailure:
            raise
        except Exception as e:
            raise HostDeliveryFailure(
                f"Could not post guide message: {type(e).__name__}",
                context={"recipient": recipient_ref, "host_error": str(e)},
            ) from e
