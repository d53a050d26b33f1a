"""
Coaching Session State Machine

AWAITING_INTAKE ──submit──▶ AWAITING_TOPIC_BRANCH ──dig deeper / done──▶ COMPLETE
       │                                                                  ▲
       └──────────────────────── generation failure ──────────────────────┘

Each public method handles exactly one host event. Stage checks and the
following stage change never straddle an ``await``, so two events for the same
session cannot both pass a check on a single event loop. A completed session is
dropped from the store as soon as its last post is done; from then on the
branch buttons are single-fire through the host.
"""

from typing import Any, Optional

from ..ai.clients import BaseGenerationClient
from ..ai.prompts import PromptComposer
from ..core.error_handling import (
    GenerationFailure,
    HostDeliveryFailure,
    InvalidInput,
    MavenException,
    SessionStateError,
    error_tracker,
)
from ..core.logging import LoggerMixin
from ..messages import constants as c
from ..messages.constants import BranchAction
from ..messages.formatters import (
    Segments,
    closing_fallback_text,
    coaching_fallback_text,
    deep_dive_fallback_text,
    format_closing,
    format_coaching_reply,
    format_deep_dive,
    format_intake,
    format_plain,
)
from ..topics.registry import TopicRegistry, get_topic_registry
from .host import CoachingHost
from .models import TRANSITIONS, Session, SessionStage
from .store import InMemorySessionStore


class CoachingSessionMachine(LoggerMixin):
    """
    Drives one coaching session per (user, channel) pair.

    Args:
        host: chat platform capabilities (form, messages, user directory)
        client: text generation client
        composer: prompt composer
        registry: topic registry
        store: session store
    """

    def __init__(
        self,
        host: CoachingHost,
        client: BaseGenerationClient,
        composer: Optional[PromptComposer] = None,
        registry: Optional[TopicRegistry] = None,
        store: Optional[InMemorySessionStore] = None,
    ):
        self.host = host
        self.client = client
        self.composer = composer or PromptComposer()
        self.registry = registry or get_topic_registry()
        self.store = store if store is not None else InMemorySessionStore()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def start(self, user_ref: Any, channel_ref: Any, trigger: Any) -> Session:
        """Invocation: open a fresh session and ask the host to show the intake form."""
        session = self.store.put(Session(user_ref=user_ref, channel_ref=channel_ref))
        self.log_user_action("session_started", user_ref, session_id=session.session_id)

        form = format_intake(self.registry)
        try:
            await self.host.show_form(trigger, form)
        except Exception as e:
            self.store.discard(user_ref, channel_ref)
            if isinstance(e, HostDeliveryFailure):
                raise
            raise HostDeliveryFailure(
                f"Could not show intake form: {type(e).__name__}",
                user_id=user_ref,
                context={"session_id": session.session_id, "host_error": str(e)},
            ) from e

        return session

    async def close_intake(self, user_ref: Any, channel_ref: Any) -> None:
        """Form dismissed before submission. The session is dropped, not completed."""
        session = self.store.get(user_ref, channel_ref)
        if session is not None and session.stage is SessionStage.AWAITING_INTAKE:
            self.store.discard(user_ref, channel_ref)
            self.log_user_action("intake_closed", user_ref, session_id=session.session_id)

    async def submit_intake(
        self,
        user_ref: Any,
        channel_ref: Any,
        topic_id: Optional[str],
        situation: Optional[str],
    ) -> Session:
        """
        Intake submitted: compose → generate → format → post.

        Raises InvalidInput / TopicNotFound (session dropped, caller aborts
        silently) and HostDeliveryFailure. A generation failure is answered
        here with the generic retry message and completes the session.
        """
        session = self.store.get(user_ref, channel_ref)
        if session is None or session.is_complete:
            # Form state can outlive the in-memory session (restart, redis FSM)
            session = self.store.put(Session(user_ref=user_ref, channel_ref=channel_ref))
            self.logger.info(f"📝 Intake without live session, opened {session.session_id}")
        elif session.stage is not SessionStage.AWAITING_INTAKE:
            raise SessionStateError(
                "Intake already submitted for this session",
                user_id=user_ref,
                context={"session_id": session.session_id, "stage": session.stage.value},
            )

        if not topic_id or not situation or not situation.strip():
            self.store.discard(user_ref, channel_ref)
            raise InvalidInput(
                "Intake submitted without topic or situation",
                user_id=user_ref,
                context={"session_id": session.session_id, "has_topic": bool(topic_id)},
            )

        try:
            topic = self.registry.get(topic_id)
            session.select_topic(topic.id)
            session.record_situation(situation)
            request = self.composer.compose(topic, situation)
        except MavenException:
            self.store.discard(user_ref, channel_ref)
            raise

        session.display_name = await self._display_name(user_ref)
        self.log_user_action(
            "intake_submitted", user_ref, session_id=session.session_id, topic_id=topic.id
        )

        try:
            generated = await self.client.generate(request)
        except GenerationFailure as e:
            self._transition(session, SessionStage.COMPLETE)
            error_tracker.track_error(e, e.error_code, user_ref, {**e.context, "session_id": session.session_id})
            try:
                await self._post(channel_ref, format_plain(c.COACHING_FAILED), c.COACHING_FAILED, user_ref)
            finally:
                self._release(session)
            return session

        try:
            segments = format_coaching_reply(topic, generated, session.display_name)
        except MavenException:
            self.store.discard(user_ref, channel_ref)
            raise

        # Buttons become clickable as soon as the post lands, so the stage moves first
        self._transition(session, SessionStage.AWAITING_TOPIC_BRANCH)
        try:
            await self._post(channel_ref, segments, coaching_fallback_text(topic), user_ref)
        except HostDeliveryFailure:
            self._transition(session, SessionStage.COMPLETE)
            self._release(session)
            raise

        return session

    async def branch(
        self,
        user_ref: Any,
        channel_ref: Any,
        action: BranchAction,
        topic_id: Optional[str],
        control_ref: Any = None,
    ) -> bool:
        """
        Branch button pressed. Topic and action come from the button payload.

        A session waiting for its branch on that topic is claimed before
        posting. Without one (restart, expired session, a newer /maven, an
        older reply) the payload alone is served, once the host has retired the
        button. Returns True when a reply was posted.
        """
        topic = self.registry.get(topic_id)
        session = self.store.get(user_ref, channel_ref)

        if session is not None and session.is_complete:
            self.logger.info(
                f"↩️ Branch {action.value} ignored: session {session.session_id} already answered"
            )
            return False

        live = (
            session is not None
            and session.stage is SessionStage.AWAITING_TOPIC_BRANCH
            and session.topic_id == topic.id
        )
        if live:
            self._transition(session, SessionStage.COMPLETE)
            await self._retire(control_ref)
        elif not await self._retire(control_ref):
            self.logger.info(
                f"↩️ Branch {action.value} for {topic.id} ignored: button already used (user={user_ref})"
            )
            return False
        else:
            self.logger.info(f"🔁 Branch {action.value} for {topic.id} served from the button (user={user_ref})")

        if action is BranchAction.DIG_DEEPER:
            segments: Segments = format_deep_dive(topic)
            fallback = deep_dive_fallback_text(topic)
        else:
            segments = format_closing()
            fallback = closing_fallback_text()

        self.log_user_action(
            "branch_selected", user_ref, topic_id=topic.id, branch=action.value, live_session=live
        )
        try:
            await self._post(channel_ref, segments, fallback, user_ref)
        finally:
            if live:
                self._release(session)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _transition(self, session: Session, new_stage: SessionStage) -> None:
        if new_stage not in TRANSITIONS[session.stage]:
            raise SessionStateError(
                f"Illegal transition {session.stage.value} → {new_stage.value}",
                user_id=session.user_ref,
                context={"session_id": session.session_id},
            )
        self.logger.info(
            f"✨ Session {session.session_id}: {session.stage.value} → {new_stage.value}",
            extra={"session_id": session.session_id, "stage": new_stage.value},
        )
        session.stage = new_stage

    def _release(self, session: Session) -> None:
        """Forget a finished session, unless a newer one already took its key."""
        if self.store.get(session.user_ref, session.channel_ref) is session:
            self.store.discard(session.user_ref, session.channel_ref)

    async def _retire(self, control_ref: Any) -> bool:
        try:
            return await self.host.retire_controls(control_ref)
        except Exception as e:
            self.logger.warning(f"Could not retire controls {control_ref!r}: {e}")
            return False

    async def _display_name(self, user_ref: Any) -> str:
        try:
            name = await self.host.get_display_name(user_ref)
        except Exception as e:
            self.logger.warning(f"Display name lookup failed for {user_ref}: {e}")
            return c.DEFAULT_DISPLAY_NAME
        parts = (name or "").split()
        return parts[0] if parts else c.DEFAULT_DISPLAY_NAME

    async def _post(self, recipient_ref: Any, segments: Segments, fallback_text: str, user_ref: Any) -> None:
        try:
            await self.host.post_message(recipient_ref, segments, fallback_text)
        except HostDeliveryFailure:
            raise
        except Exception as e:
            raise HostDeliveryFailure(
                f"Could not post message: {type(e).__name__}",
                user_id=user_ref,
                context={"recipient": recipient_ref, "host_error": str(e)},
            ) from e
