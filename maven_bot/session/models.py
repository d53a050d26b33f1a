from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from ..core.error_handling import InvalidInput


class SessionStage(Enum):
    AWAITING_INTAKE = "awaiting_intake"          # Form shown, waiting for submission
    AWAITING_TOPIC_BRANCH = "awaiting_branch"    # Coaching reply posted with branch buttons
    COMPLETE = "complete"                        # Terminal


# Allowed stage transitions
TRANSITIONS = {
    SessionStage.AWAITING_INTAKE: {SessionStage.AWAITING_TOPIC_BRANCH, SessionStage.COMPLETE},
    SessionStage.AWAITING_TOPIC_BRANCH: {SessionStage.COMPLETE},
    SessionStage.COMPLETE: set(),
}


def make_session_id(user_ref: Any, channel_ref: Any) -> str:
    return f"{user_ref}:{channel_ref}"


@dataclass
class Session:
    """One user's pass through intake → coaching reply → branch choice."""

    user_ref: Any
    channel_ref: Any
    stage: SessionStage = SessionStage.AWAITING_INTAKE
    display_name: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _topic_id: Optional[str] = field(default=None, repr=False)
    _situation: Optional[str] = field(default=None, repr=False)

    @property
    def session_id(self) -> str:
        return make_session_id(self.user_ref, self.channel_ref)

    @property
    def topic_id(self) -> Optional[str]:
        return self._topic_id

    @property
    def situation(self) -> Optional[str]:
        return self._situation

    def select_topic(self, topic_id: str) -> None:
        if self._topic_id is not None:
            raise InvalidInput(
                "Session already has a topic",
                user_id=self.user_ref,
                context={"session_id": self.session_id, "topic_id": self._topic_id},
            )
        self._topic_id = topic_id

    def record_situation(self, situation: str) -> None:
        if self._situation is not None:
            raise InvalidInput(
                "Session already has a situation",
                user_id=self.user_ref,
                context={"session_id": self.session_id},
            )
        self._situation = situation

    @property
    def is_complete(self) -> bool:
        return self.stage is SessionStage.COMPLETE
