"""
In-memory session store

Sessions are keyed by (user, channel). Nothing is persisted; a restart forgets
every open session. The machine discards a session once it completes, and the
store drops sessions that were never finished: anything older than the TTL,
then the oldest entries above ``max_sessions``.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from ..core.logging import get_logger
from .models import Session, make_session_id

logger = get_logger("maven.sessions")

DEFAULT_SESSION_TTL_SECONDS = 3600.0
DEFAULT_MAX_SESSIONS = 10000


class InMemorySessionStore:
    def __init__(
        self,
        ttl_seconds: Optional[float] = DEFAULT_SESSION_TTL_SECONDS,
        max_sessions: Optional[int] = DEFAULT_MAX_SESSIONS,
    ):
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
        self.max_sessions = max_sessions
        # Insertion order is creation order: put() always re-inserts
        self._sessions: Dict[str, Session] = {}

    def get(self, user_ref, channel_ref) -> Optional[Session]:
        session_id = make_session_id(user_ref, channel_ref)
        session = self._sessions.get(session_id)
        if session is not None and self._expired(session, datetime.now(timezone.utc)):
            del self._sessions[session_id]
            logger.info(f"⌛ Session {session_id} expired in {session.stage.value}")
            return None
        return session

    def put(self, session: Session) -> Session:
        self._sessions.pop(session.session_id, None)
        self._sessions[session.session_id] = session
        self.prune()
        return session

    def discard(self, user_ref, channel_ref) -> Optional[Session]:
        return self._sessions.pop(make_session_id(user_ref, channel_ref), None)

    def prune(self, now: Optional[datetime] = None) -> int:
        """Drop expired sessions, then the oldest ones above the size bound."""
        now = now or datetime.now(timezone.utc)

        expired = [sid for sid, session in self._sessions.items() if self._expired(session, now)]
        for sid in expired:
            del self._sessions[sid]
        dropped = len(expired)

        if self.max_sessions is not None:
            while len(self._sessions) > self.max_sessions:
                del self._sessions[next(iter(self._sessions))]
                dropped += 1

        if dropped:
            logger.info(f"🧹 Dropped {dropped} unfinished sessions, {len(self._sessions)} open")
        return dropped

    def _expired(self, session: Session, now: datetime) -> bool:
        return self.ttl is not None and now - session.created_at > self.ttl

    def __len__(self) -> int:
        return len(self._sessions)
