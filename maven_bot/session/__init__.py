"""
Coaching session flow

- models: Session value and stages
- store: in-memory session store
- host: chat platform interfaces
- machine: the coaching session state machine
- guide: standalone 1-pager command
"""

from .guide import GuideService
from .host import CoachingHost, ControlHost, FormHost, MessageHost, UserDirectory
from .machine import CoachingSessionMachine
from .models import TRANSITIONS, Session, SessionStage, make_session_id
from .store import InMemorySessionStore

__all__ = [
    "GuideService",
    "CoachingHost",
    "ControlHost",
    "FormHost",
    "MessageHost",
    "UserDirectory",
    "CoachingSessionMachine",
    "TRANSITIONS",
    "Session",
    "SessionStage",
    "make_session_id",
    "InMemorySessionStore",
]
