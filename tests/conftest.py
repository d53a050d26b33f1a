"""
Shared fixtures: a recording chat host and a scripted generation client.
"""

from typing import Any, List, Optional

import pytest

from maven_bot.ai.clients import BaseGenerationClient
from maven_bot.core.error_handling import error_tracker
from maven_bot.messages.segments import Actions, Section
from maven_bot.session.host import CoachingHost
from maven_bot.topics import TopicRegistry


class RecordingHost(CoachingHost):
    """Chat host that keeps everything it is asked to do."""

    def __init__(self, display_name: Optional[str] = "Dana Scully"):
        self.forms: List[tuple] = []
        self.posts: List[dict] = []
        self.display_name = display_name
        self.fail_form: Optional[Exception] = None
        self.fail_post: Optional[Exception] = None
        self.fail_name: Optional[Exception] = None
        self.retired: List[Any] = []

    async def show_form(self, trigger: Any, form) -> None:
        if self.fail_form:
            raise self.fail_form
        self.forms.append((trigger, form))

    async def post_message(self, recipient_ref: Any, segments, fallback_text=None) -> None:
        if self.fail_post:
            raise self.fail_post
        self.posts.append({"recipient": recipient_ref, "segments": tuple(segments), "fallback": fallback_text})

    async def get_display_name(self, user_ref: Any) -> str:
        if self.fail_name:
            raise self.fail_name
        return self.display_name

    async def retire_controls(self, control_ref: Any) -> bool:
        # Each reply reference can be retired once
        if control_ref is None or control_ref in self.retired:
            return False
        self.retired.append(control_ref)
        return True

    # Helpers for assertions

    def texts(self, index: int = -1) -> List[str]:
        return [s.text for s in self.posts[index]["segments"] if hasattr(s, "text")]

    def actions(self, index: int = -1) -> List[Actions]:
        return [s for s in self.posts[index]["segments"] if isinstance(s, Actions)]

    def sections(self, index: int = -1) -> List[str]:
        return [s.text for s in self.posts[index]["segments"] if isinstance(s, Section)]


class ScriptedClient(BaseGenerationClient):
    """Generation client returning canned text (or raising) without any provider."""

    provider = "scripted"

    def __init__(self, reply: str = "*Reframe.* Try this.\n\nWhat would courage look like?", timeout_seconds: float = 1.0):
        super().__init__(model="scripted-model", timeout_seconds=timeout_seconds)
        self.reply = reply
        self.error: Optional[Exception] = None
        self.calls: List[tuple] = []

    async def create_completion(self, system_instructions, user_content, max_output_tokens):
        self.calls.append((system_instructions, user_content, max_output_tokens))
        if self.error:
            raise self.error
        return self.reply

    async def close(self):
        pass


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def client():
    return ScriptedClient()


@pytest.fixture
def registry():
    return TopicRegistry()


@pytest.fixture(autouse=True)
def reset_error_tracker():
    """Error counts are global; start every test from zero."""
    error_tracker.error_counts.clear()
    error_tracker.error_history.clear()
    yield
