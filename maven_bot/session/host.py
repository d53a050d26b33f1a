"""Chat platform interfaces used by the coaching flow."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..messages.segments import FormDescription, MessageSegment


class FormHost(ABC):
    """Renders the intake form."""

    @abstractmethod
    async def show_form(self, trigger: Any, form: FormDescription) -> None:
        """Show the form in response to ``trigger``. Raises HostDeliveryFailure."""
        pass


class MessageHost(ABC):
    """Posts replies."""

    @abstractmethod
    async def post_message(
        self,
        recipient_ref: Any,
        segments: Sequence[MessageSegment],
        fallback_text: Optional[str] = None,
    ) -> None:
        """Post segments in order as one reply. Raises HostDeliveryFailure."""
        pass


class UserDirectory(ABC):
    """Looks up user profiles."""

    @abstractmethod
    async def get_display_name(self, user_ref: Any) -> str:
        """Best effort; implementations return a generic label on failure."""
        pass


class ControlHost(ABC):
    """Retires interactive controls once they have been used."""

    @abstractmethod
    async def retire_controls(self, control_ref: Any) -> bool:
        """
        Remove the buttons attached to ``control_ref``.

        True only for the call that retired them. False when they were already
        gone or cannot be identified. Never raises.
        """
        pass


class CoachingHost(FormHost, MessageHost, UserDirectory, ControlHost):
    """Everything the coaching session machine needs from the platform."""
