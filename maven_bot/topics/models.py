from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Topic:
    """A coaching subject with fixed rationale, tips and deep-dive content."""

    id: str
    label: str
    emoji: str
    why: str
    tips: Tuple[str, ...]
    deep_dive_intro: str
    big_ideas: Tuple[str, ...]
    dig_deeper_prompt: str

    @property
    def slug(self) -> str:
        """Command-line friendly identifier, e.g. ``team-conflict``."""
        return self.id.replace("_", "-")

    @property
    def title(self) -> str:
        """Label without its leading emoji."""
        head, _, rest = self.label.partition(" ")
        return rest if rest and not head.isalnum() else self.label
