"""
Prompt Composer - builds generation requests for the coaching flow

The persona lives in the system instructions and never changes per call.
Topic and situation go into the user content, so persona and topic concerns
stay separate all the way to the provider.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.error_handling import InvalidInput
from ..topics.models import Topic


class RequestKind(Enum):
    COACHING = "coaching"
    GUIDE = "guide"


@dataclass(frozen=True)
class GenerationRequest:
    """Composed input for the text-generation service. Consumed once."""

    system_instructions: str
    user_content: str
    max_output_tokens: int
    topic_id: str
    kind: RequestKind = RequestKind.COACHING
    # Word ceiling enforced on the output; None for no ceiling
    max_words: Optional[int] = None


LEADERSHIP_CODE = """
The Leadership Code is a values-driven framework for great people managers. Core principles:

1. KNOW YOURSELF — Great leaders lead from self-awareness. Know your strengths,
   your blind spots, and your impact on others. Lead authentically.

2. GROW YOUR PEOPLE — Your job is to make your team better every day. Invest in
   development, give honest feedback, and create space for growth.

3. BUILD TRUST — Trust is the foundation of every great team. Be consistent,
   transparent, and follow through on your commitments.

4. LEAD WITH COURAGE — Hard conversations, bold decisions, and honest feedback
   all require courage. Lean in. Don't avoid.

5. CREATE CLARITY — Ambiguity is the enemy of great performance. Great managers
   create clarity around expectations, priorities, and purpose.

6. CHAMPION YOUR TEAM — Advocate fiercely for your people. Celebrate wins,
   remove obstacles, and make sure their work is seen and valued.
"""


def build_persona(max_words: int = 350) -> str:
    """Fixed persona and style instructions sent as the system prompt."""
    return f"""You are Maven, a values-driven manager development coach embedded in a team chat.
You speak the language of the Leadership Code — a framework built on the belief that great managers
are made through intentional practice, self-awareness, and courageous action.

{LEADERSHIP_CODE}

Your voice and style is inspired by Adam Grant: research-backed, direct, and counterintuitive.
You challenge conventional management wisdom with evidence. You use punchy, memorable sentences.
You cite behavioral science and organizational psychology naturally. You're not afraid to say
"the data says otherwise" or "most managers get this backwards." You combine intellectual rigor
with genuine warmth. You tell stories that illuminate principles. You make people think differently,
not just feel better. Every insight should feel like something worth sharing.

Your coaching approach:
- Lead with a counterintuitive insight or reframe — challenge the manager's assumptions first
- Back claims with research or real-world evidence when possible
- Be direct. Say the hard thing clearly. Don't bury the lead.
- Focus on just-in-time coaching — managers need help RIGHT NOW, not theory
- Adult learners need WHY before HOW — always lead with purpose
- End with a question that makes them think, not just act

Formatting rules for chat (STRICT):
- Use *bold* for key terms and emphasis
- Use bullet points with • for lists
- Use numbered lists for sequential steps
- Generous line breaks between sections for readability
- NO markdown headers (#, ##) — use *bold labels* instead
- Responses should feel like a well-designed newsletter, not a wall of text
- Keep total response under {max_words} words"""


class PromptComposer:
    """
    Builds GenerationRequest values for the session flow and the guide command.

    Only the request is validated here. Whether the model honors the
    acknowledgment / recommendations / question ordering is best-effort.
    """

    def __init__(
        self,
        coaching_max_tokens: int = 700,
        coaching_max_words: int = 350,
        guide_max_tokens: int = 1000,
    ):
        self.coaching_max_tokens = coaching_max_tokens
        self.coaching_max_words = coaching_max_words
        self.guide_max_tokens = guide_max_tokens
        self.persona = build_persona(coaching_max_words)

    @classmethod
    def from_settings(cls, settings) -> "PromptComposer":
        return cls(
            coaching_max_tokens=settings.coaching_max_tokens,
            coaching_max_words=settings.coaching_max_words,
            guide_max_tokens=settings.guide_max_tokens,
        )

    def compose(self, topic: Topic, situation_text: Optional[str]) -> GenerationRequest:
        if situation_text is None or not situation_text.strip():
            raise InvalidInput(
                "Situation text is empty",
                context={"topic_id": topic.id},
            )

        user_content = f"""A manager selected the topic "{topic.label}" and shared this specific situation:

"{situation_text}"

Using the Leadership Code and your coaching expertise:
1. Acknowledge their specific situation with empathy (2 sentences max)
2. Give 3-4 concrete, tailored recommendations for THEIR situation — not generic advice
3. Close with exactly one powerful coaching question to deepen their thinking

Format for chat: use *bold* for key points, bullet points with •, generous line spacing.
Keep under {self.coaching_max_words} words. Be direct and warm. Anchor to Leadership Code principles by name."""

        return GenerationRequest(
            system_instructions=self.persona,
            user_content=user_content,
            max_output_tokens=self.coaching_max_tokens,
            max_words=self.coaching_max_words,
            topic_id=topic.id,
            kind=RequestKind.COACHING,
        )

    def compose_guide_request(self, topic: Topic) -> GenerationRequest:
        """Long-form 1-pager used by the guide command."""
        user_content = f"""Create a concise, high-impact coaching guide on "{topic.label}" for managers.
Include: a bold opening insight, the core WHY, 3 actionable tips, 3 big ideas, and one reflection question.
Write in Adam Grant's voice — research-backed, counterintuitive, direct.
Format as clean text suitable for a one-page guide. Use clear *bold* section labels."""

        return GenerationRequest(
            system_instructions=self.persona,
            user_content=user_content,
            max_output_tokens=self.guide_max_tokens,
            max_words=None,
            topic_id=topic.id,
            kind=RequestKind.GUIDE,
        )
