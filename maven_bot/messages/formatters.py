"""
Response Formatter - turns topics and generated text into ordered segments

All functions are pure. A topic is validated before the first segment is
built, so callers get either a complete sequence or MalformedTopic.
"""

from typing import List, Optional, Sequence, Tuple

from ..core.error_handling import InvalidInput
from ..topics.models import Topic
from ..topics.registry import TopicRegistry, get_topic_registry, validate_topic
from . import constants as c
from .constants import BranchAction
from .segments import (
    Actions,
    Button,
    ButtonStyle,
    Context,
    Divider,
    FormDescription,
    Header,
    MessageSegment,
    Option,
    Section,
    SelectInput,
    TextInput,
)

Segments = Tuple[MessageSegment, ...]


def enumerate_items(items: Sequence[str]) -> List[Section]:
    """One section per item, prefixed ``1.``, ``2.``... in the given order."""
    return [Section(f"{i}. {item}") for i, item in enumerate(items, start=1)]


def format_intake(registry: Optional[TopicRegistry] = None) -> FormDescription:
    registry = registry or get_topic_registry()

    return FormDescription(
        callback_id=c.INTAKE_CALLBACK_ID,
        title=c.INTAKE_TITLE,
        submit_label=c.INTAKE_SUBMIT,
        close_label=c.INTAKE_CLOSE,
        segments=(
            Section(c.INTAKE_WELCOME),
            Divider(),
            SelectInput(
                block_id=c.TOPIC_BLOCK_ID,
                label=c.TOPIC_LABEL,
                placeholder=c.TOPIC_PLACEHOLDER,
                options=tuple(Option(label=topic.label, value=topic.id) for topic in registry.list()),
            ),
            TextInput(
                block_id=c.QUESTION_BLOCK_ID,
                label=c.QUESTION_LABEL,
                hint=c.QUESTION_HINT,
                placeholder=c.QUESTION_PLACEHOLDER,
                multiline=True,
            ),
        ),
    )


def format_coaching_reply(topic: Topic, generated_text: str, display_name: str) -> Segments:
    validate_topic(topic)
    if not generated_text or not generated_text.strip():
        raise InvalidInput("Generated coaching text is empty", context={"topic_id": topic.id})

    name = (display_name or "").strip() or c.DEFAULT_DISPLAY_NAME

    return (
        Header(f"Maven Coaching {topic.emoji}"),
        Section(f"*{topic.label}* — Coaching for {name}"),
        Divider(),
        Section(c.WHY_LABEL),
        Section(topic.why),
        Divider(),
        Section(c.TIPS_LABEL),
        *enumerate_items(topic.tips),
        Divider(),
        Section(c.COACHING_LABEL),
        Section(generated_text.strip()),
        Divider(),
        Section(c.OPT_IN_TEXT),
        Actions(
            block_id=f"dig_deeper_actions_{topic.id}",
            buttons=(
                Button(
                    label=c.DIG_DEEPER_BUTTON,
                    action_id=BranchAction.DIG_DEEPER.value,
                    value=topic.id,
                    style=ButtonStyle.PRIMARY,
                ),
                Button(
                    label=c.DONE_BUTTON,
                    action_id=BranchAction.DONE.value,
                    value=topic.id,
                ),
            ),
        ),
    )


def format_deep_dive(topic: Topic) -> Segments:
    validate_topic(topic)

    return (
        Divider(),
        Header(f"📚 Dig Deeper — {topic.title}"),
        Section(topic.deep_dive_intro),
        Divider(),
        Section(c.BIG_IDEAS_LABEL),
        *enumerate_items(topic.big_ideas),
        Divider(),
        Section(c.KEEP_GOING_TEXT.format(prompt=topic.dig_deeper_prompt)),
        Context(c.DEEP_DIVE_FOOTER),
    )


def format_closing() -> Segments:
    return (
        Divider(),
        Section(c.CLOSING_TEXT),
        Context(c.CLOSING_FOOTER),
    )


def format_standalone_guide(topic: Topic, guide_text: str) -> Segments:
    validate_topic(topic)
    if not guide_text or not guide_text.strip():
        raise InvalidInput("Guide text is empty", context={"topic_id": topic.id})

    return (
        Header(c.GUIDE_HEADER.format(label=topic.label)),
        Divider(),
        Section(guide_text.strip()),
        Divider(),
        Context(c.GUIDE_FOOTER),
    )


def format_guide_help(registry: Optional[TopicRegistry] = None) -> Segments:
    registry = registry or get_topic_registry()
    listing = "\n".join(f"• `{slug}`" for slug in registry.slugs())

    return (
        Section(f"{c.GUIDE_HELP_TITLE}\n\n{c.GUIDE_HELP_USAGE}\n\nAvailable topics:\n{listing}"),
    )


def format_guide_pending(topic: Topic) -> Segments:
    return (Section(c.GUIDE_PENDING.format(label=topic.label)),)


def format_plain(text: str) -> Segments:
    """Single-section reply for short notices and errors."""
    return (Section(text),)


def human_join(items: Sequence[str]) -> str:
    """``a, b, or c``"""
    items = list(items)
    if len(items) <= 2:
        return " or ".join(items)
    return f"{', '.join(items[:-1])}, or {items[-1]}"


def guide_not_found_text(slug: str, registry: Optional[TopicRegistry] = None) -> str:
    registry = registry or get_topic_registry()
    return c.GUIDE_NOT_FOUND.format(slug=slug, choices=human_join(registry.slugs()))


# Fallback text for notifications and clients that cannot show segments

def coaching_fallback_text(topic: Topic) -> str:
    return f"Maven coaching on {topic.label}"


def deep_dive_fallback_text(topic: Topic) -> str:
    return f"Digging deeper on {topic.label}"


def closing_fallback_text() -> str:
    return "Maven session complete."


def guide_fallback_text(topic: Topic) -> str:
    return c.GUIDE_HEADER.format(label=topic.label)
