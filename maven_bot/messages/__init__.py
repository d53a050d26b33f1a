"""
Maven messages

- segments: platform-neutral reply building blocks
- formatters: pure functions producing ordered segment tuples
- constants: fixed copy and action ids
"""

from .constants import BranchAction
from .formatters import (
    closing_fallback_text,
    coaching_fallback_text,
    deep_dive_fallback_text,
    enumerate_items,
    format_closing,
    format_coaching_reply,
    format_deep_dive,
    format_guide_help,
    format_guide_pending,
    format_intake,
    format_plain,
    format_standalone_guide,
    guide_fallback_text,
    guide_not_found_text,
)
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

__all__ = [
    "BranchAction",
    "closing_fallback_text",
    "coaching_fallback_text",
    "deep_dive_fallback_text",
    "enumerate_items",
    "format_closing",
    "format_coaching_reply",
    "format_deep_dive",
    "format_guide_help",
    "format_guide_pending",
    "format_intake",
    "format_plain",
    "format_standalone_guide",
    "guide_fallback_text",
    "guide_not_found_text",
    "Actions",
    "Button",
    "ButtonStyle",
    "Context",
    "Divider",
    "FormDescription",
    "Header",
    "MessageSegment",
    "Option",
    "Section",
    "SelectInput",
    "TextInput",
]
