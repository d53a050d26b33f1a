"""
Message segments - platform-neutral building blocks of a bot reply

A reply is an ordered tuple of segments. Renderers must keep the order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class ButtonStyle(Enum):
    DEFAULT = "default"
    PRIMARY = "primary"


@dataclass(frozen=True)
class Header:
    text: str


@dataclass(frozen=True)
class Section:
    text: str


@dataclass(frozen=True)
class Divider:
    pass


@dataclass(frozen=True)
class Context:
    """Small footer text."""

    text: str


@dataclass(frozen=True)
class Button:
    label: str
    action_id: str
    value: str
    style: ButtonStyle = ButtonStyle.DEFAULT


@dataclass(frozen=True)
class Actions:
    """Group of interactive buttons."""

    block_id: str
    buttons: Tuple[Button, ...]


@dataclass(frozen=True)
class Option:
    label: str
    value: str


@dataclass(frozen=True)
class SelectInput:
    block_id: str
    label: str
    placeholder: str
    options: Tuple[Option, ...]


@dataclass(frozen=True)
class TextInput:
    block_id: str
    label: str
    hint: Optional[str] = None
    placeholder: Optional[str] = None
    multiline: bool = False


MessageSegment = Union[Header, Section, Divider, Context, Actions, SelectInput, TextInput]


@dataclass(frozen=True)
class FormDescription:
    """Everything a host needs to render the intake form."""

    callback_id: str
    title: str
    submit_label: str
    close_label: str
    segments: Tuple[MessageSegment, ...] = field(default_factory=tuple)

    def input(self, block_id: str) -> Union[SelectInput, TextInput]:
        for segment in self.segments:
            if isinstance(segment, (SelectInput, TextInput)) and segment.block_id == block_id:
                return segment
        raise KeyError(block_id)
