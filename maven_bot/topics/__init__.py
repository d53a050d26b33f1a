"""
Coaching topics

Static catalog plus the read-only registry used by every other component.
"""

from .catalog import TOPICS
from .models import Topic
from .registry import TopicRegistry, get_topic_registry, validate_topic

__all__ = [
    "TOPICS",
    "Topic",
    "TopicRegistry",
    "get_topic_registry",
    "validate_topic",
]
