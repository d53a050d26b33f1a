"""
Unit Tests: Prompt Composer
"""

from types import SimpleNamespace

import pytest

from maven_bot.ai import PromptComposer, RequestKind, build_persona
from maven_bot.core.error_handling import InvalidInput


@pytest.fixture
def composer():
    return PromptComposer()


def test_compose_embeds_label_and_verbatim_situation(composer, registry):
    topic = registry.get("performance_issues")
    situation = 'My report said "I\'m fine" but missed three deadlines.'

    request = composer.compose(topic, situation)

    assert '"📉 Performance Issues"' in request.user_content
    assert f'"{situation}"' in request.user_content
    assert request.topic_id == "performance_issues"
    assert request.kind is RequestKind.COACHING


def test_compose_asks_for_three_part_reply(composer, registry):
    request = composer.compose(registry.get("team_conflict"), "Two leads keep clashing.")

    acknowledge = request.user_content.index("1. Acknowledge")
    recommend = request.user_content.index("2. Give 3-4 concrete")
    question = request.user_content.index("3. Close with exactly one powerful coaching question")
    assert acknowledge < recommend < question


def test_persona_is_system_instructions_only(composer, registry):
    request = composer.compose(registry.get("giving_feedback"), "Praise feels awkward.")

    assert request.system_instructions == build_persona(350)
    assert "You are Maven" in request.system_instructions
    assert "You are Maven" not in request.user_content
    assert "NO markdown headers" in request.system_instructions


def test_compose_sets_output_ceilings(composer, registry):
    request = composer.compose(registry.get("giving_feedback"), "Praise feels awkward.")

    assert request.max_output_tokens == 700
    assert request.max_words == 350
    assert "under 350 words" in request.system_instructions


@pytest.mark.parametrize("situation", [None, "", "   \n "])
def test_compose_rejects_blank_situation(composer, registry, situation):
    with pytest.raises(InvalidInput):
        composer.compose(registry.get("better_11s"), situation)


def test_guide_request_has_no_word_ceiling(composer, registry):
    request = composer.compose_guide_request(registry.get("new_manager"))

    assert request.kind is RequestKind.GUIDE
    assert request.max_output_tokens == 1000
    assert request.max_words is None
    assert "3 actionable tips, 3 big ideas" in request.user_content


def test_from_settings_uses_configured_limits(registry):
    settings = SimpleNamespace(coaching_max_tokens=400, coaching_max_words=200, guide_max_tokens=900)

    composer = PromptComposer.from_settings(settings)
    request = composer.compose(registry.get("better_11s"), "Weekly 1:1s feel like status updates.")

    assert request.max_output_tokens == 400
    assert request.max_words == 200
    assert "under 200 words" in request.system_instructions
    assert composer.compose_guide_request(registry.get("better_11s")).max_output_tokens == 900
