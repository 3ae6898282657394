from __future__ import annotations

import random
from datetime import date

import pytest

from stoic_quotes.common.catalog import PHILOSOPHERS, THEMES, match_theme
from stoic_quotes.common.errors import ValidationError
from stoic_quotes.common.prompts import (
    assign_batch_themes,
    build_adversity_prompt,
    build_batch_item_prompt,
    build_custom_prompt,
    build_daily_prompt,
    build_generate_prompt,
    clamp_batch_count,
    pick_philosopher,
)


def test_fixed_lists() -> None:
    assert len(THEMES) == 14
    assert len(PHILOSOPHERS) == 8
    assert "self-control" in THEMES
    assert "Musonius Rufus" in PHILOSOPHERS


@pytest.mark.parametrize("theme", THEMES)
def test_generate_prompt_uses_known_theme(theme: str) -> None:
    prompt, used = build_generate_prompt(theme)
    assert used == theme
    assert prompt.startswith(f"Generate a profound stoic quote about {theme}. ")


def test_generate_prompt_theme_is_case_insensitive() -> None:
    _, used = build_generate_prompt("CoUrAgE")
    assert used == "courage"
    assert match_theme("  Virtue ") == "virtue"


@pytest.mark.parametrize("theme", [None, "", "happiness"])
def test_generate_prompt_random_theme_fallback(theme: str | None) -> None:
    prompt, used = build_generate_prompt(theme, rng=random.Random(7))
    assert used in THEMES
    assert f"about {used}." in prompt


@pytest.mark.parametrize(
    "length,directive",
    [
        ("short", "Keep it to one sentence, maximum 15 words."),
        ("long", "Make it 2-3 sentences with deep wisdom."),
        ("medium", "Keep it to 1-2 sentences, around 20-30 words."),
        ("whatever", "Keep it to 1-2 sentences, around 20-30 words."),
        (None, "Keep it to 1-2 sentences, around 20-30 words."),
    ],
)
def test_generate_prompt_length_directive(length: str | None, directive: str) -> None:
    prompt, _ = build_generate_prompt("focus", length)
    assert prompt.endswith(directive)


def test_custom_prompt_includes_present_fields_only() -> None:
    prompt = build_custom_prompt(situation="a hard week", challenge="a deadline")
    assert prompt == (
        "Generate a stoic quote that addresses: Situation: a hard week. "
        "Challenge: a deadline. Provide stoic wisdom to help with this situation."
    )
    assert "Current mood" not in prompt


def test_custom_prompt_requires_a_field() -> None:
    with pytest.raises(ValidationError):
        build_custom_prompt()
    with pytest.raises(ValidationError):
        build_custom_prompt("", "", None)


def test_daily_prompt_embeds_date() -> None:
    prompt = build_daily_prompt(date(2026, 10, 18))
    assert "Sunday, October 18." in prompt
    assert "reflection question" in prompt


def test_adversity_prompt_default_type() -> None:
    assert "overcoming general adversity" in build_adversity_prompt()
    assert "overcoming financial adversity" in build_adversity_prompt("financial")


@pytest.mark.parametrize("count,expected", [(None, 3), (0, 3), (1, 1), (5, 5), (10, 10), (15, 10), (-4, 1)])
def test_clamp_batch_count(count: int | None, expected: int) -> None:
    assert clamp_batch_count(count) == expected


def test_batch_themes_round_robin() -> None:
    assert assign_batch_themes(5, ["A", "B"]) == ["A", "B", "A", "B", "A"]


def test_batch_themes_random_when_none_given() -> None:
    themes = assign_batch_themes(6, [], rng=random.Random(1))
    assert len(themes) == 6
    assert all(t in THEMES for t in themes)


def test_batch_item_prompt() -> None:
    assert build_batch_item_prompt("duty") == "Generate a unique stoic quote about duty. Make it concise and powerful."


def test_pick_philosopher() -> None:
    assert pick_philosopher("Seneca") == "Seneca"
    assert pick_philosopher("Plato", rng=random.Random(3)) in PHILOSOPHERS
    assert pick_philosopher(None) in PHILOSOPHERS
