"""Prompt construction for each quote operation.

All builders are pure: randomness is drawn from the ``rng`` argument
(a module-level generator when omitted) and the date can be passed in.
"""
from __future__ import annotations
import random
from datetime import date
from typing import Sequence

from stoic_quotes.common.catalog import PHILOSOPHERS, THEMES, match_theme
from stoic_quotes.common.errors import ValidationError

LENGTH_DIRECTIVES = {
    "short": "Keep it to one sentence, maximum 15 words.",
    "long": "Make it 2-3 sentences with deep wisdom.",
}
DEFAULT_LENGTH_DIRECTIVE = "Keep it to 1-2 sentences, around 20-30 words."

MAX_BATCH = 10
DEFAULT_BATCH = 3

_DEFAULT_RNG = random.Random()


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else _DEFAULT_RNG


def random_theme(rng: random.Random | None = None) -> str:
    return _rng(rng).choice(THEMES)


def pick_philosopher(requested: str | None = None, rng: random.Random | None = None) -> str:
    """Honour an exact philosopher name from the fixed list, otherwise draw one at random."""
    if requested and requested in PHILOSOPHERS:
        return requested
    return _rng(rng).choice(PHILOSOPHERS)


def build_generate_prompt(
    theme: str | None = None,
    length: str | None = "medium",
    rng: random.Random | None = None,
) -> tuple[str, str]:
    """
    Build the prompt for a single quote.

    Args:
        theme: Requested theme; unknown or missing themes are replaced by a random one.
        length: "short", "long" or anything else for the medium directive.
        rng: Random source.

    Returns:
        (prompt, theme actually used in the prompt)
    """
    used = match_theme(theme) or random_theme(rng)
    directive = LENGTH_DIRECTIVES.get((length or "").lower(), DEFAULT_LENGTH_DIRECTIVE)
    return f"Generate a profound stoic quote about {used}. {directive}", used


def build_custom_prompt(
    situation: str | None = None,
    mood: str | None = None,
    challenge: str | None = None,
) -> str:
    if not (situation or mood or challenge):
        raise ValidationError("Please provide at least one of: situation, mood, or challenge")
    prompt = "Generate a stoic quote that addresses: "
    if situation:
        prompt += f"Situation: {situation}. "
    if mood:
        prompt += f"Current mood: {mood}. "
    if challenge:
        prompt += f"Challenge: {challenge}. "
    return prompt + "Provide stoic wisdom to help with this situation."


def format_meditation_date(day: date) -> str:
    """Format as e.g. "Sunday, October 18"."""
    return f"{day:%A}, {day:%B} {day.day}"


def build_daily_prompt(today: date | None = None) -> str:
    today = today or date.today()
    return (
        f"Generate a stoic daily meditation for {format_meditation_date(today)}. "
        "Include a main teaching and a practical reflection question."
    )


def build_adversity_prompt(kind: str | None = "general") -> str:
    kind = kind or "general"
    return f"Generate a powerful stoic quote about overcoming {kind} adversity. Make it inspiring and actionable."


def clamp_batch_count(count: int | None) -> int:
    """0 or None means the default batch size; everything else is clamped to 1..10."""
    if not count:
        return DEFAULT_BATCH
    return max(1, min(int(count), MAX_BATCH))


def assign_batch_themes(count: int, themes: Sequence[str] | None = None, rng: random.Random | None = None) -> list[str]:
    """Round-robin over caller themes, or random fixed themes when none are given."""
    themes = [t for t in (themes or []) if t]
    if themes:
        return [themes[i % len(themes)] for i in range(count)]
    return [random_theme(rng) for _ in range(count)]


def build_batch_item_prompt(theme: str) -> str:
    return f"Generate a unique stoic quote about {theme}. Make it concise and powerful."
