"""Sequential batch generation with a fixed pause between upstream calls."""
from __future__ import annotations
import asyncio
import logging
import random
from typing import Sequence

from stoic_quotes.common.catalog import attribution
from stoic_quotes.common.config import Settings
from stoic_quotes.common.prompts import (
    assign_batch_themes,
    build_batch_item_prompt,
    clamp_batch_count,
    pick_philosopher,
)
from stoic_quotes.common.schema import GenerationResult
from stoic_quotes.common.templates import DEFAULT_TEMPLATE, ChatTemplate
from stoic_quotes.serve import generation

LOGGER = logging.getLogger("stoic.api.batch")


async def generate_batch(
    count: int | None,
    themes: Sequence[str] | None,
    settings: Settings,
    *,
    rng: random.Random | None = None,
    template: ChatTemplate = DEFAULT_TEMPLATE,
) -> list[GenerationResult]:
    """
    Generate up to 10 quotes one after another.

    A GenerationError on any item propagates and the items already produced
    are dropped.

    Args:
        count: Requested size; clamped to 1..10, 0 or None means 3.
        themes: Caller themes assigned round-robin, random fixed themes when empty.
        settings: Provider settings; ``batch_delay_s`` is the pause between calls.
    """
    total = clamp_batch_count(count)
    assigned = assign_batch_themes(total, themes, rng)
    results: list[GenerationResult] = []
    for i, theme in enumerate(assigned):
        text = await generation.generate_text(
            build_batch_item_prompt(theme),
            settings,
            template=template,
        )
        results.append(
            GenerationResult(
                text=text,
                attribution=attribution(pick_philosopher(rng=rng)),
                theme=theme,
            )
        )
        if i < total - 1:
            await asyncio.sleep(settings.batch_delay_s)
    LOGGER.info("Generated batch of %d quotes", len(results))
    return results
