"""Generate a single stoic quote from the command line."""
from __future__ import annotations
import argparse
import asyncio
import logging
import sys

from stoic_quotes.common.catalog import THEMES, attribution
from stoic_quotes.common.config import load_settings
from stoic_quotes.common.errors import GenerationError
from stoic_quotes.common.logging_setup import setup_logging
from stoic_quotes.common.prompts import build_generate_prompt, pick_philosopher
from stoic_quotes.common.templates import load_chat_template
from stoic_quotes.serve import generation

LOGGER = logging.getLogger("stoic.cli")


async def run_quote(theme: str | None, length: str, philosopher: str | None, cfg_path: str | None = None) -> str:
    """
    Generate one quote and format it with its attribution.

    Args:
        theme: One of the fixed themes; random when omitted.
        length: short, medium or long.
        philosopher: Attribution override from the fixed list.
        cfg_path: YAML config path.
    """
    settings = load_settings(cfg_path)
    prompt, used = build_generate_prompt(theme, length)
    LOGGER.info("Theme: %s", used)
    text = await generation.generate_text(
        prompt, settings, template=load_chat_template(settings.template_path)
    )
    return f"{text}\n  - {attribution(pick_philosopher(philosopher))}"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Generate a stoic quote via DeepSeek")
    ap.add_argument("--theme", choices=THEMES, default=None)
    ap.add_argument("--length", choices=("short", "medium", "long"), default="medium")
    ap.add_argument("--philosopher", default=None)
    ap.add_argument("--cfg", default=None, help="Config path")
    args = ap.parse_args(argv)

    setup_logging()
    try:
        out = asyncio.run(run_quote(args.theme, args.length, args.philosopher, args.cfg))
    except GenerationError as e:
        LOGGER.error("Generation failed: %s", e)
        return 1
    print(out)
    return 0

if __name__ == "__main__":
    sys.exit(main())
