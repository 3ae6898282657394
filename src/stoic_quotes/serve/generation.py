"""Chat-completion client for the DeepSeek (OpenAI-compatible) API."""
from __future__ import annotations
import logging
import time
from typing import Any

import httpx

from stoic_quotes.common.config import Settings
from stoic_quotes.common.errors import GenerationError
from stoic_quotes.common.templates import DEFAULT_TEMPLATE, ChatTemplate

LOGGER = logging.getLogger("stoic.api.generation")

DEFAULT_MAX_TOKENS = 150
CUSTOM_MAX_TOKENS = 200
DAILY_MAX_TOKENS = 250


def build_payload(
    prompt: str,
    settings: Settings,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    template: ChatTemplate = DEFAULT_TEMPLATE,
) -> dict[str, Any]:
    return {
        "model": settings.model,
        "messages": template.messages(prompt),
        "max_tokens": max_tokens,
        "temperature": settings.temperature,
        "top_p": settings.top_p,
        "stream": False,
    }


def extract_text(data: Any) -> str:
    """Return the trimmed content of the first choice or raise GenerationError."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        LOGGER.error("Malformed response: %s", e)
        raise GenerationError("Malformed response from generation provider") from e
    text = str(content or "").strip()
    if not text:
        raise GenerationError("Generation provider returned empty content")
    return text


async def generate_text(
    prompt: str,
    settings: Settings,
    *,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    template: ChatTemplate = DEFAULT_TEMPLATE,
) -> str:
    """
    Send one chat-completion request and return the generated text.

    Args:
        prompt: User instruction.
        settings: Provider credential, URL and sampling parameters.
        max_tokens: Output budget.
        template: System message and user wrapper the prompt is rendered into.

    Raises:
        GenerationError: missing credential, transport/HTTP failure or unusable content.
    """
    if not settings.api_key:
        raise GenerationError("DEEPSEEK_API_KEY is not configured")

    headers = {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
    }
    payload = build_payload(prompt, settings, max_tokens, template)

    start = time.time()
    try:
        async with httpx.AsyncClient(timeout=settings.timeout_s) as client:
            r = await client.post(settings.completions_url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()
    except httpx.HTTPStatusError as e:
        LOGGER.error("DeepSeek API error %s: %s", e.response.status_code, e.response.text)
        raise GenerationError(f"Generation provider returned HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, ValueError) as e:
        LOGGER.error("DeepSeek request failed: %s", e)
        raise GenerationError(f"Generation request failed: {e}") from e

    text = extract_text(data)
    LOGGER.debug("Generated %d chars in %dms", len(text), int((time.time() - start) * 1000))
    return text
