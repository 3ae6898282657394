"""FastAPI dependencies for process-wide settings."""
from __future__ import annotations
from functools import lru_cache

from fastapi import Depends

from stoic_quotes.common.config import Settings, load_settings
from stoic_quotes.common.templates import ChatTemplate, load_chat_template


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=4)
def _template_for(path: str) -> ChatTemplate:
    return load_chat_template(path)


def get_chat_template(settings: Settings = Depends(get_settings)) -> ChatTemplate:
    return _template_for(settings.template_path)
