"""Fixed themes and philosophers served by the API."""
from __future__ import annotations

PHILOSOPHERS: tuple[str, ...] = (
    "Marcus Aurelius",
    "Epictetus",
    "Seneca",
    "Zeno of Citium",
    "Cleanthes",
    "Chrysippus",
    "Cato the Younger",
    "Musonius Rufus",
)

THEMES: tuple[str, ...] = (
    "virtue",
    "acceptance",
    "resilience",
    "self-control",
    "wisdom",
    "mortality",
    "duty",
    "tranquility",
    "courage",
    "justice",
    "perspective",
    "adversity",
    "focus",
    "gratitude",
)

DEFAULT_THEME_LABEL = "general stoic wisdom"
ADVERSITY_PHILOSOPHER = "Marcus Aurelius"


def match_theme(theme: str | None) -> str | None:
    """Return the canonical theme for a case-insensitive match, else None."""
    if not theme:
        return None
    wanted = theme.strip().lower()
    return wanted if wanted in THEMES else None


def attribution(philosopher: str) -> str:
    return f"In the style of {philosopher}"
