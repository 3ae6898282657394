"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a trailing Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Tier(str, Enum):
    BASIC = "BASIC"
    PRO = "PRO"
    ULTRA = "ULTRA"


PREMIUM_TIERS = frozenset({Tier.PRO, Tier.ULTRA})


@dataclass(frozen=True)
class TierContext:
    """Subscription tier resolved from gateway headers for a single request."""
    tier: Tier = Tier.BASIC
    user: str | None = None

    @property
    def is_premium(self) -> bool:
        return self.tier in PREMIUM_TIERS


@dataclass
class GenerationResult:
    """One generated quote and its attribution."""
    text: str
    attribution: str | None
    theme: str
    timestamp: str | None = None

    def as_batch_item(self) -> dict[str, Any]:
        return {"quote": self.text, "attributedTo": self.attribution, "theme": self.theme}


class CustomQuoteIn(BaseModel):
    situation: str | None = None
    mood: str | None = None
    challenge: str | None = None


class BatchQuoteIn(BaseModel):
    count: int | None = Field(default=None, description="Number of quotes, clamped to 1..10; 0 or absent means 3")
    themes: list[str] = Field(default_factory=list)


class ErrorOut(BaseModel):
    success: bool = False
    error: str
    message: str | None = None
    upgradeUrl: str | None = None
