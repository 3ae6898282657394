"""Subscription tier gate.

The fronting gateway (RapidAPI) forwards the caller's plan in
``X-RapidAPI-Subscription``. The value is trusted as-is unless a proxy secret
is configured, in which case it is only honoured alongside a matching
``X-RapidAPI-Proxy-Secret``.
"""
from __future__ import annotations
import hmac
import logging
from typing import Mapping

from fastapi import Depends, Request

from stoic_quotes.common.config import Settings
from stoic_quotes.common.errors import AuthorizationError
from stoic_quotes.common.schema import Tier, TierContext
from stoic_quotes.serve.dependencies import get_settings

LOGGER = logging.getLogger("stoic.api.tiers")

TIER_HEADER = "x-rapidapi-subscription"
USER_HEADER = "x-rapidapi-user"
SECRET_HEADER = "x-rapidapi-proxy-secret"


def parse_tier(value: str | None) -> Tier:
    if not value:
        return Tier.BASIC
    try:
        return Tier(value.strip().upper())
    except ValueError:
        return Tier.BASIC


def resolve_tier(headers: Mapping[str, str], proxy_secret: str | None = None) -> TierContext:
    """
    Derive the tier for a request. Never raises; anything unexpected is BASIC.

    Args:
        headers: Inbound request headers (case-insensitive mapping).
        proxy_secret: When set, the tier header requires a matching proxy secret.
    """
    user = headers.get(USER_HEADER)
    tier = parse_tier(headers.get(TIER_HEADER))
    if proxy_secret and tier is not Tier.BASIC:
        supplied = headers.get(SECRET_HEADER) or ""
        if not hmac.compare_digest(supplied.encode(), proxy_secret.encode()):
            LOGGER.warning("Ignoring %s tier for user %s: proxy secret mismatch", tier.value, user)
            tier = Tier.BASIC
    return TierContext(tier=tier, user=user)


def require_premium(ctx: TierContext, upgrade_url: str | None = None) -> None:
    if not ctx.is_premium:
        raise AuthorizationError("This endpoint requires PRO subscription or higher", upgrade_url)


def tier_context(request: Request, settings: Settings = Depends(get_settings)) -> TierContext:
    """Resolve the tier once per request and log the call with it."""
    ctx = resolve_tier(request.headers, settings.proxy_secret)
    client = request.client.host if request.client else "-"
    LOGGER.info(
        "%s %s - user=%s ip=%s tier=%s",
        request.method,
        request.url.path,
        ctx.user or "-",
        client,
        ctx.tier.value,
    )
    return ctx


def premium_tier(
    ctx: TierContext = Depends(tier_context),
    settings: Settings = Depends(get_settings),
) -> TierContext:
    """Dependency for PRO/ULTRA-only routes; runs before the request body is used."""
    require_premium(ctx, settings.upgrade_url)
    return ctx
