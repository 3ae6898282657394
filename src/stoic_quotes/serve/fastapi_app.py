"""FastAPI service generating stoic quotes through DeepSeek.

Endpoints:
- GET  /api/quote/generate   ?theme&philosopher&length
- POST /api/quote/custom     { "situation", "mood", "challenge" }
- GET  /api/quote/daily
- GET  /api/quote/adversity  ?type
- GET  /api/themes
- GET  /api/philosophers
- POST /api/quote/batch      { "count", "themes" }  (PRO/ULTRA)
- GET  /health
- GET  /
"""
from __future__ import annotations
import logging
from datetime import date

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stoic_quotes import __version__
from stoic_quotes.common.catalog import (
    ADVERSITY_PHILOSOPHER,
    DEFAULT_THEME_LABEL,
    PHILOSOPHERS,
    THEMES,
    attribution,
)
from stoic_quotes.common.config import Settings
from stoic_quotes.common.errors import AuthorizationError, GenerationError, StoicAPIError
from stoic_quotes.common.logging_setup import setup_logging
from stoic_quotes.common.prompts import (
    build_adversity_prompt,
    build_custom_prompt,
    build_daily_prompt,
    build_generate_prompt,
    pick_philosopher,
)
from stoic_quotes.common.schema import BatchQuoteIn, CustomQuoteIn, ErrorOut, utc_timestamp
from stoic_quotes.common.templates import ChatTemplate
from stoic_quotes.serve import batch, generation
from stoic_quotes.serve.dependencies import get_chat_template, get_settings
from stoic_quotes.serve.tiers import premium_tier, tier_context

LOGGER = logging.getLogger("stoic.api.app")
setup_logging(get_settings().log_level)

app = FastAPI(
    title="AI-Powered Stoic Quote Generator API",
    version=__version__,
    description="Generate personalized stoic wisdom using AI",
)


def _failure(status_code: int, error: str, message: str | None = None, upgrade_url: str | None = None) -> JSONResponse:
    body = ErrorOut(error=error, message=message, upgradeUrl=upgrade_url)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _generation_failure(error: str, exc: GenerationError) -> JSONResponse:
    LOGGER.error("%s: %s", error, exc.message)
    return _failure(500, error, exc.message)


# Must be added before CORSMiddleware so 500 envelopes still carry CORS headers.
@app.middleware("http")
async def _unhandled_error(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _failure(500, "Internal server error")


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api", dependencies=[Depends(tier_context)])


@app.on_event("startup")
def _log_configuration() -> None:
    settings = get_settings()
    LOGGER.info("DeepSeek API key configured: %s", settings.provider_configured)
    get_chat_template(settings)


@app.exception_handler(AuthorizationError)
async def _authorization_error(request: Request, exc: AuthorizationError) -> JSONResponse:
    return _failure(exc.status_code, exc.message, upgrade_url=exc.upgrade_url)


@app.exception_handler(StoicAPIError)
async def _api_error(request: Request, exc: StoicAPIError) -> JSONResponse:
    return _failure(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return _failure(400, "Invalid request", details or None)


@router.get("/quote/generate")
async def generate_quote(
    theme: str | None = None,
    philosopher: str | None = None,
    length: str = "medium",
    settings: Settings = Depends(get_settings),
    template: ChatTemplate = Depends(get_chat_template),
):
    prompt, _ = build_generate_prompt(theme, length)
    try:
        text = await generation.generate_text(prompt, settings, template=template)
    except GenerationError as e:
        return _generation_failure("Failed to generate quote", e)

    return {
        "success": True,
        "data": {
            "quote": text,
            "attributedTo": attribution(pick_philosopher(philosopher)),
            "theme": theme or DEFAULT_THEME_LABEL,
            "timestamp": utc_timestamp(),
        },
    }


@router.post("/quote/custom")
async def custom_quote(
    body: CustomQuoteIn | None = Body(default=None),
    settings: Settings = Depends(get_settings),
    template: ChatTemplate = Depends(get_chat_template),
):
    body = body or CustomQuoteIn()
    prompt = build_custom_prompt(body.situation, body.mood, body.challenge)
    try:
        text = await generation.generate_text(
            prompt, settings, max_tokens=generation.CUSTOM_MAX_TOKENS, template=template
        )
    except GenerationError as e:
        return _generation_failure("Failed to generate custom quote", e)

    return {
        "success": True,
        "data": {
            "quote": text,
            "attributedTo": attribution(pick_philosopher()),
            "context": body.model_dump(),
            "timestamp": utc_timestamp(),
        },
    }


@router.get("/quote/daily")
async def daily_meditation(
    settings: Settings = Depends(get_settings),
    template: ChatTemplate = Depends(get_chat_template),
):
    today = date.today()
    try:
        text = await generation.generate_text(
            build_daily_prompt(today),
            settings,
            max_tokens=generation.DAILY_MAX_TOKENS,
            template=template,
        )
    except GenerationError as e:
        return _generation_failure("Failed to generate daily meditation", e)

    return {
        "success": True,
        "data": {
            "meditation": text,
            "date": today.isoformat(),
            "timestamp": utc_timestamp(),
        },
    }


@router.get("/quote/adversity")
async def adversity_quote(
    type: str = "general",  # noqa: A002
    settings: Settings = Depends(get_settings),
    template: ChatTemplate = Depends(get_chat_template),
):
    try:
        text = await generation.generate_text(build_adversity_prompt(type), settings, template=template)
    except GenerationError as e:
        return _generation_failure("Failed to generate adversity quote", e)

    return {
        "success": True,
        "data": {
            "quote": text,
            "attributedTo": attribution(ADVERSITY_PHILOSOPHER),
            "theme": "adversity",
            "type": type,
            "timestamp": utc_timestamp(),
        },
    }


@router.get("/themes")
def list_themes():
    return {"success": True, "data": list(THEMES)}


@router.get("/philosophers")
def list_philosophers():
    return {"success": True, "data": list(PHILOSOPHERS)}


@router.post("/quote/batch", dependencies=[Depends(premium_tier)])
async def batch_quotes(
    body: BatchQuoteIn | None = Body(default=None),
    settings: Settings = Depends(get_settings),
    template: ChatTemplate = Depends(get_chat_template),
):
    body = body or BatchQuoteIn()
    try:
        results = await batch.generate_batch(body.count, body.themes, settings, template=template)
    except GenerationError as e:
        return _generation_failure("Failed to generate batch quotes", e)

    return {
        "success": True,
        "data": [r.as_batch_item() for r in results],
        "count": len(results),
        "timestamp": utc_timestamp(),
    }


app.include_router(router)


@app.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "deepseekConfigured": settings.provider_configured,
        "timestamp": utc_timestamp(),
    }


@app.get("/")
def root():
    return {
        "name": "AI-Powered Stoic Quote Generator API",
        "version": __version__,
        "description": "Generate personalized stoic wisdom using AI",
        "poweredBy": "DeepSeek AI",
        "endpoints": {
            "GET /api/quote/generate": "Generate a stoic quote (theme, philosopher, length)",
            "POST /api/quote/custom": "Generate custom quote for your situation",
            "GET /api/quote/daily": "Get daily stoic meditation",
            "GET /api/quote/adversity": "Get quote for overcoming adversity",
            "GET /api/themes": "Get available stoic themes",
            "GET /api/philosophers": "Get stoic philosophers",
            "POST /api/quote/batch": "Generate multiple quotes (PRO only)",
        },
        "documentation": "https://rapidapi.com/your-username/api/stoic-quotes-ai",
    }
