"""Launch the API with uvicorn."""
from __future__ import annotations
import argparse

import uvicorn

from stoic_quotes.common.config import load_settings
from stoic_quotes.common.logging_setup import setup_logging


def main() -> None:
    settings = load_settings()
    ap = argparse.ArgumentParser(description="Serve the Stoic Quotes API")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    ap.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    args = ap.parse_args()

    setup_logging(settings.log_level)
    uvicorn.run(
        "stoic_quotes.serve.fastapi_app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )

if __name__ == "__main__":
    main()
