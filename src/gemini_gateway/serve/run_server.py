"""Run the gateway with uvicorn."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from gemini_gateway.common.config import load_settings
from gemini_gateway.common.logging_setup import setup_logging
from gemini_gateway.serve.fastapi_app import create_app

LOGGER = logging.getLogger("gemini_gateway.server")

def main() -> None:
    setup_logging()
    ap = argparse.ArgumentParser(description="Serve the Gemini gateway")
    ap.add_argument("--config", default=None, help="YAML config path")
    ap.add_argument("--host", default=None)
    ap.add_argument("--port", type=int, default=None)
    args = ap.parse_args()

    settings = load_settings(args.config)
    host = args.host or settings.host
    port = args.port if args.port is not None else settings.port
    app = create_app(settings)

    LOGGER.info("Gemini gateway listening on http://%s:%s", host, port)
    if not settings.api_key:
        LOGGER.warning("GEMINI_API_KEY is not set; generation requests will fail")
    LOGGER.info('Text generation endpoint: POST /generate-text with { "prompt": "Your text here" }')
    for kind in ("image", "document", "audio"):
        LOGGER.info(
            "%s endpoint: POST /generate-from-%s with form-data (prompt, %s) using %s",
            kind.capitalize(), kind, kind, settings.model_for(kind),
        )
    uvicorn.run(app, host=host, port=port)

if __name__ == "__main__":
    main()
