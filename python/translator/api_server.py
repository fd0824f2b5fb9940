import os
import logging
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from translator.config import Settings, configure_logging, load_settings
from translator.convert_router import router as convert_router
from translator.gemini_client import GeminiClient

logger = logging.getLogger("CodeTranslator.API")

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


def create_app(settings: Optional[Settings] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    설정은 생성 시점에 주입됩니다. settings가 없으면 load_settings()로 한 번 읽습니다.
    """
    settings = settings or load_settings()

    app = FastAPI(title="Code Translator")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.upstream = GeminiClient(settings, transport=transport)

    if not settings.has_credentials:
        logger.warning("Gemini API URL or key is missing; conversions will fail until configured")

    app.include_router(convert_router)

    if os.path.isdir(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    else:
        logger.warning(f"Static directory not found at {STATIC_DIR}")

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "code_translator"}

    @app.get("/", include_in_schema=False)
    async def index():
        return FileResponse(os.path.join(STATIC_DIR, "index.html"))

    return app


def run_api_server(settings: Optional[Settings] = None):
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info(f"Serving Code Translator on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--host", default=None)
    parser.add_argument("--config", default=None)
    args = parser.parse_args()

    settings = load_settings(args.config)
    if args.port:
        settings.port = args.port
    if args.host:
        settings.host = args.host
    run_api_server(settings)
