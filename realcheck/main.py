import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

# --- FASTAPI IMPORTS ---
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import uvicorn

# --- LOCAL MODULES ---
from realcheck.api.analyze import router as analyze_router
from realcheck.core.config import Settings, load_settings
from realcheck.core.errors import ConfigError, register_exception_handlers
from realcheck.services.detector_service import ImageDetector, ModelClient
from realcheck.services.gemini_client import GeminiClient
from realcheck.services.prompt_manager import PromptManager
from realcheck.utils.middleware import BodySizeLimitMiddleware, TimingMiddleware

logger = logging.getLogger(__name__)


# --- LOGGING SETUP ---
def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def create_app(settings: Settings, client: Optional[ModelClient] = None) -> FastAPI:
    """Build the API around an explicit Settings object.

    ``client`` replaces the Gemini client, which is otherwise built from
    ``settings``.
    """
    if client is None:
        client = GeminiClient(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            timeout=settings.ai_timeout,
        )
    detector = ImageDetector(client, PromptManager(settings.prompts_dir))

    # --- LIFESPAN CONTEXT MANAGER ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"🚀 Starting RealCheck API (model: {settings.gemini_model})")
        yield
        logger.info("🔄 Shutting down RealCheck API")

    app = FastAPI(title="RealCheck API", lifespan=lifespan)
    app.state.settings = settings
    app.state.detector = detector

    # --- MIDDLEWARE ---
    # Last added is outermost: CORS -> log_requests -> timing -> body limit.
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(TimingMiddleware, slow_ms=settings.slow_request_ms)

    # --- REQUEST LOGGING ---
    # Unhandled errors become JSON here, inside CORS, so they keep CORS headers.
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        path = request.url.path
        logger.info(f"📥 {request.method} {path}")
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"💥 Error causing 500: {path} - {e}", exc_info=True)
            return JSONResponse(status_code=500, content={"error": "Internal server error."})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # --- ROUTER MOUNTING ---
    app.include_router(analyze_router, tags=["Analysis"])

    # --- HEALTH ---
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "RealCheck API server is running."

    @app.get("/health")
    async def health():
        return {
            "status": "online",
            "model": settings.gemini_model,
            "timestamp": datetime.now().isoformat(),
        }

    return app


# --- MAIN ---
def run() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        logger.critical(f"❌ {e}")
        sys.exit(1)

    setup_logging(settings.log_level)
    logger.info(f"Server starting on {settings.host}:{settings.port}")
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
