import logging
import os
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from api.config import Settings
from api.routers import health, tailor
from llm.chat_client import ChatCompletionClient
from pipeline import TailorPipeline
from utils.errors import TailorError
from utils.logging_utils import request_context, setup_logging

# Module logger (relies on configured handlers)
logger = logging.getLogger("magiccv.api")


def build_pipeline(settings: Settings) -> TailorPipeline:
    llm = ChatCompletionClient(
        api_key=settings.api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout_seconds,
        max_retries=settings.llm_max_retries,
        retry_base_delay=settings.llm_retry_base_delay,
    )
    return TailorPipeline(llm, settings)


def create_app(settings: Optional[Settings] = None, pipeline: Optional[TailorPipeline] = None) -> FastAPI:
    """Build the API around an explicit configuration object."""
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)
    settings.ensure_dirs()
    if not settings.api_key:
        logger.warning("DEEPSEEK_API_KEY not set; generation requests will fail until it is configured")

    app = FastAPI(title="Magic CV API", version="0.1.0")
    app.state.settings = settings
    app.state.pipeline = pipeline or build_pipeline(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        """Attach a correlation id to every request and basic access log lines."""
        with request_context(request.headers.get("x-request-id")) as rid:
            start = time.time()
            logger.info("Inbound request %s %s", request.method, request.url.path)
            response = await call_next(request)
            duration_ms = int((time.time() - start) * 1000)
            logger.info("Completed %s %s -> %s in %dms", request.method, request.url.path, response.status_code, duration_ms)
            response.headers["X-Request-ID"] = rid
            return response

    @app.exception_handler(TailorError)
    async def tailor_error_handler(request: Request, exc: TailorError):
        logger.warning("Request failed: %s: %s", exc.__class__.__name__, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        return JSONResponse(status_code=500, content={"error": f"Invalid request: {fields}"})

    app.include_router(health.router)
    app.include_router(tailor.router)

    if settings.static_dir and os.path.isdir(settings.static_dir):
        # Mounted last so the API routes take precedence
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        @app.get("/")
        async def root():
            return {"message": "Magic CV API. POST a CV to /api/tailor-cv."}

    return app


def run() -> None:
    settings = Settings.from_env()
    app = create_app(settings)
    logger.info("Magic CV running on %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
