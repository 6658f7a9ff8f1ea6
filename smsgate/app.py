from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from .config import Settings, get_settings
from .logging_config import logger, setup_logging
from .routes import health, monitoring, sms
from .services.rate_limiter import RateLimiterService


def create_app(settings: Optional[Settings] = None, service: Optional[RateLimiterService] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    limiter = service or RateLimiterService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        limiter.start()
        try:
            yield
        finally:
            limiter.stop()

    app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)
    app.state.rate_limiter = limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:  # pragma: no cover - wiring
        logger.warning("value.error", path=str(request.url), reason=str(exc))
        return JSONResponse(status_code=400, content={"error_code": "VALUE_ERROR", "message": str(exc)})

    app.include_router(health.router)
    app.include_router(sms.router)
    app.include_router(monitoring.router)

    _mount_frontend(app, settings.frontend_dir)
    logger.info("app.start", name=settings.app_name)
    return app


def _mount_frontend(app: FastAPI, frontend_dir: Optional[Path]) -> None:
    build_root = frontend_dir.resolve() if frontend_dir else None
    index_path = build_root / "index.html" if build_root else None

    def frontend_available() -> bool:
        return index_path is not None and index_path.is_file()

    @app.get("/", include_in_schema=False)
    async def root() -> Response:
        if frontend_available():
            return FileResponse(index_path)
        return JSONResponse({"message": "SMS Rate Limiter is running."})

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> FileResponse:
        if not frontend_available():
            raise HTTPException(status_code=404)
        if full_path.startswith("api/") or full_path == "api":
            raise HTTPException(status_code=404)
        if full_path in {"docs", "redoc", "openapi.json"}:
            raise HTTPException(status_code=404)
        candidate_path = (build_root / full_path).resolve()
        if build_root not in candidate_path.parents and candidate_path != index_path:
            raise HTTPException(status_code=404)
        if candidate_path.is_file():
            return FileResponse(candidate_path)
        return FileResponse(index_path)


app = create_app()
