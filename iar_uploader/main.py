from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from iar_uploader.core.config import Settings, get_settings
from iar_uploader.core.exceptions import AppException, app_exception_handler
from iar_uploader.core.logging import get_logger, setup_logging
from iar_uploader.infrastructure.db.connection import database_manager
from iar_uploader.interfaces.http.middleware.logging import LoggingMiddleware
from iar_uploader.interfaces.http.routes import api_router, pages_router

STATIC_DIR = Path(__file__).resolve().parent / "static"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    setup_logging(settings.logging)
    logger.info("Starting %s %s", settings.project_name, settings.version)

    try:
        yield
    finally:
        # The engine is created lazily by the first request that needs it
        database_manager.dispose()
        logger.info("Database engine disposed, shutting down")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.project_name,
        description="Upload IAR monitoring CSV files into SQL Server",
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(AppException, app_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle general exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) if settings.debug else "Internal server error occurred"},
        )

    @app.get("/health")
    def health_check() -> dict:
        """Liveness check; does not touch the database."""
        return {"status": "healthy", "version": settings.version}

    app.include_router(api_router, prefix="/api")
    app.include_router(pages_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_application()


def main():
    settings = get_settings()
    uvicorn.run(
        "iar_uploader.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
        access_log=True,
        server_header=False,
    )


if __name__ == "__main__":
    main()
