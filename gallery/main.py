"""Photo Gallery Server - FastAPI Application"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from gallery.api.routes import files_router, router as api_router
from gallery.core.config import DEFAULT_ADMIN_PASSWORD, Settings
from gallery.core.errors import GalleryError
from gallery.core.logging import get_logger, setup_logging
from gallery.db.session import Database
from gallery.services import IngestionPipeline, ThumbnailGenerator, VisibilityPolicy
from gallery.services.accounts import AdminCredentials
from gallery.services.login_sessions import purge_expired

VERSION = "0.1.0"

logger = get_logger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": ...}``."""

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(request: Request, exc: GalleryError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "details": str(exc)},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its database and services wired in."""
    settings = settings or Settings()
    database = Database(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan - startup and shutdown."""
        setup_logging(settings.debug)
        settings.ensure_directories()
        if settings.admin_password == DEFAULT_ADMIN_PASSWORD:
            logger.warning("ADMIN_PASSWORD is default. Set ADMIN_PASSWORD in production.")

        await database.init()
        async with database.session_maker() as db:
            purged = await purge_expired(db)
        logger.info(
            "Gallery started",
            uploads_dir=str(settings.uploads_dir),
            expired_sessions_purged=purged,
        )

        yield

        await database.dispose()

    app = FastAPI(
        title="Photo Gallery API",
        description="Self-hosted photo gallery with albums, likes and comments",
        version=VERSION,
        lifespan=lifespan,
    )

    thumbnails = ThumbnailGenerator(
        uploads_dir=settings.uploads_dir,
        thumbs_dir=settings.thumbs_dir,
        size=(settings.thumbnail_width, settings.thumbnail_height),
        quality=settings.thumbnail_quality,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.thumbnails = thumbnails
    app.state.pipeline = IngestionPipeline(
        uploads_dir=settings.uploads_dir,
        thumbnails=thumbnails,
        allow_anonymous=settings.allow_anonymous_uploads,
    )
    app.state.policy = VisibilityPolicy(settings.uploads_dir, settings.thumbs_dirname)
    app.state.admin = AdminCredentials(settings.admin_user, settings.admin_password)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health")
    @app.get("/api/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": VERSION}

    app.include_router(api_router, prefix="/api")
    app.include_router(files_router)

    # Serve a prebuilt frontend if one is configured
    if settings.public_dir is not None and settings.public_dir.exists():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
