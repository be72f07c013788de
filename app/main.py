"""
app/main.py

FastAPI application entry point.

Responsibilities:
  - Create the FastAPI app with metadata from config
  - Provision the upload directories and build the upload policy at startup
  - Register the upload router and serve stored files under /uploads
  - Translate upload rejections into 400 payloads; everything else into 500
  - Expose /health and /api/health for liveness probes
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.upload_controller import router as upload_router
from app.core.config import Settings, settings
from app.core.exceptions import AppBaseException, UploadError
from app.core.logger import get_logger
from app.intake.errors import translate_upload_error
from app.intake.policy import UploadPolicy
from app.intake.provisioner import ensure_upload_dirs
from app.services.upload_service import UploadService

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong on our end. Please try again later."


def create_app(app_settings: Settings = settings, policy: Optional[UploadPolicy] = None) -> FastAPI:
    """
    Build the application.

    ``policy`` overrides the one derived from ``app_settings``; tests use it
    to run with custom limits without touching the environment.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # StorageInitError propagates here so the server never starts
        # accepting uploads it cannot persist.
        ensure_upload_dirs(app_settings.upload_root)

        upload_policy = policy or UploadPolicy.from_settings(app_settings)
        app.state.upload_policy = upload_policy
        app.state.upload_service = UploadService(upload_policy, app_settings.upload_root)

        logger.info(
            "%s %s ready — uploads in '%s', max %s per file, allowed: %s",
            app_settings.app_name,
            app_settings.app_version,
            app_settings.upload_root,
            upload_policy.max_file_size_label,
            ", ".join(upload_policy.allowed_extensions),
        )
        yield

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description=(
            "Accepts site documents and photos, validates their type and size, "
            "and stores them under a generated name."
        ),
        lifespan=lifespan,
    )

    # ── Routers & static files ─────────────────────────────────────────────────

    app.include_router(upload_router)
    app.mount(
        "/uploads",
        StaticFiles(directory=app_settings.upload_root, check_dir=False),
        name="uploads",
    )

    # ── Exception handlers ─────────────────────────────────────────────────────

    @app.exception_handler(UploadError)
    async def upload_exception_handler(request: Request, exc: UploadError) -> JSONResponse:
        payload = translate_upload_error(exc, request.app.state.upload_policy)
        logger.warning("Upload rejected on %s (%s): %s", request.url.path, exc.kind.value, exc)
        return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))

    @app.exception_handler(AppBaseException)
    async def app_exception_handler(request: Request, exc: AppBaseException) -> JSONResponse:
        """Safety-net for any AppBaseException that escapes controller-level handling."""
        logger.exception("Unhandled application error on %s: %s", request.url.path, exc)
        return _server_error(request, exc, app_settings.debug)

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s: %s", request.url.path, exc)
        return _server_error(request, exc, app_settings.debug)

    # ── Health endpoints ───────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Liveness probe")
    @app.get("/api/health", tags=["Health"], summary="Liveness probe")
    async def health() -> dict:
        """Returns 200 OK when the service is running."""
        return {"success": True, "status": "ok", "version": app_settings.app_version}

    return app


def _server_error(request: Request, exc: Exception, debug: bool) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": str(exc) if debug else GENERIC_ERROR_MESSAGE,
            "path": request.url.path,
            "method": request.method,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


app = create_app()
