from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.staticfiles import StaticFiles

from sweetkicks_core import __version__
from sweetkicks_core.api.models import fail
from sweetkicks_core.config import CoreConfig, ensure_session_secret, load_core_config
from sweetkicks_core.forms import BindingError, BindingTable
from sweetkicks_core.home import ensure_sweetkicks_layout, resolve_sweetkicks_home
from sweetkicks_core.ui.router import STATIC_DIR as UI_STATIC_DIR
from sweetkicks_core.ui.router import router as ui_router

logger = logging.getLogger(__name__)


def build_binding_table(config: CoreConfig) -> BindingTable:
    return BindingTable.for_tags(
        config.binding.tags, bind_attribute=config.binding.bind_attribute
    )


def _attach_log_file(log_path: Path, config: CoreConfig) -> RotatingFileHandler | None:
    """Add a rotating file handler for ``log_path`` to the root logger.

    Returns None when the root logger already writes to that file (e.g. set up
    by ``__main__``); the caller owns and must close a returned handler.
    """

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    target = os.path.abspath(log_path)
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return None

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.logging.max_size_mb * 1024 * 1024,
        backupCount=config.logging.backup_count,
        encoding="utf-8",
    )
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    return file_handler


def create_app() -> FastAPI:
    home = resolve_sweetkicks_home()
    paths = ensure_sweetkicks_layout(home)
    # The session middleware needs its signing key before the app starts.
    config = ensure_session_secret(paths, load_core_config(paths))

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        file_handler = _attach_log_file(paths.logs_dir / "core.log", config)

        logger.info("SweetKicks Core starting up")
        logger.info(f"Logs directory: {paths.logs_dir}")

        app.state.sweetkicks_home = home
        app.state.sweetkicks_paths = paths
        app.state.sweetkicks_config = config
        app.state.binding_table = build_binding_table(config)
        logger.info(
            "Binding tags %s via %r",
            ", ".join(app.state.binding_table.tag_names()),
            config.binding.bind_attribute,
        )

        try:
            yield
        finally:
            logger.info("SweetKicks Core shutting down")
            if file_handler is not None:
                logging.getLogger().removeHandler(file_handler)
                file_handler.close()

    app = FastAPI(title="SweetKicks Core", version=__version__, lifespan=_lifespan)

    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session.secret_key,
        session_cookie=config.session.cookie_name,
        max_age=config.session.max_age_seconds,
        same_site="lax",
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=exc.errors(),
            ).model_dump(mode="json"),
        )

    def _status_to_code(status_code: int) -> str:
        if status_code == 404:
            return "not_found"
        if status_code == 405:
            return "method_not_allowed"
        if status_code == 422:
            return "validation_error"
        if 400 <= status_code < 500:
            return "client_error"
        return "server_error"

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=_status_to_code(exc.status_code),
                message=str(exc.detail),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=_status_to_code(exc.status_code),
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
            ).model_dump(mode="json"),
        )

    @app.exception_handler(BindingError)
    async def _binding_error_handler(request: Request, exc: BindingError) -> JSONResponse:
        logger.error("Failed to bind %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content=fail(code="binding_error", message=str(exc)).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    if UI_STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(UI_STATIC_DIR)), name="static")
    else:
        logger.warning(
            "UI static directory is missing (%s); /static will not be served",
            UI_STATIC_DIR,
        )
    app.include_router(ui_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
