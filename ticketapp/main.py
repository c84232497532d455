from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

# -------------------------------------------------------
# ⚙️ Core Imports
# -------------------------------------------------------
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import logger, setup_logging
from .core.storage import JsonStore, StorageError
from .core.template_engine import build_templates, render

# -------------------------------------------------------
# 🧩 Routers
# -------------------------------------------------------
from .routers import api, auth, dashboard, pages, tickets

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=VERSION,
        description="TicketApp – email sign-in support ticket tracker",
        debug=settings.DEBUG,
    )
    setup_logging(settings.LOG_LEVEL)
    app.state.settings = settings
    app.state.templates = build_templates(settings)
    app.state.db = Database(JsonStore(settings.STORAGE_DIR))

    # ---------------------------------------------------
    # 🍪 Session cookie (user snapshot + pending toasts)
    # ---------------------------------------------------
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
    )

    # ---------------------------------------------------
    # 🚨 Error pages
    # ---------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        # unknown path or an unsupported method on a known path
        if exc.status_code in (404, 405):
            return render(request, "404.html", status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return render(request, "500.html", status_code=500)

    # ---------------------------------------------------
    # ❤️ Health Check
    # ---------------------------------------------------
    @app.get("/health", tags=["Health"])
    def health():
        ok, error = app.state.db.healthcheck()
        return {
            "status": "ok",
            "service": settings.PROJECT_NAME,
            "version": VERSION,
            "storage": "ok" if ok else "error",
            "error": error,
        }

    # ---------------------------------------------------
    # 🔗 Router Registration
    # ---------------------------------------------------
    app.include_router(api.router)
    app.include_router(auth.router)
    app.include_router(tickets.router)
    app.include_router(dashboard.router)
    app.include_router(pages.router)

    logger.info("%s %s ready (storage: %s)", settings.PROJECT_NAME, VERSION, settings.STORAGE_DIR)
    return app


app = create_app()
