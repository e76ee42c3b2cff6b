from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, status
from fastapi.responses import RedirectResponse

from shortlinks.api.deps import get_link_service
from shortlinks.api.handlers import register_error_handlers
from shortlinks.api.pages import router as pages_router
from shortlinks.api.routes import router as api_router
from shortlinks.core.config import Settings, get_settings
from shortlinks.core.errors import NotFoundError
from shortlinks.core.logging import configure_logging
from shortlinks.db.session import build_engine
from shortlinks.db.store import SqlUrlStore, UrlStore
from shortlinks.services.codes import is_valid_code
from shortlinks.services.links import LinkService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[UrlStore] = None) -> FastAPI:
    """
    Composition root: owns the store handle.
    A store passed in by the caller is used as-is and not closed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    owns_store = store is None
    if store is None:
        store = SqlUrlStore(build_engine(settings.database_url))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            store.create_schema()
        logger.info("URL shortener started (env=%s)", settings.app_env)
        yield
        if owns_store:
            store.close()

    app = FastAPI(title="URL Shortener", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    register_error_handlers(app)
    app.include_router(pages_router)
    app.include_router(api_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.head("/{code}")
    def redirect_head(code: str, service: LinkService = Depends(get_link_service)):
        if not is_valid_code(code):
            raise NotFoundError(f"no url for code {code!r}")
        record = service.resolve(code)

        return RedirectResponse(url=record.long_url, status_code=status.HTTP_302_FOUND)

    @app.get("/{code}")
    def redirect(code: str, service: LinkService = Depends(get_link_service)):
        if not is_valid_code(code):
            raise NotFoundError(f"no url for code {code!r}")
        record = service.follow(code)

        return RedirectResponse(url=record.long_url, status_code=status.HTTP_302_FOUND)

    return app


app = create_app()
