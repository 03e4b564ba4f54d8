"""
FastAPI app assembly: logging, middleware, store lifecycle and router wiring.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.api.connections import router as connections_router
from portfolio.api.content import router as content_router
from portfolio.api.feedback import router as feedback_router
from portfolio.api.projects import router as projects_router
from portfolio.api.reviews import router as reviews_router
from portfolio.api.technologies import router as technologies_router
from portfolio.config import get_settings
from portfolio.db.database import build_store
from portfolio.db.store import StoreClient

# Configure logging
LOG_LEVEL_NAME = get_settings().log_level
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = build_store()
    logger.info("app_startup: log_level=%s backend=%s", LOG_LEVEL_NAME, app.state.store.engine.dialect.name)
    try:
        yield
    finally:
        if owns_store:
            await app.state.store.dispose()
            app.state.store = None
        logger.info("app_shutdown")


def create_app(store: Optional[StoreClient] = None) -> FastAPI:
    """Build the application; pass `store` to inject a preconfigured client (tests)."""
    app = FastAPI(
        title="Portfolio Service",
        description="API for portfolio content and the admin inbox: projects, technologies, connections, reviews and feedback.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_settings().cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(projects_router)
    app.include_router(technologies_router)
    app.include_router(connections_router)
    app.include_router(reviews_router)
    app.include_router(feedback_router)
    app.include_router(content_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": "portfolio-service"}

    return app


app = create_app()
