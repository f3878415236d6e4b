"""
Application factory and process entry point.

    uvicorn vetclinic.main:create_app --factory
    # or, with the package installed:
    vetclinic
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vetclinic.api.v1.error_handlers import register_exception_handlers
from vetclinic.api.v1.router import api_router
from vetclinic.config.settings import Settings, get_settings
from vetclinic.core.logging import RequestIDMiddleware, setup_logging
from vetclinic.database.bootstrap import create_tables
from vetclinic.database.session import make_engine, make_session_maker
from vetclinic.utils.logging import get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger.info("app.starting", extra={"env": settings.ENV})

    if settings.DB_BOOTSTRAP:
        try:
            await create_tables(app.state.engine)
        except Exception:
            # Keep serving: requests will report storage errors until the database is back.
            logger.exception("db.bootstrap.failed")

    yield

    await app.state.engine.dispose()
    logger.info("app.stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Vet Clinic API",
        description="CRUD for tutors, pets, services, products and appointments, plus staff auth",
        version=get_project_version(),
        lifespan=lifespan,
    )

    # One engine (connection pool) per application, shared by every request.
    engine = make_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = make_session_maker(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "vetclinic.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # setup_logging() owns the logging config
    )


if __name__ == "__main__":
    run()
