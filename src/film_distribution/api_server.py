"""
FastAPI application for the film distribution backend
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import config
from .db import Base, SessionLocal, engine
from .exceptions import register_exception_handlers
from .logging_config import RequestIDMiddleware, setup_logging
from .storage import seed_catalogs

from .auth_routes import router as auth_router
from .payment_routes import router as payment_router
from .filmmaker_routes import router as filmmaker_router
from .site_routes import router as site_router

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create tables on SQLite and seed the platform and plan catalogs

    PostgreSQL schemas are managed by Alembic migrations.
    """
    if engine.dialect.name == "sqlite":
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seeded = seed_catalogs(db)
        if seeded["platforms"] or seeded["plans"]:
            logger.info(f"Seeded {seeded['platforms']} platform(s) and {seeded['plans']} plan(s)")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(env=config.ENV, log_level=config.LOG_LEVEL)
    logger.info("=" * 50)
    logger.info(f"Film Distribution API {__version__} ({config.BUILD_VERSION}) - Starting Up")
    logger.info(f"Environment: {config.ENV}, database dialect: {engine.dialect.name}")
    logger.info("=" * 50)
    try:
        init_db()
    except Exception as e:
        # Requests fail individually with 503 until the database is reachable
        logger.error(f"Database initialization failed: {e}", exc_info=True)
    yield
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(title="Film Distribution API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(payment_router)
    app.include_router(filmmaker_router)
    app.include_router(site_router)
    return app


app = create_app()
