"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from memberportal.config import settings
from memberportal.logging_config import configure_logging

configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


async def _init_database(app: FastAPI) -> None:
    from memberportal.db.engine import create_db_engine, create_session_factory, is_sqlite

    db_url = settings.effective_database_url
    engine = create_db_engine(db_url)
    if is_sqlite(db_url):
        from memberportal.db.base import Base
        import memberportal.db.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("portal_users table ensured (local SQLite)")

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)


def _init_record_store(app: FastAPI, http_client: httpx.AsyncClient) -> None:
    from memberportal.comments.authorization import StoreAdminDirectory
    from memberportal.store.baserow import BaserowClient

    if not settings.baserow_api_key:
        logger.warning("PORTAL_BASEROW_API_KEY not set; record store calls will fail with 502")

    store = BaserowClient(
        settings.baserow_api_url,
        settings.baserow_api_key,
        timeout=settings.baserow_timeout_seconds,
        http_client=http_client,
    )
    app.state.record_store = store
    app.state.admin_directory = StoreAdminDirectory(store, settings.admin_accounts_table_id)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await _init_database(app)
    async with httpx.AsyncClient() as http_client:
        _init_record_store(app, http_client)
        logger.info("Member portal API started (store=%s)", settings.baserow_api_url)
        yield
    await app.state.db_engine.dispose()
    logger.info("Member portal API shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Member Portal API",
        version="0.1.0",
        description="Deal discussions and member profiles backed by the member record store.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Trace-Id"],
        expose_headers=["X-Trace-Id"],
    )

    # Last added runs first: trace id is bound before authentication
    from memberportal.api.middleware.auth import AuthMiddleware
    from memberportal.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(AuthMiddleware)
    app.add_middleware(TraceIdMiddleware)

    from memberportal.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from memberportal.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
