"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.container import build_container
from src.pf_admin.api.router import router as admin_router
from src.pf_cache.store import RedisCacheStore
from src.pf_common.database import create_engine, create_session_factory
from src.pf_common.errors import AppError, StoreQueryFailedError
from src.pf_common.policy import CachePolicy
from src.pf_common.redis_client import close_redis, create_redis
from src.pf_common.response import error_response, request_id_of
from src.pf_gateway.api.router import router as auth_router
from src.pf_gateway.middleware.request_log import RequestLogMiddleware
from src.pf_post.api.router import router as post_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build engine, Redis pool and services. Shutdown: dispose."""
    engine = create_engine(settings)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    redis_client = create_redis(settings)

    app.state.session_factory = create_session_factory(engine)
    app.state.container = build_container(
        RedisCacheStore(redis_client), CachePolicy.from_settings(settings)
    )
    yield
    await engine.dispose()
    await close_redis(redis_client)


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, request_id_of(request))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "store query failed on %s %s", request.method, request.url.path, exc_info=exc
    )
    err = StoreQueryFailedError()
    resp = error_response(err.code, err.message, request_id_of(request))
    return JSONResponse(
        status_code=err.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(post_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
