import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.services.rate_limiter import (
    InMemoryRateLimitStore,
    RateLimiter,
    RateLimitStore,
)

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    # Integrity details stay in the log
    if exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        message = "Internal server error"
    else:
        message = exc.base_error.message
    error_dict = {"code": exc.base_error.code, "message": message}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_duplicate_key_error(request: Request, exc: DuplicateKeyError):
    logger.warning(f"Uniqueness conflict on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": {"code": "CONFLICT", "message": "Resource was modified concurrently"}},
    )


async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage error on {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": {"code": "STORAGE_ERROR", "message": "Storage is unavailable"}},
    )


def build_rate_limit_store(ApplicationConfig) -> RateLimitStore:
    if ApplicationConfig.CACHE_BACKEND == "redis":
        from bizhub.adapter.services.redis_rate_limit_store import RedisRateLimitStore

        logger.info("Rate limiting backed by Redis")
        return RedisRateLimitStore.from_url(ApplicationConfig.REDIS_URL)
    return InMemoryRateLimitStore()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.rate_limiter.store.close()
        logger.info("Rate limit store closed")

    app = FastAPI(title="Bizhub Tenancy API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.rate_limiter = RateLimiter(
        build_rate_limit_store(ApplicationConfig),
        limit=ApplicationConfig.RATE_LIMIT_REQUESTS,
        window_seconds=ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS,
    )

    from bizhub.api.routes import (
        admin,
        audit,
        domain,
        health_check,
        membership,
        segment,
        tenant,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(segment.router, prefix=prefix)
    app.include_router(tenant.router, prefix=prefix)
    app.include_router(membership.router, prefix=prefix)
    app.include_router(domain.router, prefix=prefix)
    app.include_router(audit.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(DuplicateKeyError, handle_duplicate_key_error)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)

    return app
