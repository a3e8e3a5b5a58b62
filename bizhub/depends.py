from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from bizhub.adapter.services.reachability_probe import HttpxReachabilityProbe
from bizhub.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from bizhub.api.error import ClientError, ServerError
from bizhub.api.utils.jwt import principal_from_token
from bizhub.app.services.domain_verification import IReachabilityProbe
from bizhub.app.services.host_policy import HostPolicy
from bizhub.app.services.rate_limiter import RateLimiter, RateLimitStoreError
from bizhub.domain.entities import Principal
from bizhub.domain.errors import NetworkError, RateLimitedError

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Missing credentials are not rejected here: use cases fail closed on None
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Principal]:
    """
    Principal from the bearer token issued by the identity provider.

    Returns:
        Principal, or None for a missing, invalid or expired token
    """
    if credentials is None:
        return None
    return principal_from_token(credentials.credentials)


def get_host_policy() -> HostPolicy:
    return HostPolicy.from_config(
        ApplicationConfig.PLATFORM_DOMAIN, ApplicationConfig.DEFAULT_HOSTS
    )


def get_reachability_probe() -> IReachabilityProbe:
    return HttpxReachabilityProbe(timeout=ApplicationConfig.DOMAIN_PROBE_TIMEOUT)


def rate_limit(scope: str):
    """
    Dependency factory: fixed-window limit per principal (or client IP) and scope.

    The limiter lives on ``app.state.rate_limiter``. An unreachable store
    answers 503 NETWORK_ERROR.
    """

    async def dependency(
        request: Request,
        principal: Optional[Principal] = Depends(get_current_principal),
    ):
        limiter: RateLimiter = request.app.state.rate_limiter
        if principal is not None:
            caller = f"user:{principal.id}"
        else:
            caller = f"ip:{request.client.host if request.client else 'unknown'}"
        try:
            allowed = await limiter.allow(f"{scope}:{caller}")
        except RateLimitStoreError as e:
            raise ServerError(
                NetworkError("Rate limiting is unavailable, please retry"),
                status_code=503,
            ) from e
        if not allowed:
            raise ClientError(RateLimitedError(), status_code=429)

    return dependency
