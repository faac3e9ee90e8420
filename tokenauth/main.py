#!/usr/bin/env python3
"""
tokenauth - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as redis
import uvicorn
from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tokenauth import __version__
from tokenauth.config.provider import ConfigProvider, EnvConfigProvider, IdentityStoreConfig
from tokenauth.logging_config import configure_logging, get_logging_config
from tokenauth.modules.api import (
    AUTHORIZED_MESSAGE,
    TOKEN_ENDPOINT,
    TokenRequest,
    TokenResponse,
    create_discovery_router,
)
from tokenauth.modules.auth import (
    AuthenticationService,
    AuthFactory,
    IdentityStore,
    InvalidCredentialsError,
    MalformedRequestError,
)
from tokenauth.modules.identity import (
    IdentityStoreFactory,
    InMemoryIdentityStore,
    RedisIdentityStore,
)

logger = logging.getLogger(__name__)


async def get_redis_client(store_config: IdentityStoreConfig) -> redis.Redis:
    """Create Redis client from configuration."""
    return redis.from_url(
        store_config.redis_url,
        password=store_config.redis_password,  # Passed separately to avoid URL encoding issues
        encoding="utf-8",
        decode_responses=True,
    )


def describe_store(identity_store: IdentityStore) -> str:
    """Short backend label for health output."""
    if isinstance(identity_store, RedisIdentityStore):
        return "redis"
    if isinstance(identity_store, InMemoryIdentityStore):
        return "memory"
    return "external"


# Dependency injection helpers
def get_auth_service(request: Request) -> AuthenticationService:
    """Return the authentication service built at startup."""
    auth_service = getattr(request.app.state, "auth_service", None)
    if auth_service is None:
        raise HTTPException(503, "Service not initialized")
    return auth_service


async def verify_bearer(
    authorization: Optional[str] = Header(None, description="Bearer token for authentication"),
    auth_service: AuthenticationService = Depends(get_auth_service),
) -> str:
    """
    Verify the bearer token before a protected handler runs.

    Returns:
        Authenticated identity (token subject)
    """
    result = await auth_service.authenticate(authorization)

    if not result.ok:
        # Generic 401; the rejection reason stays in the logs
        raise HTTPException(status_code=401, headers={"WWW-Authenticate": "Bearer"})

    return result.identity


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    identity_store: Optional[IdentityStore] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config_provider: Configuration provider (environment by default)
        identity_store: Pre-built identity store; built from config when omitted

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting tokenauth API...")

        # Fail on a missing secret before any connection is opened
        config_provider.get_token_config()

        redis_client = None
        try:
            store = identity_store
            if store is None:
                store_config = config_provider.get_identity_store_config()
                if store_config.backend == "redis":
                    redis_client = await get_redis_client(store_config)
                store = await IdentityStoreFactory.build(store_config, redis_client)

            app.state.redis_client = redis_client
            app.state.identity_store = store
            app.state.auth_service = AuthFactory.build(config_provider, store)
            logger.info("Authentication service initialized via factory")

            logger.info("tokenauth API started successfully")

            yield
        finally:
            logger.info("Shutting down tokenauth API...")
            app.state.auth_service = None
            app.state.redis_client = None
            if redis_client:
                await redis_client.aclose()
            logger.info("tokenauth API shutdown complete")

    app = FastAPI(
        title="tokenauth API",
        description="Bearer token authentication service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.auth_service = None
    app.state.identity_store = None
    app.state.redis_client = None

    app.include_router(create_discovery_router(config_provider), tags=["auth"])

    @app.middleware("http")
    async def normalize_api_path(request: Request, call_next):
        """Match /api routes case-insensitively (e.g. /api/Account/token)."""
        path = request.scope["path"]
        if path[:5].lower() == "/api/":
            request.scope["path"] = path.lower()
        return await call_next(request)

    @app.post(
        TOKEN_ENDPOINT,
        response_model=TokenResponse,
        responses={400: {"description": "Malformed request"}, 401: {"description": "Bad credentials"}},
    )
    async def get_authentication_token(
        credentials: TokenRequest,
        auth_service: AuthenticationService = Depends(get_auth_service),
    ):
        """
        Exchange a username and password for a bearer token.

        Returns:
            200: {"result": token}
            400: Malformed request
            401: Unknown username or wrong password
        """
        try:
            token = await auth_service.login(credentials.username, credentials.password)
        except MalformedRequestError:
            return Response(status_code=400)
        except InvalidCredentialsError:
            return Response(status_code=401)

        return TokenResponse(result=token)

    @app.get("/api/testauth/example")
    async def get_example_values(identity: str = Depends(verify_bearer)) -> str:
        """
        Protected example endpoint.

        Returns:
            200: Confirmation message
            401: Missing or rejected bearer token
        """
        logger.debug(f"Authorized request for {identity}")
        return AUTHORIZED_MESSAGE

    @app.get("/healthz")
    async def healthz():
        """
        Minimal health check endpoint for readiness and liveness checks.

        Returns:
            200: Service is running
        """
        return {"status": "ok"}

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check including the identity store.

        Returns:
            200: Service healthy
            503: Service unhealthy
        """
        state = request.app.state
        if state.auth_service is None or state.identity_store is None:
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "modules": "not initialized"},
            )

        backend = describe_store(state.identity_store)
        if state.redis_client is not None:
            try:
                await state.redis_client.ping()
            except redis.RedisError as e:
                logger.error(f"Health check failed: {e}")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "identity_store": backend},
                )

        return {"status": "healthy", "identity_store": backend, "version": __version__}

    # Error handlers

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Reject invalid bodies with a bare 400."""
        logger.debug(f"Request validation failed on {request.url.path}: {len(exc.errors())} error(s)")
        return Response(status_code=400)

    @app.exception_handler(redis.ConnectionError)
    async def redis_error_handler(request: Request, exc: redis.ConnectionError):
        """Handle Redis connection errors."""
        logger.error(f"Redis connection error: {exc}")
        return JSONResponse(status_code=503, content={"error": "Identity store unavailable"})

    return app


app = create_app()


def main() -> None:
    """Run the API server."""
    api_config = EnvConfigProvider().get_api_config()
    configure_logging(api_config.log_level)

    uvicorn.run(
        "tokenauth.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
