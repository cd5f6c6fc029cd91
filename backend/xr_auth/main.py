"""
XR Auth Backend - FastAPI Application

Sign-up and sign-in for XR accounts with JWT access tokens, over a
configurable account store.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from xr_auth.config import get_settings
from xr_auth.core.exceptions import AuthError
from xr_auth.database.connections import close_connections
from xr_auth.logging_config import configure_logging
from xr_auth.routers import auth, health
from xr_auth.schemas.auth import ErrorResponse
from xr_auth.stores.factory import build_account_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Build the configured account store
    - Create its tables or indexes

    Shutdown:
    - Close the store and all database connections
    """
    logger.info("Starting up XR Auth Backend...")

    app.state.account_store = None
    try:
        store = build_account_store(get_settings())
        await store.initialize()
        app.state.account_store = store
        logger.info("Account store ready (%s)", store.backend_name)
    except AuthError as e:
        logger.error("Account store unavailable: %s", e.message)

    yield

    logger.info("Shutting down XR Auth Backend...")
    if app.state.account_store is not None:
        await app.state.account_store.close()
    await close_connections()
    logger.info("Database connections closed")


settings = get_settings()
configure_logging(settings.log_level)

# Create FastAPI application
app = FastAPI(
    title="XR Auth API",
    description="""
## XR Authentication API

Account registration and login for XR clients.

### Endpoints
- **POST /signup**: create an account, returns the user and a token
- **POST /signin**: verify credentials, returns the user and a token

### Tokens
Tokens are HS256 JWTs carrying `id`, `email` and `xrId`, valid for 7 days.
Send them as a bearer credential:
```
Authorization: Bearer <token>
```
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    """Render errors raised outside route bodies, e.g. in dependencies."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same envelope as validator failures."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request body").model_dump(),
    )


# Include routers
app.include_router(health.router)
app.include_router(auth.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "XR Auth API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
