"""
NetOps API - FastAPI Application

Inventory of sites, containers and devices, plus user accounts and bearer-token
authentication.
"""

import logging
import time
import traceback
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from netops_core import __version__
from netops_core.config import NetOpsSettings, get_settings
from netops_core.db.errors import classify_db_error
from netops_core.db.models import Role
from netops_core.db.session import Database
from netops_core.exceptions import NetOpsError, ValidationError
from netops_core.stores import UserStore
from netops_core.utils.responses import error_response

from netops_api.routes import auth, containers, devices, health, sites, users

# Configure logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
log = logging.getLogger(__name__)

# Request locations that are not part of a field name
_LOCATIONS = {'body', 'query', 'path', 'header', 'cookie'}


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part not in _LOCATIONS]
    return '.'.join(parts) if parts else str(loc[0]) if loc else 'body'


def _field_message(error: dict) -> str:
    # Messages raised by our own validators, without pydantic's "Value error, " prefix
    if error.get('type') == 'value_error' and 'error' in error.get('ctx', {}):
        return str(error['ctx']['error'])
    return error['msg']


def validation_details(exc: RequestValidationError) -> list:
    """One {field, message} entry per failing field, in request order."""
    return [
        {'field': _field_name(error['loc']), 'message': _field_message(error)}
        for error in exc.errors()
    ]


async def ensure_admin_user(db: Database, settings: NetOpsSettings) -> Optional[dict]:
    """Create the bootstrap admin account when ADMIN_* settings are all present."""
    if not (settings.ADMIN_USERNAME and settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return None

    store = UserStore(db)
    existing = await store.find_by_email_or_username(settings.ADMIN_EMAIL, settings.ADMIN_USERNAME)
    if existing:
        if existing['role'] != Role.ADMIN.value:
            log.warning(f"Bootstrap account {existing['username']} exists without the admin role")
        return existing

    user = await store.create({
        'username': settings.ADMIN_USERNAME,
        'email': settings.ADMIN_EMAIL,
        'password': settings.ADMIN_PASSWORD,
        'role': Role.ADMIN,
    })
    log.info(f"Bootstrap admin user created: {user['username']}")
    return user


def create_app(
    database: Optional[Database] = None,
    settings: Optional[NetOpsSettings] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Persistence handle to use (defaults to one built from settings)
        settings: Settings to use (defaults to get_settings())
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler"""
        log.info(f"Starting {settings.SERVICE_NAME} v{__version__} ({settings.ENVIRONMENT})")

        db: Database = app.state.db
        db.open()
        if settings.AUTO_CREATE_SCHEMA:
            db.create_all()
        await ensure_admin_user(db, settings)
        log.info("Database initialized")

        yield

        db.close()
        log.info(f"Shutting down {settings.SERVICE_NAME}")

    app = FastAPI(
        title="NetOps API",
        description="Inventory of sites, containers and network devices",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db = database or Database.from_settings(settings)
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        log.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
        return response

    @app.exception_handler(NetOpsError)
    async def netops_error_handler(request: Request, exc: NetOpsError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(DBAPIError)
    async def database_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
        error = classify_db_error(exc)
        log.warning(f"{request.method} {request.url.path} rejected by database: {error.message}")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(field_errors=validation_details(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = 'Route not found' if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message),
            headers=getattr(exc, 'headers', None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception(f"Unhandled error on {request.method} {request.url.path}")
        content = error_response('Server Error')
        if not settings.is_production:
            content['stack'] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return JSONResponse(status_code=500, content=content)

    # Include routers
    app.include_router(health.router, tags=["Health"])

    app.include_router(
        auth.router,
        prefix="/api/auth",
        tags=["Authentication"]
    )

    app.include_router(
        users.router,
        prefix="/api/users",
        tags=["Users"]
    )

    app.include_router(
        sites.router,
        prefix="/api/sites",
        tags=["Sites"]
    )

    app.include_router(
        containers.router,
        prefix="/api/containers",
        tags=["Containers"]
    )

    app.include_router(
        devices.router,
        prefix="/api/devices",
        tags=["Devices"]
    )

    return app


app = create_app()


def run():
    """Console entry point: serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT)


if __name__ == "__main__":
    run()
