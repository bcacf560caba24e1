"""FastAPI application factory.

Learn: App factory pattern - create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (logging, schema, engine).
Middleware, CORS, exception handlers and routers all registered here.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from devsocial import __version__
from devsocial.api import api_router
from devsocial.config import Settings, get_settings
from devsocial.errors import AppError
from devsocial.logging_config import configure_logging
from devsocial.middleware.errors import render_unexpected

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown. The schema is created from the ORM metadata; there is
    no migration tool.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)
    logger.info(
        "devsocial.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from devsocial.db.engine import engine
    from devsocial.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    logger.info("devsocial.shutdown")
    await engine.dispose()


# ─── Exception handlers ─────────────────────────────────


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("app.error", error=exc.message)
    else:
        logger.info("app.request_rejected", status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Pydantic validation failures → 400 {"errors": [{"msg", "param"}]}."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"msg": err.get("msg"), "param": ".".join(loc) or "body"})
    return JSONResponse(status_code=400, content={"errors": errors})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store/hash/sign failures and bugs → generic 500, detail in the log only."""
    return render_unexpected(exc)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="DevSocial",
        description="Social network backend for developers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → UnhandledError → handler

    from devsocial.middleware.errors import UnhandledErrorMiddleware
    from devsocial.middleware.request_id import RequestIdMiddleware
    from devsocial.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, unexpected_error_handler)
    # Backstop for failures inside the middleware stack itself.
    app.add_exception_handler(Exception, unexpected_error_handler)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "API running"

    app.include_router(api_router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "devsocial.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


# Default app instance (used by uvicorn: devsocial.main:app)
app = create_app()
