# billing_admin/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from billing_admin.api.router import api_router
from billing_admin.core.config import settings
from billing_admin.core.errors import BillingError
from billing_admin.core.logging import setup_logging
from billing_admin.core.rate_limit import limiter, rate_limit_exceeded_handler
from billing_admin.infra.db.session import dispose_engine, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.PROJECT_VERSION)
    yield
    await dispose_engine()
    logger.info("Database pool closed")


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(BillingError, _billing_error_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Routers
    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"service": settings.PROJECT_NAME, "status": "ok"}

    return app


def _billing_error_handler(request: Request, exc: BillingError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app = create_app()
