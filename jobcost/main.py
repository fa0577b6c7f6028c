import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from sqlmodel import Session
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from jobcost.api.errors import register_exception_handlers
from jobcost.api.main import api_router
from jobcost.core.config import settings
from jobcost.core.db import create_db_and_tables, engine, init_db
from jobcost.core.observability import (
    get_logger,
    set_correlation_id,
    setup_structured_logging,
)

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with a correlation id and logs its outcome.

    Domain errors are turned into responses by the exception handlers before
    they reach this middleware, so only unexpected failures land in the
    except branch.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        operation = f"{request.method} {request.url.path}"
        started = time.perf_counter()

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 2)

        logger.info("Request started", operation=operation)
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                operation=operation,
                duration_ms=elapsed_ms(),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise

        response.headers[CORRELATION_HEADER] = correlation_id
        logger.info(
            "Request completed",
            operation=operation,
            status_code=response.status_code,
            duration_ms=elapsed_ms(),
        )
        return response


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema and seed demo data the first time the database is opened."""
    setup_structured_logging()
    try:
        create_db_and_tables()
        with Session(engine) as session:
            init_db(session)
    except Exception:
        logger.error(
            "Startup failed", database=settings.SQLALCHEMY_DATABASE_URI, exc_info=True
        )
        raise

    logger.info(
        "JobCost ready",
        environment=settings.ENVIRONMENT,
        database=settings.SQLALCHEMY_DATABASE_URI,
        reports_dir=str(settings.REPORTS_DIR),
        seed_on_startup=settings.SEED_ON_STARTUP,
    )
    yield
    logger.info("JobCost stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "Job costing for printing and packaging work. Records customers, items, "
        "machines and employees, prices jobs with their machine entries and "
        "writes PDF cost, waste and per-customer reports."
    ),
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER],
    )

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_V1_STR)
