from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from car_marketplace.entrypoints.http.dependencies import close_cache_invalidator
from car_marketplace.entrypoints.http.exception_handlers import register_exception_handlers
from car_marketplace.entrypoints.http.routes.cars import router as cars_router
from car_marketplace.entrypoints.http.routes.health import router as health_router
from car_marketplace.entrypoints.http.routes.saved_cars import router as saved_cars_router
from car_marketplace.infra.config import get_settings
from car_marketplace.infra.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    close_cache_invalidator()


def build_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Car Marketplace API",
        description="""
        Customer-facing data access for a used-car marketplace.

        ## Features
        - Filter options for the catalog page
        - Search available cars with filters, sorting and pagination
        - Car details with test drive and dealership information
        - Wishlist: toggle and list saved cars

        ## Authentication
        The caller's auth provider user id travels in the `X-User-Id` header.
        Without it the caller is anonymous.

        ## Envelopes
        Every response is `{success, data|error, pagination?}`. Expected
        conditions (e.g. unknown car) answer `success: false` with HTTP 200;
        fatal ones use the HTTP status of the error.

        ## Demo mode
        With `DEMO_MODE=true` all reads come from a fixed fixture catalog and
        no database is needed.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")
    app.include_router(saved_cars_router, prefix="/v1")

    return app


app = build_app()
