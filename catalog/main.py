"""
Main application entry point.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog import __version__
from catalog.config import config
from catalog.errors import NotFoundError, StoreIOError, ValidationError
from catalog.health import router as health_router
from catalog.logger import logger
from catalog.routes import products_router
from catalog.sentry import initialize_sentry
from catalog.store import BaseStore, create_store


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def register_error_handlers(app: FastAPI):
    """Map domain errors to {success: false, error} responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
        return error_response(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_response(404, "Product not found")

    @app.exception_handler(StoreIOError)
    async def store_io_error_handler(request: Request, exc: StoreIOError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        return error_response(500, "Failed to access product storage")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_response(404, "Endpoint not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error: {exc}", exc_info=True)
        return error_response(500, "Internal server error")


def create_app(store: Optional[BaseStore] = None) -> FastAPI:
    """
    Build the API around one store instance.

    Args:
        store: Record store to serve; defaults to the backend named by
            STORE_BACKEND
    """
    store = store or create_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle."""
        # Startup
        logger.info(f"Starting Product Catalog API ({store.backend} store)")
        initialize_sentry()
        await store.initialize()

        yield

        # Shutdown
        logger.info("Shutting down Product Catalog API")
        await store.close()

    app = FastAPI(
        title="Product Catalog API",
        description="CRUD product catalog with search, filters, sorting, pagination and aggregations",
        version=__version__,
        lifespan=lifespan
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.include_router(health_router)
    app.include_router(products_router)
    register_error_handlers(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
