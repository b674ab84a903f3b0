# catalog/main.py
from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .core import RequestContext, require_token, run_pipeline, validate_product
from .database import ProductStore
from .handlers import ProductHandlers
from .logging_config import setup_logging
from .middleware import ErrorBoundaryMiddleware, RequestLoggingMiddleware

logger = structlog.get_logger()


# ---------------------------
# Product routes
# ---------------------------
def create_product_router(handlers: ProductHandlers, api_token: str) -> APIRouter:
    router = APIRouter(prefix="/api/products", tags=["Products"])

    authenticate = require_token(api_token)
    write_gates = [authenticate, validate_product]
    delete_gates = [authenticate]

    @router.get("")
    @router.get("/", include_in_schema=False)
    async def list_products(request: Request):
        ctx = await RequestContext.from_request(request)
        return run_pipeline(ctx, [], handlers.list_products)

    @router.get("/{product_id}")
    async def get_product(product_id: str, request: Request):
        ctx = await RequestContext.from_request(request, product_id)
        return run_pipeline(ctx, [], handlers.get_product)

    @router.post("", status_code=201)
    @router.post("/", status_code=201, include_in_schema=False)
    async def create_product(request: Request):
        ctx = await RequestContext.from_request(request)
        return run_pipeline(ctx, write_gates, handlers.create_product)

    @router.put("/{product_id}")
    async def update_product(product_id: str, request: Request):
        ctx = await RequestContext.from_request(request, product_id)
        return run_pipeline(ctx, write_gates, handlers.update_product)

    @router.delete("/{product_id}")
    async def delete_product(product_id: str, request: Request):
        ctx = await RequestContext.from_request(request, product_id)
        return run_pipeline(ctx, delete_gates, handlers.delete_product)

    return router


# ---------------------------
# Application factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    store = store if store is not None else ProductStore()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running", port=settings.port, environment=settings.environment)
        yield
        logger.info("Server stopped")

    app = FastAPI(
        title="catalog-api (in-memory)",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.environment == "local" else None,
        redoc_url="/redoc" if settings.environment == "local" else None,
    )
    app.state.store = store
    app.state.settings = settings

    # Registered inner to outer: the request logger runs first, the error
    # boundary wraps everything below it.
    app.add_middleware(ErrorBoundaryMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(create_product_router(ProductHandlers(store), settings.api_token))

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "products": len(store)}

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "local",
        log_config=None,
    )
