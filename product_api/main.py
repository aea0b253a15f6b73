# product_api/main.py
"""
FastAPI application for the Product API.

Usage:
    API_KEY=secret uvicorn product_api.main:app --port 3000
    API_KEY=secret python -m product_api.main
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .core import ProductIn
from .database import ProductStore
from .errors import ApiError, error_response
from .handlers import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    product_stats_logic,
    update_product_logic,
)
from .middleware import build_pipeline, validated_product

logger = logging.getLogger("product_api")

WELCOME = "Welcome to the Product API! Go to /api/products to see all products."


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    )


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="Product API (in-memory demo)")
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore()

    app.middleware("http")(build_pipeline(settings))
    # added last so preflight requests never reach the auth interceptor
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # unknown routes and wrong methods keep the same body shape
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    # ---------------------------
    # Root
    # ---------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def welcome():
        return WELCOME

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products")
    async def list_products(
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        store: ProductStore = Depends(get_store),
    ):
        return list_products_logic(
            store, category, search, page, limit,
            default_page=settings.default_page,
            default_limit=settings.default_limit,
        )

    # must be registered ahead of /api/products/{product_id}
    @app.get("/api/products/stats")
    async def product_stats(store: ProductStore = Depends(get_store)):
        return product_stats_logic(store)

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    @app.post("/api/products", status_code=201)
    async def create_product(
        payload: ProductIn = Depends(validated_product),
        store: ProductStore = Depends(get_store),
    ):
        return create_product_logic(store, payload)

    @app.put("/api/products/{product_id}")
    async def update_product(
        product_id: str,
        payload: ProductIn = Depends(validated_product),
        store: ProductStore = Depends(get_store),
    ):
        return update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}")
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return delete_product_logic(store, product_id)

    return app


_settings = load_settings()
configure_logging(_settings)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server is running on http://localhost:%s", _settings.port)
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())
