# catalog/handlers.py
import re
from typing import Optional

import structlog
from fastapi import Response
from fastapi.responses import JSONResponse

from .core import RequestContext, not_found
from .database import ProductStore

# This file contains the logic behind every product endpoint.

logger = structlog.get_logger()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(raw: Optional[str], default: int) -> int:
    """
    Leading-integer parse: "2" -> 2, "2abc" -> 2, "1.5" -> 1, "abc" -> default.
    Zero and negatives are returned as parsed.
    """
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    return int(m.group(1))


class ProductHandlers:
    def __init__(self, store: ProductStore):
        self.store = store

    def list_products(self, ctx: RequestContext) -> Response:
        search = ctx.query.get("search") or None
        page = parse_int(ctx.query.get("page"), DEFAULT_PAGE)
        limit = parse_int(ctx.query.get("limit"), DEFAULT_LIMIT)
        products = self.store.list(search=search, page=page, limit=limit)
        logger.debug("Listed products", search=search, page=page, limit=limit, count=len(products))
        return JSONResponse([p.model_dump() for p in products])

    def get_product(self, ctx: RequestContext) -> Response:
        product = self.store.get(ctx.product_id)
        if product is None:
            logger.warning("Product not found", product_id=ctx.product_id)
            return not_found()
        return JSONResponse(product.model_dump())

    def create_product(self, ctx: RequestContext) -> Response:
        product = self.store.create(ctx.body)
        logger.info("Product created", product_id=product.id, name=product.name)
        return JSONResponse(product.model_dump(), status_code=201)

    def update_product(self, ctx: RequestContext) -> Response:
        product = self.store.update(ctx.product_id, ctx.body)
        if product is None:
            logger.warning("Product not found", product_id=ctx.product_id)
            return not_found()
        logger.info("Product updated", product_id=ctx.product_id)
        return JSONResponse(product.model_dump())

    def delete_product(self, ctx: RequestContext) -> Response:
        product = self.store.delete(ctx.product_id)
        if product is None:
            logger.warning("Product not found", product_id=ctx.product_id)
            return not_found()
        logger.info("Product deleted", product_id=ctx.product_id)
        return JSONResponse(product.model_dump())
