"""
Product catalog endpoints.
Handlers only translate HTTP to store and query calls; errors are mapped
to responses by the handlers registered in catalog.main.
"""
import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from catalog.errors import NotFoundError, ValidationError
from catalog.logger import logger
from catalog.models.query import QuerySpec
from catalog.query import compute_stats, execute
from catalog.store import BaseStore

router = APIRouter(prefix="/api")


def get_store(request: Request) -> BaseStore:
    """Store dependency; the app owns one store instance."""
    return request.app.state.store


def parse_product_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise NotFoundError("Product not found")


async def read_body(request: Request) -> Dict[str, Any]:
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Product data must be a JSON object")
    return data


@router.get("/products")
async def list_products(request: Request, store: BaseStore = Depends(get_store)):
    """List products with search, filters, sorting, pagination and aggregations."""
    spec = QuerySpec.from_params(request.query_params)
    result = execute(await store.list_all(), spec)
    return {"success": True, **result.to_dict()}


@router.get("/products/{product_id}")
async def get_product(product_id: str, store: BaseStore = Depends(get_store)):
    product = await store.get(parse_product_id(product_id))
    return {"success": True, "data": product.to_dict()}


@router.post("/products", status_code=201)
async def create_product(request: Request, store: BaseStore = Depends(get_store)):
    data = await read_body(request)
    product = await store.insert(data)
    logger.info(f"Product created via API: {product.id} ({product.name})")
    return {"success": True, "data": product.to_dict()}


@router.put("/products/{product_id}")
async def update_product(product_id: str, request: Request,
                         store: BaseStore = Depends(get_store)):
    """Partial update: only supplied fields change."""
    pid = parse_product_id(product_id)
    data = await read_body(request)
    product = await store.update(pid, data)
    return {"success": True, "data": product.to_dict()}


@router.delete("/products/{product_id}")
async def delete_product(product_id: str, store: BaseStore = Depends(get_store)):
    product = await store.delete(parse_product_id(product_id))
    return {"success": True, "data": product.to_dict()}


@router.get("/stats")
async def get_stats(store: BaseStore = Depends(get_store)):
    return {"success": True, "data": compute_stats(await store.list_all())}
