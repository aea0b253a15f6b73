import uuid
from typing import Optional, Dict, Any, List

from .config import Settings
from .core import ProductIn, _make_product
from .database import ProductStore
from .errors import NotFoundError, ValidationError

# This file contains the core logic for all API endpoints.
# Routes in main.py only unpack the request and call into here.

def _positive_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except (ValueError, TypeError):
        raise ValidationError("page and limit must be positive integers")
    if value < 1:
        raise ValidationError("page and limit must be positive integers")
    return value

def _get_or_404(store: ProductStore, product_id: str):
    product = store.find(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product

# Product endpoints
def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_page: int = Settings.default_page,
    default_limit: int = Settings.default_limit,
) -> Dict[str, Any]:
    page_no = _positive_int(page, default_page)
    page_size = _positive_int(limit, default_limit)

    filtered = store.list_all()
    if category:
        filtered = [p for p in filtered if p.category == category]
    if search:
        term = search.lower()
        filtered = [p for p in filtered if term in p.name.lower()]

    start = (page_no - 1) * page_size
    return {
        "total": len(filtered),
        "page": page_no,
        "limit": page_size,
        "products": [p.model_dump() for p in filtered[start:start + page_size]],
    }

def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return _get_or_404(store, product_id).model_dump()

def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    product = store.append(_make_product(str(uuid.uuid4()), payload))
    return product.model_dump()

def update_product_logic(store: ProductStore, product_id: str, payload: ProductIn) -> Dict[str, Any]:
    _get_or_404(store, product_id)
    # the path id wins over anything the body carried
    product = store.replace(product_id, _make_product(product_id, payload))
    return product.model_dump()

def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    _get_or_404(store, product_id)
    return store.remove(product_id).model_dump()

def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    products: List = store.list_all()
    categories: Dict[str, int] = {}
    in_stock = 0
    total_price = 0
    for p in products:
        categories[p.category] = categories.get(p.category, 0) + 1
        if p.inStock:
            in_stock += 1
        total_price += p.price

    return {
        "totalProducts": len(products),
        "categories": categories,
        "inStock": in_stock,
        "outOfStock": len(products) - in_stock,
        "averagePrice": total_price / len(products) if products else None,
    }
