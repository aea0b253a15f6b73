from typing import List, Optional

from .models import Product

# In-memory product store. One instance per application; nothing here locks.

SEED_PRODUCTS: List[dict] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


class ProductStore:
    def __init__(self, products: Optional[List[Product]] = None):
        if products is None:
            products = [Product(**p) for p in SEED_PRODUCTS]
        self._products: List[Product] = list(products)

    def __len__(self) -> int:
        return len(self._products)

    def list_all(self) -> List[Product]:
        return list(self._products)

    def find(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def append(self, product: Product) -> Product:
        self._products.append(product)
        return product

    def replace(self, product_id: str, product: Product) -> Optional[Product]:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                self._products[i] = product
                return product
        return None

    def remove(self, product_id: str) -> Optional[Product]:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return self._products.pop(i)
        return None
