from pydantic import BaseModel
from typing import Union

from .models import Product

class ProductIn(BaseModel):
    name: str
    description: str
    price: Union[int, float]
    category: str
    inStock: bool

def _make_product(product_id: str, p: ProductIn) -> Product:
    return Product(
        id=product_id,
        name=p.name,
        description=p.description,
        price=p.price,
        category=p.category,
        inStock=p.inStock,
    )
