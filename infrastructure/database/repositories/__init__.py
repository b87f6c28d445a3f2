from .product_repository import ProductRepository

__all__ = [
    "ProductRepository",
]
