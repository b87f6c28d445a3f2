from . import product  # noqa: F401

__all__ = [
    "product",
]
