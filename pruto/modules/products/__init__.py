"""
Products Module
===============

REST resource over the product catalog.

Provides:
- GET    /products        - List all products
- GET    /products/<id>   - Get a single product
- POST   /products        - Create a product
- PUT    /products/<id>   - Merge fields into a product (PATCH accepted too)
- DELETE /products/<id>   - Delete a product
"""

from flask import Blueprint

products_bp = Blueprint(
    'products',
    __name__,
    url_prefix='/products'
)

from .store import ProductStore, ProductNotFound
from ...core.errors import InvalidFieldName
from . import routes

__all__ = ['products_bp', 'ProductStore', 'ProductNotFound', 'InvalidFieldName']
