"""
Cart Module
===========

The signed-in user's shopping cart.

Provides:
- GET    /cart                      - Cart with products populated
- POST   /cart/add                  - Add a product variant
- PUT    /cart/update/<product_id>  - Set a line's quantity (0 removes it)
- DELETE /cart/remove/<product_id>  - Remove a line
"""

from flask import Blueprint

cart_bp = Blueprint(
    'cart',
    __name__,
    url_prefix='/cart'
)

from .store import CartStore
from . import routes

__all__ = ['cart_bp', 'CartStore']
