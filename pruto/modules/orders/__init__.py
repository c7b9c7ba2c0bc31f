"""
Orders Module
=============

Orders placed by the signed-in user.

Provides:
- POST /orders        - Place an order from the cart
- GET  /orders        - Caller's orders, newest first
- GET  /orders/<id>   - One of the caller's orders
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders',
    __name__,
    url_prefix='/orders'
)

from .store import OrderStore
from . import routes

__all__ = ['orders_bp', 'OrderStore']
