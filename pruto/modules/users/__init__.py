"""
Users Module
============

Customer profiles keyed by the platform uid sent in ``X-Firebase-UID``.

Provides:
- POST   /auth/login                    - Create or refresh the caller's profile
- GET    /user/profile                  - Caller's profile
- PUT    /user/profile                  - Update profile fields
- POST   /user/addresses                - Add a shipping address
- PUT    /user/addresses/<id>           - Update a shipping address
- DELETE /user/addresses/<id>           - Remove a shipping address
- GET    /user/wishlist                 - Wishlist products
- POST   /user/wishlist/<product_id>    - Add to wishlist
- DELETE /user/wishlist/<product_id>    - Remove from wishlist
- GET    /admin/users                   - List users (admin)
- PUT    /admin/users/<id>/role         - Change a user's role (admin)
- DELETE /admin/users/<id>              - Delete a user (admin)
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')
users_bp = Blueprint('users', __name__, url_prefix='/user')
admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

from .store import UserStore, UserNotFound
from .guards import user_required, admin_required, get_request_uid, load_current_user
from . import routes

__all__ = [
    'auth_bp', 'users_bp', 'admin_bp',
    'UserStore', 'UserNotFound',
    'user_required', 'admin_required', 'get_request_uid', 'load_current_user',
]
