"""
Pruto - Product Catalog Backend
===============================

A Flask extension serving a product catalog from MongoDB:
- REST CRUD over /products
- Customer profiles, carts and orders keyed by the platform uid
- Health and status endpoints
- A JSON client for consuming the API from other services

Usage:
    from flask import Flask
    from pruto import Pruto

    app = Flask(__name__)
    pruto = Pruto(app)
"""

__version__ = '0.1.0'
__author__ = 'Pruto Team'

import logging

from flask_cors import CORS

from .core.config import Config
from .core.database import Database
from .core.platform import PlatformClient, PlatformConfig

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'products': True,
    'users': True,
    'cart': True,
    'orders': True,
    'admin': True,
    'ops': True,
}


class Pruto:
    """Flask extension wiring the store, platform handle and blueprints"""

    def __init__(self, app=None, config=None, mongo_client=None):
        self._config = config or {}
        self._registered_modules = []
        self.database = Database()
        self.platform = None
        if app is not None:
            self.init_app(app, mongo_client=mongo_client)

    def init_app(self, app, mongo_client=None):
        self._apply_defaults(app)

        self.database.init_app(app, client=mongo_client)
        self.platform = PlatformClient(PlatformConfig.from_app_config(app.config))

        app.extensions['pruto'] = self

        self._setup_cors(app)
        self._register_modules(app)

        logger.info(f"Pruto initialised with modules: {', '.join(self._registered_modules)}")

    def _apply_defaults(self, app):
        """Fill Flask config from Config where the host app left gaps"""
        app.config.setdefault('MONGO_URI', Config.MONGO_URI)
        app.config.setdefault('PRODUCTS_COLLECTION', Config.PRODUCTS_COLLECTION)
        app.config.setdefault('USERS_COLLECTION', Config.USERS_COLLECTION)
        app.config.setdefault('CARTS_COLLECTION', Config.CARTS_COLLECTION)
        app.config.setdefault('ORDERS_COLLECTION', Config.ORDERS_COLLECTION)
        app.config.setdefault('LOGS_COLLECTION', Config.LOGS_COLLECTION)
        app.config.setdefault('CORS_ORIGINS', Config.CORS_ORIGINS)
        if not app.config.get('SECRET_KEY') and Config.SECRET_KEY:
            app.config['SECRET_KEY'] = Config.SECRET_KEY

    def _setup_cors(self, app):
        origins = app.config.get('CORS_ORIGINS')
        if origins is None:
            origins = '*'
        if isinstance(origins, str) and origins != '*':
            origins = [o.strip() for o in origins.split(',') if o.strip()]
        if not origins:
            # Empty setting: same-origin only
            logger.info("CORS_ORIGINS is empty, cross-origin requests are not allowed")
            return
        CORS(app, resources={r"/*": {"origins": origins}})

    def is_enabled(self, feature):
        features = self._config.get('features', {})
        return features.get(feature, DEFAULT_FEATURES.get(feature, False))

    def _register_modules(self, app):
        if self.is_enabled('ops'):
            from .modules.ops import ops_bp
            app.register_blueprint(ops_bp)
            self._registered_modules.append('ops')

        if self.is_enabled('products'):
            from .modules.products import products_bp
            app.register_blueprint(products_bp)
            self._registered_modules.append('products')

        if self.is_enabled('users'):
            from .modules.users import auth_bp, users_bp
            app.register_blueprint(auth_bp)
            app.register_blueprint(users_bp)
            self._registered_modules.append('users')

        if self.is_enabled('cart'):
            from .modules.cart import cart_bp
            app.register_blueprint(cart_bp)
            self._registered_modules.append('cart')

        if self.is_enabled('orders'):
            from .modules.orders import orders_bp
            app.register_blueprint(orders_bp)
            self._registered_modules.append('orders')

        if self.is_enabled('admin'):
            from .modules.users import admin_bp
            app.register_blueprint(admin_bp)
            self._registered_modules.append('admin')

    def get_registered_modules(self):
        return list(self._registered_modules)


__all__ = ['Pruto', 'Config']
