import os
from dotenv import load_dotenv

load_dotenv(override=True)


def resolve_server_url(environ=None):
    """SERVER_URL, falling back to the front-end's NEXT_PUBLIC_SERVER_URL"""
    environ = os.environ if environ is None else environ
    return environ.get('SERVER_URL') or environ.get('NEXT_PUBLIC_SERVER_URL')


class Config:
    """
    Base configuration for the Pruto backend.
    Deployments provide the store URI and platform keys via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # MongoDB
    MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017/pruto')

    # Collection names
    PRODUCTS_COLLECTION = os.getenv('PRODUCTS_COLLECTION', 'products')
    USERS_COLLECTION = os.getenv('USERS_COLLECTION', 'users')
    CARTS_COLLECTION = os.getenv('CARTS_COLLECTION', 'carts')
    ORDERS_COLLECTION = os.getenv('ORDERS_COLLECTION', 'orders')
    LOGS_COLLECTION = os.getenv('LOGS_COLLECTION', 'app_logs')

    # Base URL of this backend, used by the public API client
    SERVER_URL = resolve_server_url()

    # Comma separated list, "*" allows any origin, empty allows none
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Auth / storage / analytics platform project
    FIREBASE_API_KEY = os.getenv('FIREBASE_API_KEY')
    FIREBASE_AUTH_DOMAIN = os.getenv('FIREBASE_AUTH_DOMAIN')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID')
    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')
    FIREBASE_MESSAGING_SENDER_ID = os.getenv('FIREBASE_MESSAGING_SENDER_ID')
    FIREBASE_APP_ID = os.getenv('FIREBASE_APP_ID')
    FIREBASE_MEASUREMENT_ID = os.getenv('FIREBASE_MEASUREMENT_ID')

    # Port for local server
    port = int(os.getenv('PORT', '5000'))


def get_setting(name, default=None):
    """Resolve a setting: Flask app config, then Config, then default."""
    try:
        from flask import current_app
        val = current_app.config.get(name)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, name, None)
    return val if val is not None else default
