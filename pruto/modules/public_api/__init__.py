"""
Public API Client Module
========================

HTTP helper for reading the backend from other services and front-ends.

Usage:
    from pruto.modules.public_api import PublicApiClient

    client = PublicApiClient('https://shop.example.com')
    products = client.fetch_public('/products')
"""

from .service import (
    PublicApiClient,
    ApiError,
    AuthenticationRequired,
    fetch_public,
    fetch_with_auth,
    get_default_client,
)

__all__ = [
    'PublicApiClient', 'ApiError', 'AuthenticationRequired',
    'fetch_public', 'fetch_with_auth', 'get_default_client',
]
