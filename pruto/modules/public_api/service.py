# pruto/modules/public_api/service.py
import logging
from typing import Optional, Dict, Any
from urllib.parse import urlsplit

import requests

from ...core.config import Config

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-success response from the backend"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class AuthenticationRequired(ApiError):
    """Authenticated call attempted without a signed-in user"""


class PublicApiClient:
    """JSON helper for calling the backend without authentication"""

    DEFAULT_HEADERS = {'Content-Type': 'application/json'}

    def __init__(self, base_url: str = None, session: requests.Session = None):
        self.base_url = base_url if base_url is not None else Config.SERVER_URL
        self.session = session or requests.Session()

    def build_url(self, url: str) -> str:
        """Join a relative path onto base_url; absolute URLs pass through"""
        if urlsplit(url).scheme in ('http', 'https'):
            return url
        if not self.base_url:
            raise ValueError(f"Relative URL '{url}' needs SERVER_URL to be configured")
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"

    def fetch_public(self, url: str, method: str = 'GET',
                     headers: Optional[Dict[str, str]] = None, **options) -> Any:
        """
        Perform one request and return the parsed JSON body

        Args:
            url: Absolute URL, or a path relative to base_url
            method: HTTP method (default GET)
            headers: Extra headers, these win over the JSON defaults
            **options: Passed through to requests (json, data, params, timeout, ...)

        Raises:
            ApiError: On a non-2xx status, carrying the server's ``message``
            requests.RequestException: On transport failure
        """
        merged_headers = {**self.DEFAULT_HEADERS, **(headers or {})}
        response = self.session.request(method, self.build_url(url), headers=merged_headers, **options)
        return self._handle_response(response)

    def fetch_with_auth(self, url: str, user: Any, method: str = 'GET',
                        headers: Optional[Dict[str, str]] = None, **options) -> Any:
        """
        Same as fetch_public, for routes that need a signed-in user.

        ``user`` is the current platform user (an object with ``uid`` or a
        dict with a ``'uid'`` key); its uid goes out as ``X-Firebase-UID``.
        """
        if not user:
            logger.warning("Attempted authenticated fetch without a logged-in user")
            raise AuthenticationRequired('Authentication required: No user logged in.')

        uid = user.get('uid') if isinstance(user, dict) else getattr(user, 'uid', None)
        if not uid:
            raise AuthenticationRequired('Authentication required: user has no uid.')

        auth_headers = {**(headers or {}), 'X-Firebase-UID': uid}
        return self.fetch_public(url, method=method, headers=auth_headers, **options)

    def list_products(self) -> Any:
        return self.fetch_public('/products')

    def get_product(self, product_id: str) -> Any:
        return self.fetch_public(f'/products/{product_id}')

    def get_cart(self, user: Any) -> Any:
        return self.fetch_with_auth('/cart', user)

    def list_orders(self, user: Any) -> Any:
        return self.fetch_with_auth('/orders', user)

    @staticmethod
    def _handle_response(response: requests.Response) -> Any:
        if not 200 <= response.status_code < 300:
            try:
                error_data = response.json()
            except ValueError:
                error_data = None

            message = None
            if isinstance(error_data, dict):
                message = error_data.get('message')
            if not message:
                message = f"HTTP error! status: {response.status_code}"

            raise ApiError(message, status_code=response.status_code, payload=error_data)

        # 204 and other empty bodies
        if not response.content:
            return None
        return response.json()


_default_client = None


def get_default_client() -> PublicApiClient:
    """Shared client built from Config on first use"""
    global _default_client
    if _default_client is None:
        _default_client = PublicApiClient()
    return _default_client


def fetch_public(url: str, **kwargs) -> Any:
    return get_default_client().fetch_public(url, **kwargs)


def fetch_with_auth(url: str, user: Any, **kwargs) -> Any:
    return get_default_client().fetch_with_auth(url, user, **kwargs)
