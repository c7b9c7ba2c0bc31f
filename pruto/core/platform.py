"""
Platform Handle
===============

Auth / storage / analytics project configuration, built once at startup
and handed to whatever needs it through ``app.extensions['pruto'].platform``.
"""

from typing import Optional, Dict
from urllib.parse import quote

from .config import Config

# attribute name -> (config key, browser SDK key)
PLATFORM_KEYS = {
    'api_key': ('FIREBASE_API_KEY', 'apiKey'),
    'auth_domain': ('FIREBASE_AUTH_DOMAIN', 'authDomain'),
    'project_id': ('FIREBASE_PROJECT_ID', 'projectId'),
    'storage_bucket': ('FIREBASE_STORAGE_BUCKET', 'storageBucket'),
    'messaging_sender_id': ('FIREBASE_MESSAGING_SENDER_ID', 'messagingSenderId'),
    'app_id': ('FIREBASE_APP_ID', 'appId'),
    'measurement_id': ('FIREBASE_MEASUREMENT_ID', 'measurementId'),
}


class PlatformNotConfigured(RuntimeError):
    """Raised when a platform feature is used without its settings"""


class PlatformConfig:
    """Project settings for the auth/storage/analytics platform"""

    def __init__(self, api_key: Optional[str] = None, auth_domain: Optional[str] = None,
                 project_id: Optional[str] = None, storage_bucket: Optional[str] = None,
                 messaging_sender_id: Optional[str] = None, app_id: Optional[str] = None,
                 measurement_id: Optional[str] = None):
        self.api_key = api_key
        self.auth_domain = auth_domain
        self.project_id = project_id
        self.storage_bucket = storage_bucket
        self.messaging_sender_id = messaging_sender_id
        self.app_id = app_id
        self.measurement_id = measurement_id

    @classmethod
    def from_app_config(cls, app_config=None) -> 'PlatformConfig':
        """
        Build from Flask config, falling back to Config (environment).

        Args:
            app_config: Mapping such as ``app.config`` (optional)
        """
        app_config = app_config or {}
        values = {}
        for attr, (config_key, _) in PLATFORM_KEYS.items():
            values[attr] = app_config.get(config_key) or getattr(Config, config_key, None)
        return cls(**values)

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {attr: getattr(self, attr) for attr in PLATFORM_KEYS}


class PlatformClient:
    """Process-wide handle to the auth/storage/analytics project"""

    STORAGE_URL = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media"

    def __init__(self, config: PlatformConfig):
        self.config = config

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key and self.config.project_id)

    def client_config(self) -> Dict[str, str]:
        """Settings for initializing the browser SDK. Unset values are omitted."""
        return {
            PLATFORM_KEYS[attr][1]: value
            for attr, value in self.config.as_dict().items()
            if value
        }

    def storage_url(self, path: str) -> str:
        """Public download URL for an object in the storage bucket"""
        if not self.config.storage_bucket:
            raise PlatformNotConfigured("FIREBASE_STORAGE_BUCKET is not set")
        return self.STORAGE_URL.format(
            bucket=self.config.storage_bucket,
            path=quote(path.lstrip('/'), safe=''),
        )
