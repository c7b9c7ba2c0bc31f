"""
Pruto Core
==========

Core utilities and shared functionality for Pruto modules.
"""

from .config import Config
from .database import Database, InvalidObjectId, check_field_names, fetch_by_ids, serialize_document
from .errors import NotFound, Invalid, InvalidFieldName, Conflict, Forbidden
from .logging_service import LoggingService, logger
from .platform import PlatformClient, PlatformConfig, PlatformNotConfigured

__all__ = [
    'Config', 'Database', 'InvalidObjectId', 'check_field_names', 'fetch_by_ids',
    'serialize_document',
    'NotFound', 'Invalid', 'InvalidFieldName', 'Conflict', 'Forbidden',
    'LoggingService', 'logger',
    'PlatformClient', 'PlatformConfig', 'PlatformNotConfigured',
]
