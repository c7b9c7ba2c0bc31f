"""
Centralized logging service for the Pruto backend.
Writes structured entries to the app_logs collection and mirrors them to the
standard library logger.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta

from flask import current_app, request, has_app_context, has_request_context
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from .config import get_setting

_logger = logging.getLogger('pruto')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_logs_collection():
        """Return the app_logs collection, or None outside an app context"""
        if not has_app_context():
            return None
        ext = current_app.extensions.get('pruto')
        if ext is None or ext.database.db is None:
            return None
        return ext.database.collection(get_setting('LOGS_COLLECTION', 'app_logs'))

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the store

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (products, ops, public_api, etc.)
            message (str): Main log message
            details (str/dict): Additional details
            user_id (str): Optional user identifier
        """
        level = level.upper()
        _logger.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)

        try:
            collection = LoggingService._get_logs_collection()
            if collection is None:
                return

            ip_address, user_agent, request_path = LoggingService._get_request_context()

            if details is not None and not isinstance(details, str):
                details = json.dumps(details, indent=2, default=str)

            collection.insert_one({
                'timestamp': datetime.now().isoformat(),
                'level': level,
                'source': source,
                'message': message,
                'details': details,
                'ip_address': ip_address,
                'user_agent': user_agent,
                'request_path': request_path,
                'user_id': user_id,
            })

        except (PyMongoError, InvalidDocument, TypeError) as e:
            # Store unavailable or entry not encodable, keep the console entry only
            _logger.warning("Logging service error: %s", e)
            if details:
                _logger.warning("Details: %s", details)

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        collection = LoggingService._get_logs_collection()
        if collection is None:
            return 0

        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()

        try:
            result = collection.delete_many({'timestamp': {'$lt': cutoff_iso}})
        except PyMongoError as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0

        LoggingService.info('system', f"Cleaned up {result.deleted_count} old log entries")
        return result.deleted_count


# Convenience instance for easy importing
logger = LoggingService()
