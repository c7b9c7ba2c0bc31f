"""
JSON response helpers used by every blueprint.
"""

import logging
from flask import current_app, jsonify

from .config import get_setting
from .errors import NotFound, Invalid, Conflict, Forbidden
from .logging_service import LoggingService

logger = logging.getLogger(__name__)

# Store exceptions that describe a caller mistake rather than a failure
CLIENT_ERRORS = (NotFound, Invalid, Conflict, Forbidden)

_STATUS = (
    (NotFound, 404),
    (Invalid, 400),
    (Conflict, 409),
    (Forbidden, 403),
)


def json_error(message, status):
    return jsonify({'message': message}), status


def error_response(error):
    """JSON response for one of CLIENT_ERRORS"""
    for error_class, status in _STATUS:
        if isinstance(error, error_class):
            return json_error(error.message, status)
    raise error


def server_error(source, action, error, **details):
    """Log a store failure with traceback and answer 500"""
    logger.error(f"Error {action}: {error}")
    LoggingService.log_error_with_traceback(source, error, {'action': action, **details})
    return json_error(f'Server error {action}.', 500)


def get_collection(setting, default):
    """Collection named by a config setting, on the app's database"""
    database = current_app.extensions['pruto'].database
    return database.collection(get_setting(setting, default))
