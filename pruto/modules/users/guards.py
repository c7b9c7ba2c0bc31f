"""
Request guards identifying the caller by platform uid.

The uid is trusted as sent: the ``X-Firebase-UID`` header, else a
``firebaseUid`` field in the JSON body, else the ``firebaseUid`` query
parameter. Token verification is not performed.
"""

from functools import wraps

from flask import g, request
from pymongo.errors import PyMongoError

from .store import UserNotFound
from ...core.responses import get_collection, json_error, server_error

UID_HEADER = 'X-Firebase-UID'
UID_MISSING = 'Firebase UID missing. Authentication required.'
NOT_ADMIN = 'Access denied: Not an administrator'


def get_request_uid():
    uid = request.headers.get(UID_HEADER)
    if not uid:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            uid = body.get('firebaseUid')
    if not uid:
        uid = request.args.get('firebaseUid')
    return uid or None


def user_required(f):
    """Decorator to require a caller uid, stored on ``g.uid``"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        uid = get_request_uid()
        if not uid:
            return json_error(UID_MISSING, 401)
        g.uid = uid
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require a caller whose stored profile has the admin role"""
    @wraps(f)
    @user_required
    def decorated_function(*args, **kwargs):
        try:
            user = get_collection('USERS_COLLECTION', 'users').find_one({'firebaseUid': g.uid})
        except PyMongoError as e:
            return server_error('users', 'checking admin role', e, uid=g.uid)

        if user is None or user.get('role') != 'admin':
            return json_error(NOT_ADMIN, 403)
        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function


def load_current_user():
    """Stored profile of the guarded caller, raises UserNotFound"""
    user = get_collection('USERS_COLLECTION', 'users').find_one({'firebaseUid': g.uid})
    if user is None:
        raise UserNotFound()
    return user
