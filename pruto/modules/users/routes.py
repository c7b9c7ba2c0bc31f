"""
User Routes
===========

Profile, address, wishlist and admin handlers over UserStore. Every route
is guarded by the caller uid; admin routes also require the admin role.
"""

from flask import g, jsonify, request
from pymongo.errors import DuplicateKeyError, PyMongoError

from . import auth_bp, users_bp, admin_bp
from .guards import user_required, admin_required
from .store import UserStore
from ...core.database import serialize_document
from ...core.logging_service import LoggingService
from ...core.responses import CLIENT_ERRORS, error_response, get_collection, json_error, server_error

NOT_AN_OBJECT = 'Request body must be a JSON object.'
EMAIL_TAKEN = 'A user with this email already exists.'


def get_store():
    return UserStore(
        get_collection('USERS_COLLECTION', 'users'),
        products=get_collection('PRODUCTS_COLLECTION', 'products'),
    )


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _server_error(action, e):
    return server_error('users', action, e, uid=g.get('uid'))


# ---------------------------------------------------------------------------
# Sign-in sync
# ---------------------------------------------------------------------------

@auth_bp.route('/login', methods=['POST'])
@user_required
def login():
    """Create or refresh the caller's profile after a platform sign-in"""
    data = _json_body() or {}

    try:
        user, created = get_store().sync(
            g.uid, data.get('email'), data.get('firstName'), data.get('lastName')
        )
    except CLIENT_ERRORS as e:
        return error_response(e)
    except DuplicateKeyError:
        return json_error(EMAIL_TAKEN, 409)
    except PyMongoError as e:
        return _server_error('syncing user', e)

    if created:
        LoggingService.info('users', f"Registered user {user['_id']}", user_id=g.uid)
        return jsonify({'message': 'User registered successfully.', 'user': serialize_document(user)}), 201
    return jsonify({'message': 'User synced successfully.', 'user': serialize_document(user)}), 200


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@users_bp.route('/profile', methods=['GET'])
@user_required
def get_profile():
    try:
        user = get_store().get_by_uid(g.uid, 'User profile not found.')
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('fetching user profile', e)

    return jsonify(serialize_document(user)), 200


@users_bp.route('/profile', methods=['PUT'])
@user_required
def update_profile():
    """Update profile fields; uid, email and role cannot be changed here"""
    data = _json_body()
    if data is None:
        return json_error(NOT_AN_OBJECT, 400)

    try:
        user = get_store().update_profile(g.uid, data)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('updating user profile', e)

    return jsonify({'message': 'User profile updated successfully.', 'user': serialize_document(user)}), 200


# ---------------------------------------------------------------------------
# Shipping addresses
# ---------------------------------------------------------------------------

@users_bp.route('/addresses', methods=['POST'])
@user_required
def add_address():
    data = _json_body()
    if data is None:
        return json_error(NOT_AN_OBJECT, 400)

    try:
        addresses = get_store().add_address(g.uid, data)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('adding shipping address', e)

    return jsonify({'message': 'Shipping address added.', 'addresses': serialize_document(addresses)}), 201


@users_bp.route('/addresses/<address_id>', methods=['PUT'])
@user_required
def update_address(address_id):
    data = _json_body()
    if data is None:
        return json_error(NOT_AN_OBJECT, 400)

    try:
        addresses = get_store().update_address(g.uid, address_id, data)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('updating shipping address', e)

    return jsonify({'message': 'Shipping address updated.', 'addresses': serialize_document(addresses)}), 200


@users_bp.route('/addresses/<address_id>', methods=['DELETE'])
@user_required
def delete_address(address_id):
    try:
        addresses = get_store().delete_address(g.uid, address_id)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('deleting shipping address', e)

    return jsonify({'message': 'Shipping address deleted.', 'addresses': serialize_document(addresses)}), 200


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------

@users_bp.route('/wishlist', methods=['GET'])
@user_required
def get_wishlist():
    try:
        wishlist = get_store().get_wishlist(g.uid)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('fetching wishlist', e)

    return jsonify({'wishlist': serialize_document(wishlist)}), 200


@users_bp.route('/wishlist/<product_id>', methods=['POST'])
@user_required
def add_to_wishlist(product_id):
    try:
        wishlist = get_store().add_to_wishlist(g.uid, product_id)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('adding to wishlist', e)

    return jsonify({'message': 'Product added to wishlist.', 'wishlist': serialize_document(wishlist)}), 200


@users_bp.route('/wishlist/<product_id>', methods=['DELETE'])
@user_required
def remove_from_wishlist(product_id):
    try:
        wishlist = get_store().remove_from_wishlist(g.uid, product_id)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('removing from wishlist', e)

    return jsonify({'message': 'Product removed from wishlist.', 'wishlist': serialize_document(wishlist)}), 200


# ---------------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------------

@admin_bp.route('/users', methods=['GET'])
@admin_required
def list_users():
    try:
        users = get_store().list_users()
    except PyMongoError as e:
        return _server_error('fetching users', e)

    return jsonify(users), 200


@admin_bp.route('/users/<user_id>/role', methods=['PUT'])
@admin_required
def set_user_role(user_id):
    data = _json_body() or {}

    try:
        user = get_store().set_role(user_id, data.get('role'), g.uid)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('updating user role', e)

    LoggingService.info('users', f"Role of user {user_id} set to {user['role']}", user_id=g.uid)
    return jsonify({'message': 'User role updated successfully.', 'user': serialize_document(user)}), 200


@admin_bp.route('/users/<user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    try:
        get_store().delete_user(user_id, g.uid)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('deleting user', e)

    LoggingService.info('users', f"Deleted user {user_id}", user_id=g.uid)
    return jsonify({'message': 'User deleted successfully.'}), 200
