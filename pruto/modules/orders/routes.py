"""
Order Routes
============
"""

from flask import g, jsonify, request
from pymongo.errors import PyMongoError

from . import orders_bp
from .store import OrderStore
from ..users.guards import user_required, load_current_user
from ...core.database import serialize_document
from ...core.logging_service import LoggingService
from ...core.responses import CLIENT_ERRORS, error_response, get_collection, server_error


def get_store():
    return OrderStore(
        get_collection('ORDERS_COLLECTION', 'orders'),
        carts=get_collection('CARTS_COLLECTION', 'carts'),
        users=get_collection('USERS_COLLECTION', 'users'),
        products=get_collection('PRODUCTS_COLLECTION', 'products'),
    )


def _server_error(action, e):
    return server_error('orders', action, e, uid=g.get('uid'))


@orders_bp.route('', methods=['POST'])
@orders_bp.route('/', methods=['POST'])
@user_required
def create_order():
    """Place an order for everything in the caller's cart"""
    data = request.get_json(silent=True)
    data = data if isinstance(data, dict) else {}

    try:
        user = load_current_user()
        order = get_store().create(user, data.get('shippingAddressId'), data.get('paymentMethod'))
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('creating order', e)

    LoggingService.info(
        'orders',
        f"Created order {order['_id']}",
        {'totalAmount': order['totalAmount'], 'items': len(order['items'])},
        user_id=g.uid,
    )
    return jsonify({'message': 'Order created successfully!', 'order': serialize_document(order)}), 201


@orders_bp.route('', methods=['GET'])
@orders_bp.route('/', methods=['GET'])
@user_required
def list_orders():
    try:
        user = load_current_user()
        orders = get_store().list_for_user(user['_id'])
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('fetching orders', e)

    return jsonify(serialize_document(orders)), 200


@orders_bp.route('/<order_id>', methods=['GET'])
@user_required
def get_order(order_id):
    try:
        user = load_current_user()
        order = get_store().get_for_user(user['_id'], order_id)
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('fetching order', e)

    return jsonify(serialize_document(order)), 200
