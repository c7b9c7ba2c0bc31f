"""
Cart Routes
===========

Handlers for the caller's cart. The variant of a line (``selectedSize``,
``selectedColor``) comes from the JSON body on every write.
"""

from flask import g, jsonify, request
from pymongo.errors import PyMongoError

from . import cart_bp
from .store import CartStore
from ..users.guards import user_required, load_current_user
from ...core.database import serialize_document
from ...core.responses import CLIENT_ERRORS, error_response, get_collection, server_error


def get_store():
    return CartStore(
        get_collection('CARTS_COLLECTION', 'carts'),
        get_collection('PRODUCTS_COLLECTION', 'products'),
    )


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _server_error(action, e):
    return server_error('cart', action, e, uid=g.get('uid'))


@cart_bp.route('', methods=['GET'])
@cart_bp.route('/', methods=['GET'])
@user_required
def get_cart():
    try:
        user = load_current_user()
        cart = get_store().get(user['_id'])
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('fetching cart', e)

    if cart is None:
        return jsonify({'message': 'Cart is empty or not found.', 'items': []}), 200
    return jsonify(serialize_document(cart)), 200


@cart_bp.route('/add', methods=['POST'])
@user_required
def add_item():
    data = _json_body()

    try:
        user = load_current_user()
        cart = get_store().add_item(
            user['_id'],
            data.get('productId'),
            data.get('quantity'),
            data.get('selectedSize'),
            data.get('selectedColor'),
        )
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('adding item to cart', e)

    return jsonify({'message': 'Item added/updated in cart.', 'cart': serialize_document(cart)}), 200


@cart_bp.route('/update/<product_id>', methods=['PUT'])
@user_required
def update_item(product_id):
    data = _json_body()

    try:
        user = load_current_user()
        cart = get_store().update_quantity(
            user['_id'],
            product_id,
            data.get('quantity'),
            data.get('selectedSize'),
            data.get('selectedColor'),
        )
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('updating cart item', e)

    return jsonify({'message': 'Cart updated successfully.', 'cart': serialize_document(cart)}), 200


@cart_bp.route('/remove/<product_id>', methods=['DELETE'])
@user_required
def remove_item(product_id):
    data = _json_body()

    try:
        user = load_current_user()
        cart = get_store().remove_item(
            user['_id'],
            product_id,
            data.get('selectedSize'),
            data.get('selectedColor'),
        )
    except CLIENT_ERRORS as e:
        return error_response(e)
    except PyMongoError as e:
        return _server_error('removing item from cart', e)

    return jsonify({'message': 'Item removed from cart.', 'cart': serialize_document(cart)}), 200
