"""
Product Routes
==============

Thin handlers mapping the REST verbs onto ProductStore. Bodies are stored
as sent; only the identifier format, the body type and top-level key
shape are checked.
"""

from flask import jsonify, request
from pymongo.errors import DuplicateKeyError, PyMongoError

from . import products_bp
from .store import ProductStore, ProductNotFound
from ...core.database import InvalidObjectId
from ...core.errors import Invalid
from ...core.logging_service import LoggingService
from ...core.responses import get_collection, json_error, server_error

NOT_FOUND = 'Product not found.'
INVALID_ID = 'Invalid product ID format.'
DUPLICATE = 'A product with this name or SKU already exists.'
NOT_AN_OBJECT = 'Request body must be a JSON object.'


def get_store():
    """ProductStore bound to the app's products collection"""
    return ProductStore(get_collection('PRODUCTS_COLLECTION', 'products'))


def _json_body():
    """Parsed request body if it is a JSON object, else None"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _server_error(action, e, product_id=None):
    return server_error('products', action, e, product_id=product_id)


@products_bp.route('', methods=['GET'])
@products_bp.route('/', methods=['GET'])
def list_products():
    """Get all products"""
    try:
        products = get_store().list()
    except PyMongoError as e:
        return _server_error('fetching products', e)

    return jsonify(products), 200


@products_bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    """Get a single product by ID"""
    try:
        product = get_store().get_by_id(product_id)
    except InvalidObjectId:
        return json_error(INVALID_ID, 400)
    except ProductNotFound:
        return json_error(NOT_FOUND, 404)
    except PyMongoError as e:
        return _server_error('fetching product', e, product_id)

    return jsonify(product), 200


@products_bp.route('', methods=['POST'])
@products_bp.route('/', methods=['POST'])
def create_product():
    """Create a new product from the request body"""
    data = _json_body()
    if data is None:
        return json_error(NOT_AN_OBJECT, 400)

    try:
        product = get_store().create(data)
    except Invalid as e:
        return json_error(e.message, 400)
    except DuplicateKeyError:
        return json_error(DUPLICATE, 409)
    except PyMongoError as e:
        return _server_error('creating product', e)

    LoggingService.info('products', f"Created product {product['_id']}")
    return jsonify(product), 201


@products_bp.route('/<product_id>', methods=['PUT', 'PATCH'])
def update_product(product_id):
    """Merge the request body into an existing product"""
    data = _json_body()
    if data is None:
        return json_error(NOT_AN_OBJECT, 400)

    try:
        product = get_store().update(product_id, data)
    except InvalidObjectId:
        return json_error(INVALID_ID, 400)
    except Invalid as e:
        return json_error(e.message, 400)
    except ProductNotFound:
        return json_error(NOT_FOUND, 404)
    except DuplicateKeyError:
        return json_error(DUPLICATE, 409)
    except PyMongoError as e:
        return _server_error('updating product', e, product_id)

    return jsonify(product), 200


@products_bp.route('/<product_id>', methods=['DELETE'])
def delete_product(product_id):
    """Delete a product"""
    try:
        get_store().delete(product_id)
    except InvalidObjectId:
        return json_error(INVALID_ID, 400)
    except ProductNotFound:
        return json_error(NOT_FOUND, 404)
    except PyMongoError as e:
        return _server_error('deleting product', e, product_id)

    LoggingService.info('products', f"Deleted product {product_id}")
    return '', 204
