"""
Order store.

An order is cut from the user's cart at the products' current prices and
snapshots the chosen shipping address. Creating one appends it to the
user's order list and empties the cart.
"""

from datetime import datetime

from pymongo import DESCENDING

from ...core.database import Database, fetch_by_ids
from ...core.errors import NotFound, Invalid

ADDRESS_FIELDS = ('street', 'city', 'state', 'zipCode', 'country')

ORDER_NOT_FOUND = 'Order not found or you do not have permission to view it.'


class OrderStore:
    """Orders over the orders collection, fed from carts and users"""

    def __init__(self, collection, carts, users, products):
        self.collection = collection
        self.carts = carts
        self.users = users
        self.products = products

    def create(self, user, shipping_address_id, payment_method=None):
        cart = self.carts.find_one({'user': user['_id']})
        cart_items = (cart or {}).get('items') or []
        if not cart_items:
            raise Invalid('Cannot create order: Cart is empty.')

        address = _find_address(user, shipping_address_id)
        if address is None:
            raise Invalid('Invalid shipping address selected.')

        found = fetch_by_ids(self.products, {item['product'] for item in cart_items})
        items = []
        total = 0
        for cart_item in cart_items:
            product = found.get(cart_item['product'])
            if product is None:
                raise Invalid('A product in the cart is no longer available.')
            price = product.get('price') or 0
            total += price * cart_item['quantity']
            items.append({
                'product': product['_id'],
                'name': product.get('name'),
                'quantity': cart_item['quantity'],
                'price': price,
                'selectedSize': cart_item.get('selectedSize'),
                'selectedColor': cart_item.get('selectedColor'),
            })

        now = datetime.now()
        order = {
            'user': user['_id'],
            'items': items,
            'totalAmount': total,
            'shippingAddress': {field: address.get(field) for field in ADDRESS_FIELDS},
            'paymentMethod': payment_method,
            'paymentStatus': 'pending',
            'orderStatus': 'pending',
            'trackingNumber': None,
            'createdAt': now,
            'updatedAt': now,
        }
        order['_id'] = self.collection.insert_one(order).inserted_id

        self.users.update_one({'_id': user['_id']}, {'$push': {'orders': order['_id']}})
        self.carts.update_one({'_id': cart['_id']}, {'$set': {'items': [], 'updatedAt': now}})
        return order

    def list_for_user(self, user_id):
        """The user's orders, newest first"""
        cursor = self.collection.find({'user': user_id}).sort([('createdAt', DESCENDING), ('_id', DESCENDING)])
        return [self.populate(order) for order in cursor]

    def get_for_user(self, user_id, order_id):
        oid = Database.parse_id(order_id)
        order = self.collection.find_one({'_id': oid, 'user': user_id})
        if order is None:
            raise NotFound(ORDER_NOT_FOUND)
        return self.populate(order)

    def populate(self, order):
        items = order.get('items') or []
        found = fetch_by_ids(self.products, {item['product'] for item in items})
        populated = dict(order)
        populated['items'] = [{**item, 'product': found.get(item['product'], item['product'])} for item in items]
        return populated


def _find_address(user, address_id):
    try:
        oid = Database.parse_id(address_id)
    except Invalid:
        return None
    for address in user.get('shippingAddresses') or []:
        if address.get('_id') == oid:
            return address
    return None
