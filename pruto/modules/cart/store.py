"""
Shopping cart store.

One cart document per user. A line is identified by product, size and
colour together, so the same product can sit in the cart in several
variants.
"""

from datetime import datetime

from ...core.database import Database, fetch_by_ids
from ...core.errors import NotFound, Invalid

ADD_INVALID = 'Product ID and quantity (min 1) are required.'
QUANTITY_INVALID = 'Quantity must be a non-negative number.'
ITEM_NOT_FOUND = 'Item not found in cart.'


def _is_count(value, minimum):
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def _same_line(item, product_oid, size, color):
    return (
        item.get('product') == product_oid
        and item.get('selectedSize') == size
        and item.get('selectedColor') == color
    )


class CartStore:
    """Cart lines per user over the carts collection"""

    def __init__(self, collection, products):
        self.collection = collection
        self.products = products

    def find(self, user_id):
        return self.collection.find_one({'user': user_id})

    def get(self, user_id):
        """The user's cart with products populated, or None"""
        cart = self.find(user_id)
        return self.populate(cart) if cart is not None else None

    def add_item(self, user_id, product_id, quantity, size=None, color=None):
        """
        Add ``quantity`` of a product variant.

        An existing line for the same variant has its quantity increased and
        its price refreshed from the product.
        """
        if not product_id or not _is_count(quantity, 1):
            raise Invalid(ADD_INVALID)

        oid = Database.parse_id(product_id)
        product = self.products.find_one({'_id': oid})
        if product is None:
            raise NotFound('Product not found.')

        cart = self.find(user_id) or {'user': user_id, 'items': [], 'createdAt': datetime.now()}
        items = list(cart.get('items') or [])

        for item in items:
            if _same_line(item, oid, size, color):
                item['quantity'] += quantity
                item['priceAtTimeOfAddition'] = product.get('price')
                break
        else:
            items.append({
                'product': oid,
                'quantity': quantity,
                'priceAtTimeOfAddition': product.get('price'),
                'selectedSize': size,
                'selectedColor': color,
            })

        return self._save(cart, items)

    def update_quantity(self, user_id, product_id, quantity, size=None, color=None):
        """Set a line's quantity; zero removes the line"""
        if not _is_count(quantity, 0):
            raise Invalid(QUANTITY_INVALID)

        oid = Database.parse_id(product_id)
        cart = self._require(user_id)
        items = list(cart.get('items') or [])

        for index, item in enumerate(items):
            if _same_line(item, oid, size, color):
                if quantity == 0:
                    del items[index]
                else:
                    item['quantity'] = quantity
                return self._save(cart, items)

        raise NotFound(ITEM_NOT_FOUND)

    def remove_item(self, user_id, product_id, size=None, color=None):
        oid = Database.parse_id(product_id)
        cart = self._require(user_id)
        items = cart.get('items') or []

        remaining = [item for item in items if not _same_line(item, oid, size, color)]
        if len(remaining) == len(items):
            raise NotFound(ITEM_NOT_FOUND)
        return self._save(cart, remaining)

    def clear(self, user_id):
        self.collection.update_one(
            {'user': user_id},
            {'$set': {'items': [], 'updatedAt': datetime.now()}},
        )

    def populate(self, cart):
        """Copy of the cart with each line's product id replaced by the product"""
        items = cart.get('items') or []
        found = fetch_by_ids(self.products, {item['product'] for item in items})
        populated = dict(cart)
        # A product deleted since it was added shows as null
        populated['items'] = [{**item, 'product': found.get(item['product'])} for item in items]
        return populated

    def _require(self, user_id):
        cart = self.find(user_id)
        if cart is None:
            raise NotFound('Cart not found.')
        return cart

    def _save(self, cart, items):
        cart = dict(cart)
        cart['items'] = items
        cart['updatedAt'] = datetime.now()

        if '_id' in cart:
            self.collection.update_one(
                {'_id': cart['_id']},
                {'$set': {'items': items, 'updatedAt': cart['updatedAt']}},
            )
        else:
            cart['_id'] = self.collection.insert_one(cart).inserted_id
        return self.populate(cart)
