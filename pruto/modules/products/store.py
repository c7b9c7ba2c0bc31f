"""
Product store operations.

Each method is a single read or write against the products collection.
Documents are stored as given; no schema is enforced here.
"""

from pymongo import ReturnDocument

from ...core.database import Database, check_field_names, serialize_document


class ProductNotFound(LookupError):
    """No product exists for the given identifier"""

    def __init__(self, product_id):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ProductStore:
    """CRUD over a MongoDB products collection"""

    def __init__(self, collection):
        self.collection = collection

    def list(self):
        """All products in the store's natural order"""
        return [serialize_document(doc) for doc in self.collection.find({})]

    def get_by_id(self, product_id):
        oid = Database.parse_id(product_id)
        doc = self.collection.find_one({'_id': oid})
        if doc is None:
            raise ProductNotFound(product_id)
        return serialize_document(doc)

    def create(self, data):
        """Insert a new product and return it with its assigned _id"""
        doc = dict(data)
        # The store assigns identifiers
        doc.pop('_id', None)
        check_field_names(doc)
        result = self.collection.insert_one(doc)
        doc['_id'] = result.inserted_id
        return serialize_document(doc)

    def update(self, product_id, data):
        """
        Merge the given fields into an existing product.

        Fields absent from ``data`` are kept. Returns the document as it is
        after the update.
        """
        oid = Database.parse_id(product_id)
        fields = {key: value for key, value in data.items() if key != '_id'}
        check_field_names(fields)

        if fields:
            doc = self.collection.find_one_and_update(
                {'_id': oid},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
        else:
            doc = self.collection.find_one({'_id': oid})

        if doc is None:
            raise ProductNotFound(product_id)
        return serialize_document(doc)

    def delete(self, product_id):
        oid = Database.parse_id(product_id)
        doc = self.collection.find_one_and_delete({'_id': oid})
        if doc is None:
            raise ProductNotFound(product_id)
        return serialize_document(doc)
