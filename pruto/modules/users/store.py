"""
User profile store.

Users are keyed by the platform uid (``firebaseUid``). Shipping addresses
and the wishlist are embedded in the user document and rewritten as a
whole, so each change is a single write.
"""

from datetime import datetime

from bson import ObjectId
from pymongo import ReturnDocument

from ...core.database import Database, check_field_names, fetch_by_ids, serialize_document
from ...core.errors import NotFound, Invalid, Conflict, Forbidden

ROLES = ('user', 'admin')
ADDRESS_FIELDS = ('street', 'city', 'state', 'zipCode', 'country')

# Managed by their own operations, never by a profile update
PROTECTED_FIELDS = (
    '_id', 'firebaseUid', 'email', 'role',
    'shippingAddresses', 'wishlist', 'orders', 'createdAt', 'updatedAt',
)

ADDRESS_REQUIRED = 'All address fields (street, city, state, zipCode, country) are required.'


class UserNotFound(NotFound):
    def __init__(self, message='User not found.'):
        super().__init__(message)


class UserStore:
    """Profiles, addresses, wishlist and roles over the users collection"""

    def __init__(self, collection, products=None):
        self.collection = collection
        self.products = products

    # -- lookup ------------------------------------------------------------

    def find_by_uid(self, uid):
        return self.collection.find_one({'firebaseUid': uid})

    def get_by_uid(self, uid, message='User not found.'):
        user = self.find_by_uid(uid)
        if user is None:
            raise UserNotFound(message)
        return user

    # -- sign-in sync ------------------------------------------------------

    def sync(self, uid, email, first_name=None, last_name=None):
        """
        Create or refresh the profile for a signed-in platform user.

        Returns ``(user, created)``. New profiles start with the ``user``
        role and empty address, wishlist and order lists.
        """
        if not uid or not isinstance(email, str) or not email.strip():
            raise Invalid('Firebase UID and email are required.')

        now = datetime.now()
        email = email.strip().lower()
        user = self.find_by_uid(uid)

        if user is None:
            user = {
                'firebaseUid': uid,
                'email': email,
                'firstName': first_name or '',
                'lastName': last_name or '',
                'phone': '',
                'shippingAddresses': [],
                'wishlist': [],
                'orders': [],
                'role': 'user',
                'createdAt': now,
                'updatedAt': now,
            }
            result = self.collection.insert_one(user)
            user['_id'] = result.inserted_id
            return user, True

        fields = {'email': email, 'updatedAt': now}
        if first_name is not None:
            fields['firstName'] = first_name
        if last_name is not None:
            fields['lastName'] = last_name

        user = self.collection.find_one_and_update(
            {'_id': user['_id']},
            {'$set': fields},
            return_document=ReturnDocument.AFTER,
        )
        return user, False

    # -- profile -----------------------------------------------------------

    def update_profile(self, uid, data):
        fields = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        check_field_names(fields)
        fields['updatedAt'] = datetime.now()

        user = self.collection.find_one_and_update(
            {'firebaseUid': uid},
            {'$set': fields},
            return_document=ReturnDocument.AFTER,
        )
        if user is None:
            raise UserNotFound('User profile not found.')
        return user

    # -- shipping addresses ------------------------------------------------

    def add_address(self, uid, data):
        """Append an address; the first one, or one marked default, becomes the default"""
        if any(not data.get(field) for field in ADDRESS_FIELDS):
            raise Invalid(ADDRESS_REQUIRED)

        user = self.get_by_uid(uid)
        addresses = list(user.get('shippingAddresses') or [])

        address = {'_id': ObjectId(), 'addressName': data.get('addressName') or ''}
        address.update({field: data[field] for field in ADDRESS_FIELDS})
        address['isDefault'] = bool(data.get('isDefault')) or not addresses

        if address['isDefault']:
            _clear_default(addresses)
        addresses.append(address)

        self._save_addresses(user['_id'], addresses)
        return addresses

    def update_address(self, uid, address_id, data):
        oid = Database.parse_id(address_id)
        user = self.get_by_uid(uid)
        addresses = list(user.get('shippingAddresses') or [])
        address = _find_address(addresses, oid)

        for field in ('addressName',) + ADDRESS_FIELDS:
            if field in data:
                address[field] = data[field]

        if 'isDefault' in data:
            if data['isDefault']:
                _clear_default(addresses)
            address['isDefault'] = bool(data['isDefault'])

        self._save_addresses(user['_id'], addresses)
        return addresses

    def delete_address(self, uid, address_id):
        """Remove an address; if no default is left the first one takes over"""
        oid = Database.parse_id(address_id)
        user = self.get_by_uid(uid)
        addresses = list(user.get('shippingAddresses') or [])
        address = _find_address(addresses, oid)

        addresses.remove(address)
        if addresses and not any(a.get('isDefault') for a in addresses):
            addresses[0]['isDefault'] = True

        self._save_addresses(user['_id'], addresses)
        return addresses

    def _save_addresses(self, user_id, addresses):
        self.collection.update_one(
            {'_id': user_id},
            {'$set': {'shippingAddresses': addresses, 'updatedAt': datetime.now()}},
        )

    # -- wishlist ----------------------------------------------------------

    def get_wishlist(self, uid):
        user = self.get_by_uid(uid)
        return self._populate(user.get('wishlist') or [])

    def add_to_wishlist(self, uid, product_id):
        oid = Database.parse_id(product_id)
        user = self.get_by_uid(uid)

        if self.products.find_one({'_id': oid}) is None:
            raise NotFound('Product not found.')
        if oid in (user.get('wishlist') or []):
            raise Conflict('Product already in wishlist.')

        self.collection.update_one({'_id': user['_id']}, {'$push': {'wishlist': oid}})
        return self.get_wishlist(uid)

    def remove_from_wishlist(self, uid, product_id):
        oid = Database.parse_id(product_id)
        user = self.get_by_uid(uid)

        if oid not in (user.get('wishlist') or []):
            raise NotFound('Product not found in wishlist.')

        self.collection.update_one({'_id': user['_id']}, {'$pull': {'wishlist': oid}})
        return self.get_wishlist(uid)

    def _populate(self, product_ids):
        """Wishlist ids as product documents, dropping deleted products"""
        found = fetch_by_ids(self.products, product_ids)
        return [found[oid] for oid in product_ids if oid in found]

    # -- administration ----------------------------------------------------

    def list_users(self):
        """All users without their embedded lists"""
        projection = {'shippingAddresses': 0, 'wishlist': 0, 'orders': 0}
        return [serialize_document(doc) for doc in self.collection.find({}, projection)]

    def set_role(self, user_id, role, acting_uid):
        if role not in ROLES:
            raise Invalid('Invalid role provided.')

        oid = Database.parse_id(user_id)
        user = self.collection.find_one({'_id': oid})
        if user is None:
            raise UserNotFound()
        if user['firebaseUid'] == acting_uid and role != 'admin':
            raise Forbidden('Cannot demote yourself.')

        return self.collection.find_one_and_update(
            {'_id': oid},
            {'$set': {'role': role, 'updatedAt': datetime.now()}},
            return_document=ReturnDocument.AFTER,
        )

    def delete_user(self, user_id, acting_uid):
        oid = Database.parse_id(user_id)
        user = self.collection.find_one({'_id': oid})
        if user is None:
            raise UserNotFound()
        if user['firebaseUid'] == acting_uid:
            raise Forbidden('Cannot delete your own admin account.')

        self.collection.delete_one({'_id': oid})
        return user


def _find_address(addresses, oid):
    for address in addresses:
        if address.get('_id') == oid:
            return address
    raise NotFound('Shipping address not found.')


def _clear_default(addresses):
    for address in addresses:
        address['isDefault'] = False
