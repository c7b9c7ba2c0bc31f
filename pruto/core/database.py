"""
Document store access for Pruto.

Wraps a Flask-PyMongo connection (or an injected client) and provides the
ObjectId helpers the feature modules share.
"""

from datetime import datetime, date

from bson import ObjectId
from bson.errors import InvalidId
from flask_pymongo import PyMongo

from .config import Config
from .errors import Invalid, InvalidFieldName


class InvalidObjectId(Invalid):
    """Raised when a path identifier is not a valid ObjectId"""

    def __init__(self, value):
        super().__init__('Invalid ID format.')
        self.value = value


class Database:
    """MongoDB handle bound to a Flask app.

    A client can be injected (tests pass a mongomock client); otherwise a
    Flask-PyMongo connection is opened from MONGO_URI.
    """

    def __init__(self, app=None, client=None):
        self.mongo = None
        self.db = None
        if app is not None:
            self.init_app(app, client=client)

    def init_app(self, app, client=None):
        db_name = app.config.get('MONGO_DBNAME', 'pruto')

        if client is not None:
            self.db = client[db_name]
            return

        uri = app.config.get('MONGO_URI') or Config.MONGO_URI
        self.mongo = PyMongo(app, uri=uri)
        # URI without a database path leaves mongo.db unset
        if self.mongo.db is not None:
            self.db = self.mongo.db
        else:
            self.db = self.mongo.cx[db_name]

    def collection(self, name):
        return self.db[name]

    def ping(self):
        """Round trip to the server, raises on connectivity loss"""
        return self.db.command('ping')

    @staticmethod
    def parse_id(value):
        """Convert a string identifier into an ObjectId."""
        try:
            return ObjectId(value)
        except (InvalidId, TypeError) as e:
            raise InvalidObjectId(str(value)) from e


def serialize_document(value):
    """
    Make a stored document JSON-safe.

    ObjectId values become hex strings and datetimes become ISO strings,
    recursing through nested dicts and lists.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value


def check_field_names(data):
    """Reject top-level keys that $set would treat as paths or operators."""
    # insert_one keeps "a.b" literally while $set walks it as a path
    for key in data:
        if not isinstance(key, str) or '.' in key or key.startswith('$'):
            raise InvalidFieldName(key)


def fetch_by_ids(collection, ids):
    """Map of _id -> document for the given ids, one query"""
    ids = list(ids)
    if not ids:
        return {}
    return {doc['_id']: doc for doc in collection.find({'_id': {'$in': ids}})}
