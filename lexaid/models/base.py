from bson import ObjectId
from bson.errors import InvalidId

from lexaid.config.database import db_instance
from lexaid.utils.errors import NotFoundError
from lexaid.utils.timestamps import server_timestamp

# Never written through an update, whatever the caller sends
IMMUTABLE_FIELDS = ('id', '_id', 'user_id', 'created_at')


def to_object_id(record_id):
    """Parse a record id, returning None for anything that is not an ObjectId"""
    if isinstance(record_id, ObjectId):
        return record_id
    try:
        return ObjectId(str(record_id))
    except (InvalidId, TypeError):
        return None


def isoformat(value):
    return value.isoformat() if value is not None else None


class OwnedRecord:
    """CRUD shared by every per-user collection.

    Every query filters on ``user_id`` so a record is only ever reachable
    by its owner. Subclasses set ``collection_name`` and ``updatable_fields``
    and implement ``from_document``.
    """
    collection_name = None
    updatable_fields = ()

    @classmethod
    def _collection(cls):
        return db_instance.get_db()[cls.collection_name]

    @classmethod
    def from_document(cls, data):
        raise NotImplementedError

    @classmethod
    def find_by_user_id(cls, user_id, limit=None, query=None):
        """Find records by owner, most recently modified first.

        ``query`` adds Mongo filters on top of the owner filter.
        """
        cursor = cls._collection().find(dict(query or {}, user_id=user_id)).sort('last_modified', -1)

        if limit:
            cursor = cursor.limit(limit)

        return [cls.from_document(data) for data in cursor]

    @classmethod
    def find_by_id(cls, record_id, user_id):
        """Find one of the owner's records. Returns None if not found."""
        object_id = to_object_id(record_id)
        if object_id is None:
            return None

        data = cls._collection().find_one({'_id': object_id, 'user_id': user_id})
        return cls.from_document(data) if data else None

    @classmethod
    def clean_update(cls, data):
        """Keep only fields an update may change"""
        return {
            key: value for key, value in (data or {}).items()
            if key in cls.updatable_fields and key not in IMMUTABLE_FIELDS
        }

    @classmethod
    def update_by_id(cls, record_id, user_id, data):
        """Merge partial fields into the owner's record and refresh last_modified"""
        object_id = to_object_id(record_id)
        if object_id is None:
            raise NotFoundError(f"{cls.__name__} not found.")

        updates = cls.clean_update(data)
        updates['last_modified'] = server_timestamp()

        result = cls._collection().update_one(
            {'_id': object_id, 'user_id': user_id},
            {'$set': updates}
        )
        if result.matched_count == 0:
            raise NotFoundError(f"{cls.__name__} not found.")

        return cls.find_by_id(object_id, user_id)

    @classmethod
    def delete_by_id(cls, record_id, user_id):
        object_id = to_object_id(record_id)
        if object_id is None:
            raise NotFoundError(f"{cls.__name__} not found.")

        result = cls._collection().delete_one({'_id': object_id, 'user_id': user_id})
        if result.deleted_count == 0:
            raise NotFoundError(f"{cls.__name__} not found.")
