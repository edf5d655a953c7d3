from lexaid.models.base import OwnedRecord, isoformat
from lexaid.utils.errors import ValidationError
from lexaid.utils.timestamps import server_timestamp

DEFAULT_CATEGORY = 'General'


class Clause(OwnedRecord):
    collection_name = 'clauses'
    updatable_fields = ('title', 'content', 'category')

    def __init__(self, user_id, title, content, category=None, _id=None,
                 created_at=None, last_modified=None):
        self.id = str(_id) if _id else None
        self.user_id = user_id
        self.title = title
        self.content = content
        self.category = category or DEFAULT_CATEGORY
        self.created_at = created_at
        self.last_modified = last_modified

    def save(self):
        """Save clause to database"""
        now = server_timestamp()
        self.created_at = self.created_at or now
        self.last_modified = now
        clause_data = {
            'user_id': self.user_id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'created_at': self.created_at,
            'last_modified': self.last_modified
        }

        result = self._collection().insert_one(clause_data)
        self.id = str(result.inserted_id)
        return self

    @classmethod
    def create(cls, user_id, title, content, category=None):
        if not (title or '').strip() or not (content or '').strip():
            raise ValidationError("Title and content are required.")
        return cls(user_id, title, content, category).save()

    @classmethod
    def clean_update(cls, data):
        updates = super().clean_update(data)
        for key in ('title', 'content'):
            if key in updates and not (updates[key] or '').strip():
                raise ValidationError("Title and content are required.")
        if 'category' in updates and not updates['category']:
            updates['category'] = DEFAULT_CATEGORY
        return updates

    @classmethod
    def from_document(cls, data):
        return cls(
            user_id=data['user_id'],
            title=data.get('title', ''),
            content=data.get('content', ''),
            category=data.get('category'),
            _id=data['_id'],
            created_at=data.get('created_at'),
            last_modified=data.get('last_modified')
        )

    def to_dict(self):
        """Convert clause to dictionary"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'created_at': isoformat(self.created_at),
            'last_modified': isoformat(self.last_modified)
        }
