from lexaid.models.base import OwnedRecord, isoformat
from lexaid.utils.errors import ValidationError
from lexaid.utils.timestamps import server_timestamp


class Draft(OwnedRecord):
    collection_name = 'drafts'
    updatable_fields = ('document_type', 'title', 'content')

    def __init__(self, user_id, document_type, title, content, _id=None,
                 created_at=None, last_modified=None):
        self.id = str(_id) if _id else None
        self.user_id = user_id
        self.document_type = document_type
        self.title = title
        self.content = content
        self.created_at = created_at
        self.last_modified = last_modified

    def save(self):
        """Insert the draft, stamping owner timestamps"""
        now = server_timestamp()
        self.created_at = self.created_at or now
        self.last_modified = now
        draft_data = {
            'user_id': self.user_id,
            'document_type': self.document_type,
            'title': self.title,
            'content': self.content,
            'created_at': self.created_at,
            'last_modified': self.last_modified
        }

        result = self._collection().insert_one(draft_data)
        self.id = str(result.inserted_id)
        return self

    @classmethod
    def create(cls, user_id, document_type, title, content):
        if not content:
            raise ValidationError("There is no document content to save.")
        return cls(user_id, document_type, title, content).save()

    @classmethod
    def clean_update(cls, data):
        updates = super().clean_update(data)
        if 'content' in updates and not updates['content']:
            raise ValidationError("Draft content cannot be empty.")
        return updates

    @classmethod
    def from_document(cls, data):
        return cls(
            user_id=data['user_id'],
            document_type=data.get('document_type', ''),
            title=data.get('title', ''),
            content=data.get('content', ''),
            _id=data['_id'],
            created_at=data.get('created_at'),
            last_modified=data.get('last_modified')
        )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'document_type': self.document_type,
            'title': self.title,
            'content': self.content,
            'created_at': isoformat(self.created_at),
            'last_modified': isoformat(self.last_modified)
        }
