import re
from enum import Enum

from lexaid.models.base import OwnedRecord, isoformat, to_object_id
from lexaid.utils.errors import NotFoundError, ValidationError
from lexaid.utils.timestamps import parse_date, server_timestamp


class CaseStatus(str, Enum):
    OPEN = 'Open'
    PENDING = 'Pending'
    ADJOURNED = 'Adjourned'
    CLOSED = 'Closed'


class CasePriority(str, Enum):
    HIGH = 'High'
    MEDIUM = 'Medium'
    LOW = 'Low'


def _enum_value(enum_cls, value, label):
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{value}'. Expected one of: {allowed}.")


class Case(OwnedRecord):
    collection_name = 'cases'
    updatable_fields = (
        'title', 'case_number', 'court', 'client_name', 'opponent_name', 'parties',
        'status', 'priority', 'next_adjournment_date', 'case_notes', 'related_document_ids'
    )

    def __init__(self, user_id, title, case_number=None, court=None, client_name=None,
                 opponent_name=None, parties=None, status=CaseStatus.OPEN.value, priority=None,
                 next_adjournment_date=None, case_notes=None, related_document_ids=None,
                 _id=None, created_at=None, last_modified=None):
        self.id = str(_id) if _id else None
        self.user_id = user_id
        self.title = title
        self.case_number = case_number
        self.court = court
        self.client_name = client_name
        self.opponent_name = opponent_name
        self.parties = parties
        self.status = status  # Open, Pending, Adjourned, Closed
        self.priority = priority  # High, Medium, Low
        self.next_adjournment_date = next_adjournment_date
        self.case_notes = case_notes
        self.related_document_ids = related_document_ids or []
        self.created_at = created_at
        self.last_modified = last_modified

    def save(self):
        """Insert the case with an empty linked-documents list"""
        now = server_timestamp()
        self.created_at = self.created_at or now
        self.last_modified = now
        case_data = {
            'user_id': self.user_id,
            'title': self.title,
            'case_number': self.case_number,
            'court': self.court,
            'client_name': self.client_name,
            'opponent_name': self.opponent_name,
            'parties': self.parties,
            'status': self.status,
            'priority': self.priority,
            'next_adjournment_date': self.next_adjournment_date,
            'case_notes': self.case_notes,
            'related_document_ids': self.related_document_ids,
            'created_at': self.created_at,
            'last_modified': self.last_modified
        }

        result = self._collection().insert_one(case_data)
        self.id = str(result.inserted_id)
        return self

    @classmethod
    def create(cls, user_id, case_data):
        fields = cls.clean_update(case_data)
        if not (fields.get('title') or '').strip():
            raise ValidationError("Case title is required.")
        fields.pop('related_document_ids', None)
        fields.setdefault('status', CaseStatus.OPEN.value)
        return cls(user_id=user_id, **fields).save()

    @classmethod
    def clean_update(cls, data):
        updates = super().clean_update(data)

        if 'title' in updates and not (updates['title'] or '').strip():
            raise ValidationError("Case title is required.")
        if 'status' in updates:
            updates['status'] = _enum_value(CaseStatus, updates['status'], 'status')
        if 'priority' in updates:
            if updates['priority']:
                updates['priority'] = _enum_value(CasePriority, updates['priority'], 'priority')
            else:
                updates['priority'] = None
        if 'next_adjournment_date' in updates:
            updates['next_adjournment_date'] = parse_date(updates['next_adjournment_date'])
        if 'related_document_ids' in updates:
            ids = updates['related_document_ids'] or []
            updates['related_document_ids'] = list(dict.fromkeys(str(i) for i in ids))

        return updates

    @classmethod
    def find_by_user_id(cls, user_id, limit=None, status=None, search=None):
        """Find the owner's cases, optionally filtered by status and a search term.

        The search term matches title, case number or client name,
        ignoring case. ``limit`` applies after filtering.
        """
        query = {}
        if status and status != 'all':
            query['status'] = _enum_value(CaseStatus, status, 'status')

        term = (search or '').strip()
        if term:
            pattern = {'$regex': re.escape(term), '$options': 'i'}
            query['$or'] = [{'title': pattern}, {'case_number': pattern}, {'client_name': pattern}]

        return super().find_by_user_id(user_id, limit=limit, query=query)

    @classmethod
    def link_draft(cls, case_id, user_id, draft_id):
        """Append a draft id to the case's linked documents, at most once"""
        object_id = to_object_id(case_id)
        if object_id is None:
            raise NotFoundError("Case not found.")

        draft_id = str(draft_id)
        collection = cls._collection()
        collection.update_one(
            {'_id': object_id, 'user_id': user_id, 'related_document_ids': {'$ne': draft_id}},
            {
                '$push': {'related_document_ids': draft_id},
                '$set': {'last_modified': server_timestamp()}
            }
        )

        case = cls.find_by_id(object_id, user_id)
        if case is None:
            raise NotFoundError("Case not found.")
        return case

    @classmethod
    def from_document(cls, data):
        return cls(
            user_id=data['user_id'],
            title=data.get('title', ''),
            case_number=data.get('case_number'),
            court=data.get('court'),
            client_name=data.get('client_name'),
            opponent_name=data.get('opponent_name'),
            parties=data.get('parties'),
            status=data.get('status', CaseStatus.OPEN.value),
            priority=data.get('priority'),
            next_adjournment_date=data.get('next_adjournment_date'),
            case_notes=data.get('case_notes'),
            related_document_ids=data.get('related_document_ids', []),
            _id=data['_id'],
            created_at=data.get('created_at'),
            last_modified=data.get('last_modified')
        )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'case_number': self.case_number,
            'court': self.court,
            'client_name': self.client_name,
            'opponent_name': self.opponent_name,
            'parties': self.parties,
            'status': self.status,
            'priority': self.priority,
            'next_adjournment_date': isoformat(self.next_adjournment_date),
            'case_notes': self.case_notes,
            'related_document_ids': self.related_document_ids,
            'created_at': isoformat(self.created_at),
            'last_modified': isoformat(self.last_modified)
        }
