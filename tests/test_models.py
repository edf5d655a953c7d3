"""Tests for the per-user persistence models against an in-memory MongoDB."""

from datetime import datetime

import pytest

from lexaid.config.database import db_instance
from lexaid.models.case import Case
from lexaid.models.clause import Clause
from lexaid.models.draft import Draft
from lexaid.utils.errors import NotFoundError, ServiceUnavailableError, ValidationError

OWNER = 'owner-1'
OTHER = 'owner-2'


# ── Drafts ────────────────────────────────────────────────────────────────


def test_draft_create_and_list_newest_first(app):
    first = Draft.create(OWNER, 'Affidavit', 'Affidavit - 01/05/2024', 'I, Ada, make oath...')
    second = Draft.create(OWNER, 'Bail Application', 'Bail', 'Motion for bail')

    drafts = Draft.find_by_user_id(OWNER)

    assert [d.id for d in drafts] == [second.id, first.id]
    assert drafts[1].content == 'I, Ada, make oath...'
    assert drafts[1].document_type == 'Affidavit'
    assert drafts[1].created_at == first.created_at


def test_draft_requires_content(app):
    with pytest.raises(ValidationError):
        Draft.create(OWNER, 'Affidavit', 'Empty', '')


def test_draft_update_moves_to_top(app):
    older = Draft.create(OWNER, 'Affidavit', 'Older', 'one')
    Draft.create(OWNER, 'Affidavit', 'Newer', 'two')

    Draft.update_by_id(older.id, OWNER, {'content': 'one, revised'})

    drafts = Draft.find_by_user_id(OWNER)
    assert drafts[0].id == older.id
    assert drafts[0].content == 'one, revised'


def test_draft_update_ignores_immutable_fields(app):
    draft = Draft.create(OWNER, 'Affidavit', 'Title', 'text')

    updated = Draft.update_by_id(draft.id, OWNER, {'user_id': OTHER, 'created_at': None, 'title': 'New'})

    assert updated.user_id == OWNER
    assert updated.created_at == draft.created_at
    assert updated.title == 'New'


def test_draft_update_rejects_empty_content(app):
    draft = Draft.create(OWNER, 'Affidavit', 'Title', 'text')

    with pytest.raises(ValidationError):
        Draft.update_by_id(draft.id, OWNER, {'content': ''})


def test_draft_delete(app):
    draft = Draft.create(OWNER, 'Affidavit', 'Title', 'text')

    Draft.delete_by_id(draft.id, OWNER)

    assert Draft.find_by_id(draft.id, OWNER) is None
    with pytest.raises(NotFoundError):
        Draft.delete_by_id(draft.id, OWNER)


def test_drafts_are_isolated_per_owner(app):
    draft = Draft.create(OWNER, 'Affidavit', 'Mine', 'text')

    assert Draft.find_by_user_id(OTHER) == []
    assert Draft.find_by_id(draft.id, OTHER) is None
    with pytest.raises(NotFoundError):
        Draft.update_by_id(draft.id, OTHER, {'title': 'Stolen'})
    with pytest.raises(NotFoundError):
        Draft.delete_by_id(draft.id, OTHER)
    assert Draft.find_by_id(draft.id, OWNER).title == 'Mine'


def test_malformed_id_is_not_found(app):
    assert Draft.find_by_id('not-an-object-id', OWNER) is None
    with pytest.raises(NotFoundError):
        Draft.update_by_id('not-an-object-id', OWNER, {'title': 'x'})


def test_find_with_limit(app):
    for i in range(3):
        Draft.create(OWNER, 'Affidavit', f'Draft {i}', 'text')

    drafts = Draft.find_by_user_id(OWNER, limit=2)

    assert [d.title for d in drafts] == ['Draft 2', 'Draft 1']


# ── Clauses ───────────────────────────────────────────────────────────────


def test_clause_defaults_to_general_category(app):
    clause = Clause.create(OWNER, 'Jurisdiction', 'This Honourable Court has jurisdiction...')
    assert clause.category == 'General'


def test_clause_requires_title_and_content(app):
    with pytest.raises(ValidationError):
        Clause.create(OWNER, '  ', 'content')
    with pytest.raises(ValidationError):
        Clause.create(OWNER, 'Title', '')


def test_clause_updated_twice_keeps_content_and_advances_timestamp(app):
    clause = Clause.create(OWNER, 'Costs', 'Costs follow the event.', 'Remedies')

    first = Clause.update_by_id(clause.id, OWNER, {'content': 'Costs follow the event.'})
    second = Clause.update_by_id(clause.id, OWNER, {'content': 'Costs follow the event.'})

    assert second.content == 'Costs follow the event.'
    assert second.category == 'Remedies'
    assert clause.last_modified < first.last_modified < second.last_modified


def test_clause_blank_category_resets_to_general(app):
    clause = Clause.create(OWNER, 'Costs', 'text', 'Remedies')

    updated = Clause.update_by_id(clause.id, OWNER, {'category': ''})

    assert updated.category == 'General'


# ── Cases ─────────────────────────────────────────────────────────────────


def test_case_create_defaults(app):
    case = Case.create(OWNER, {'title': 'State v. Okafor', 'case_number': 'FHC/L/CS/1/2024'})

    assert case.status == 'Open'
    assert case.priority is None
    assert case.related_document_ids == []


def test_case_create_ignores_supplied_related_documents(app):
    case = Case.create(OWNER, {'title': 'State v. Okafor', 'related_document_ids': ['x']})
    assert case.related_document_ids == []


def test_case_requires_title(app):
    with pytest.raises(ValidationError):
        Case.create(OWNER, {'case_number': '123'})


def test_case_rejects_unknown_status_and_priority(app):
    with pytest.raises(ValidationError):
        Case.create(OWNER, {'title': 'A', 'status': 'Won'})
    with pytest.raises(ValidationError):
        Case.create(OWNER, {'title': 'A', 'priority': 'Urgent'})


def test_case_update_parses_adjournment_date(app):
    case = Case.create(OWNER, {'title': 'A'})

    updated = Case.update_by_id(case.id, OWNER, {
        'next_adjournment_date': '2024-07-15',
        'status': 'Adjourned',
        'priority': 'High',
    })

    assert updated.next_adjournment_date == datetime(2024, 7, 15)
    assert updated.status == 'Adjourned'
    assert updated.priority == 'High'
    assert updated.to_dict()['next_adjournment_date'] == '2024-07-15T00:00:00'


def test_case_update_rejects_bad_date(app):
    case = Case.create(OWNER, {'title': 'A'})
    with pytest.raises(ValidationError):
        Case.update_by_id(case.id, OWNER, {'next_adjournment_date': 'next tuesday'})


def test_case_filters_by_status_and_search(app):
    Case.create(OWNER, {'title': 'State v. Okafor', 'client_name': 'Chidi Okafor'})
    Case.create(OWNER, {'title': 'Bello v. Union Bank', 'status': 'Closed', 'case_number': 'LD/22/2023'})
    Case.create(OTHER, {'title': 'Okafor Estate'})

    assert [c.title for c in Case.find_by_user_id(OWNER, status='Closed')] == ['Bello v. Union Bank']
    assert len(Case.find_by_user_id(OWNER, status='all')) == 2
    assert [c.title for c in Case.find_by_user_id(OWNER, search='chidi')] == ['State v. Okafor']
    assert [c.title for c in Case.find_by_user_id(OWNER, search='ld/22')] == ['Bello v. Union Bank']


def test_case_limit_applies_after_filters(app):
    Case.create(OWNER, {'title': 'Closed one', 'status': 'Closed'})
    Case.create(OWNER, {'title': 'Closed two', 'status': 'Closed'})
    for i in range(3):
        Case.create(OWNER, {'title': f'Open {i}'})

    closed = Case.find_by_user_id(OWNER, limit=2, status='Closed')
    searched = Case.find_by_user_id(OWNER, limit=2, search='closed')

    assert [c.title for c in closed] == ['Closed two', 'Closed one']
    assert [c.title for c in searched] == ['Closed two', 'Closed one']


def test_case_search_is_literal(app):
    Case.create(OWNER, {'title': 'Suit (No. 1)'})
    Case.create(OWNER, {'title': 'Suit No 2'})

    assert [c.title for c in Case.find_by_user_id(OWNER, search='(no. 1)')] == ['Suit (No. 1)']


def test_link_draft_is_idempotent(app):
    case = Case.create(OWNER, {'title': 'State v. Okafor'})
    draft = Draft.create(OWNER, 'Bail Application', 'Bail', 'text')

    Case.link_draft(case.id, OWNER, draft.id)
    linked = Case.link_draft(case.id, OWNER, draft.id)

    assert linked.related_document_ids == [draft.id]


def test_link_draft_missing_case(app):
    with pytest.raises(NotFoundError):
        Case.link_draft('5f0000000000000000000000', OWNER, 'draft-id')


def test_link_draft_other_owner(app):
    case = Case.create(OWNER, {'title': 'State v. Okafor'})
    with pytest.raises(NotFoundError):
        Case.link_draft(case.id, OTHER, 'draft-id')
    assert Case.find_by_id(case.id, OWNER).related_document_ids == []


# ── Database ──────────────────────────────────────────────────────────────


def test_unconfigured_database_is_unavailable():
    db_instance.close()
    with pytest.raises(ServiceUnavailableError):
        Draft.find_by_user_id(OWNER)
