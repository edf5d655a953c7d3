from datetime import date

from flask import Blueprint, jsonify, request
from flask_login import current_user

from lexaid.config.documents import get_document_type
from lexaid.models.case import Case
from lexaid.models.draft import Draft
from lexaid.utils.auth_middleware import login_required_api, validate_json_data
from lexaid.utils.errors import NotFoundError, ValidationError

drafts_bp = Blueprint('drafts', __name__)


def default_draft_title(document_name, on_date=None):
    """e.g. "Bail Application - 01/05/2024" """
    on_date = on_date or date.today()
    return f"{document_name} - {on_date.strftime('%d/%m/%Y')}"


@drafts_bp.route('', methods=['GET'])
@login_required_api
def get_drafts():
    """Get all drafts for the current user, newest first"""
    drafts = Draft.find_by_user_id(current_user.id)
    return jsonify({
        'drafts': [draft.to_dict() for draft in drafts],
        'total': len(drafts)
    }), 200


@drafts_bp.route('', methods=['POST'])
@login_required_api
@validate_json_data(['content'])
def save_draft():
    """Save drafted text.

    ``document_type_id`` names a catalog entry; the title defaults to the
    entry's name and today's date. ``case_id`` also links the new draft
    to one of the user's cases.
    """
    data = request.get_json()

    document_type = get_document_type(data.get('document_type_id'))
    if document_type is not None:
        document_name = document_type.name
    else:
        document_name = (data.get('document_type') or '').strip()
    if not document_name:
        raise ValidationError("A document type is required to save a draft.")

    case = None
    if data.get('case_id'):
        case = Case.find_by_id(data['case_id'], current_user.id)
        if case is None:
            raise NotFoundError("Case not found.")

    title = (data.get('title') or '').strip() or default_draft_title(document_name)
    draft = Draft.create(current_user.id, document_name, title, data['content'])

    response = {
        'message': 'Your document draft has been saved successfully.',
        'draft': draft.to_dict()
    }
    if case is not None:
        response['case'] = Case.link_draft(case.id, current_user.id, draft.id).to_dict()

    return jsonify(response), 201


@drafts_bp.route('/<draft_id>', methods=['GET'])
@login_required_api
def get_draft(draft_id):
    draft = Draft.find_by_id(draft_id, current_user.id)
    if not draft:
        raise NotFoundError("Draft not found.")
    return jsonify(draft.to_dict()), 200


@drafts_bp.route('/<draft_id>', methods=['PUT'])
@login_required_api
def update_draft(draft_id):
    draft = Draft.update_by_id(draft_id, current_user.id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Draft updated successfully',
        'draft': draft.to_dict()
    }), 200


@drafts_bp.route('/<draft_id>', methods=['DELETE'])
@login_required_api
def delete_draft(draft_id):
    Draft.delete_by_id(draft_id, current_user.id)
    return jsonify({'message': 'The draft has been successfully deleted.'}), 200
