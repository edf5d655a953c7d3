from flask import Blueprint, jsonify, request
from flask_login import current_user

from lexaid.models.case import Case
from lexaid.models.draft import Draft
from lexaid.utils.auth_middleware import login_required_api, validate_json_data
from lexaid.utils.errors import NotFoundError

cases_bp = Blueprint('cases', __name__)


@cases_bp.route('', methods=['GET'])
@login_required_api
def get_cases():
    """Get the current user's cases.

    Query parameters: ``status`` (Open, Pending, Adjourned, Closed or all)
    and ``q``, matched against title, case number and client name.
    """
    cases = Case.find_by_user_id(
        current_user.id,
        status=request.args.get('status'),
        search=request.args.get('q')
    )
    return jsonify({
        'cases': [case.to_dict() for case in cases],
        'total': len(cases)
    }), 200


@cases_bp.route('', methods=['POST'])
@login_required_api
@validate_json_data(['title'])
def add_case():
    case = Case.create(current_user.id, request.get_json())
    return jsonify({
        'message': 'New case created successfully.',
        'case': case.to_dict()
    }), 201


@cases_bp.route('/<case_id>', methods=['GET'])
@login_required_api
def get_case(case_id):
    case = Case.find_by_id(case_id, current_user.id)
    if not case:
        raise NotFoundError("Case not found.")

    data = case.to_dict()
    data['related_documents'] = [
        draft.to_dict() for draft in
        (Draft.find_by_id(draft_id, current_user.id) for draft_id in case.related_document_ids)
        if draft is not None
    ]
    return jsonify(data), 200


@cases_bp.route('/<case_id>', methods=['PUT'])
@login_required_api
def update_case(case_id):
    case = Case.update_by_id(case_id, current_user.id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Case details saved successfully.',
        'case': case.to_dict()
    }), 200


@cases_bp.route('/<case_id>', methods=['DELETE'])
@login_required_api
def delete_case(case_id):
    Case.delete_by_id(case_id, current_user.id)
    return jsonify({'message': 'The case has been successfully deleted.'}), 200


@cases_bp.route('/<case_id>/drafts/<draft_id>', methods=['POST'])
@login_required_api
def link_draft(case_id, draft_id):
    """Link one of the user's saved drafts to a case"""
    if Draft.find_by_id(draft_id, current_user.id) is None:
        raise NotFoundError("Draft not found.")

    case = Case.link_draft(case_id, current_user.id, draft_id)
    return jsonify({
        'message': 'Draft linked to case.',
        'case': case.to_dict()
    }), 200
