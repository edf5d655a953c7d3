from flask import Blueprint, jsonify, request
from flask_login import current_user

from lexaid.models.clause import Clause
from lexaid.utils.auth_middleware import login_required_api, validate_json_data

clauses_bp = Blueprint('clauses', __name__)


@clauses_bp.route('', methods=['GET'])
@login_required_api
def get_clauses():
    """Get the current user's clause bank"""
    clauses = Clause.find_by_user_id(current_user.id)
    return jsonify({
        'clauses': [clause.to_dict() for clause in clauses],
        'total': len(clauses)
    }), 200


@clauses_bp.route('', methods=['POST'])
@login_required_api
@validate_json_data(['title', 'content'])
def add_clause():
    data = request.get_json()
    clause = Clause.create(current_user.id, data['title'], data['content'], data.get('category'))
    return jsonify({
        'message': 'New clause saved successfully.',
        'clause': clause.to_dict()
    }), 201


@clauses_bp.route('/<clause_id>', methods=['PUT'])
@login_required_api
def update_clause(clause_id):
    clause = Clause.update_by_id(clause_id, current_user.id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Clause saved successfully.',
        'clause': clause.to_dict()
    }), 200


@clauses_bp.route('/<clause_id>', methods=['DELETE'])
@login_required_api
def delete_clause(clause_id):
    Clause.delete_by_id(clause_id, current_user.id)
    return jsonify({'message': 'The clause has been successfully deleted.'}), 200
