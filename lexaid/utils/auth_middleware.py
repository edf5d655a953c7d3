from functools import wraps

from flask import jsonify, request
from flask_login import current_user


def login_required_api(f):
    """Like flask_login.login_required, but answers 401 JSON instead of redirecting"""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated


def validate_json_data(required_fields):
    """Reject requests whose JSON body is missing any of the required fields"""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({'error': 'Request body must be JSON'}), 400

            missing = [field for field in required_fields if field not in data]
            if missing:
                return jsonify({'error': f"Missing required fields: {', '.join(missing)}"}), 400

            return f(*args, **kwargs)
        return decorated
    return decorator
