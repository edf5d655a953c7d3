import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_user, logout_user

from lexaid.models.user import User
from lexaid.utils.auth_middleware import login_required_api, validate_json_data
from lexaid.utils.errors import ValidationError

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

MIN_PASSWORD_LENGTH = 6


@auth_bp.route('/register', methods=['POST'])
@validate_json_data(['email', 'password'])
def register():
    """Register a new user"""
    data = request.get_json()
    email = (data['email'] or '').lower().strip()
    password = data['password'] or ''
    display_name = (data.get('display_name') or '').strip()

    # Validate input
    if not email or '@' not in email:
        raise ValidationError('A valid email address is required')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

    # Check if user already exists
    if User.find_by_email(email):
        raise ValidationError('User with this email already exists')

    user = User.create_profile(email, password, display_name=display_name)
    login_user(user, remember=True)
    logger.info("Registered user %s", user.id)

    return jsonify({
        'message': 'Registration successful',
        'user': user.to_dict()
    }), 201


@auth_bp.route('/login', methods=['POST'])
@validate_json_data(['email', 'password'])
def login():
    """Login user"""
    data = request.get_json()
    email = (data['email'] or '').lower().strip()

    user = User.find_by_email(email)
    if not user or not user.check_password(data['password'] or ''):
        return jsonify({'error': 'Invalid email or password'}), 401

    user.ensure_subscription()
    login_user(user, remember=bool(data.get('remember', False)))

    return jsonify({
        'message': 'Login successful',
        'user': user.to_dict()
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required_api
def logout():
    """Logout user"""
    logout_user()
    return jsonify({'message': 'Logout successful'}), 200


@auth_bp.route('/profile', methods=['GET'])
@login_required_api
def get_profile():
    """Get user profile"""
    return jsonify({'user': current_user.to_dict()}), 200


@auth_bp.route('/profile', methods=['PUT'])
@login_required_api
def update_profile():
    """Update profile settings and notification preferences"""
    data = request.get_json(silent=True) or {}

    updates = User.clean_settings(data)
    if 'email' in data:
        new_email = (data['email'] or '').lower().strip()
        if current_user.check_new_email(new_email):
            updates['email'] = new_email

    user = User.update_profile(current_user.id, updates)

    return jsonify({
        'message': 'Profile updated successfully',
        'user': user.to_dict()
    }), 200


@auth_bp.route('/change-password', methods=['POST'])
@login_required_api
@validate_json_data(['current_password', 'new_password'])
def change_password():
    """Change user password"""
    data = request.get_json()

    if not current_user.check_password(data['current_password'] or ''):
        raise ValidationError('Current password is incorrect')

    new_password = data['new_password'] or ''
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'New password must be at least {MIN_PASSWORD_LENGTH} characters')

    current_user.change_password(new_password)

    return jsonify({'message': 'Password changed successfully'}), 200


@auth_bp.route('/check-auth', methods=['GET'])
def check_auth():
    """Check if user is authenticated"""
    if current_user.is_authenticated:
        return jsonify({
            'authenticated': True,
            'user': current_user.to_dict()
        }), 200
    return jsonify({'authenticated': False}), 200
