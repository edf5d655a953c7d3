import logging

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from lexaid.config.plans import PLANS, get_plan
from lexaid.models.user import User
from lexaid.utils.auth_middleware import login_required_api, validate_json_data
from lexaid.utils.errors import PaymentError, ValidationError
from lexaid.utils.payments import confirm_callback

logger = logging.getLogger(__name__)

billing_bp = Blueprint('billing', __name__)


@billing_bp.route('/plans', methods=['GET'])
@login_required_api
def get_plans():
    """Plans on offer, marking the user's current one"""
    plans = []
    for plan in PLANS:
        data = plan.to_dict()
        data['current'] = plan.id == current_user.subscription_plan_id
        plans.append(data)

    return jsonify({
        'plans': plans,
        'subscription': {
            'plan': current_user.subscription_plan,
            'status': current_user.subscription_status,
            'flutterwave_public_key': current_app.config.get('FLUTTERWAVE_PUBLIC_KEY')
        }
    }), 200


@billing_bp.route('/callback', methods=['POST'])
@login_required_api
@validate_json_data(['status', 'plan_id'])
def payment_callback():
    """Record the outcome of a Flutterwave checkout.

    Only a successful payment changes the stored subscription.
    """
    data = request.get_json()

    plan = get_plan(data['plan_id'])
    if plan is None or not plan.purchasable:
        raise ValidationError(f"Unknown plan: {data['plan_id']}")

    try:
        transaction_id = confirm_callback(data, plan, current_app.config.get('FLUTTERWAVE_SECRET_KEY'))
        if User.find_by_subscription_id(transaction_id) is not None:
            raise PaymentError("This payment has already been used for a subscription.")
    except PaymentError as e:
        logger.info("Payment callback for user %s rejected: %s", current_user.id, e.message)
        return jsonify({'error': e.message, 'updated': False}), e.status_code

    user = User.update_subscription(
        current_user.id,
        plan_name=plan.name,
        plan_id=plan.id,
        transaction_id=transaction_id,
        monthly=plan.monthly
    )
    logger.info("User %s subscribed to %s (transaction %s)", user.id, plan.id, transaction_id)

    return jsonify({
        'message': f'You are now subscribed to {plan.name}.',
        'updated': True,
        'user': user.to_dict()
    }), 200
